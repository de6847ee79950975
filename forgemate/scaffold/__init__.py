"""
Forgemate scaffold module

Generates Laravel and TypeScript boilerplate from model definitions.
"""

from .core import (
    ModelDefinition,
    ScaffoldConfig,
    ScaffoldGenerator,
    ScaffoldResult,
    TemplateProcessor,
    generate_scaffold,
    load_config,
    process_template,
)
from .registry import StubRegistry, StubTarget, create_default_registry


def scaffold_from_dict(data, config=None):
    """
    Generate a scaffold from a raw model definition.

    Args:
        data: Model definition dictionary (camelCase or snake_case keys)
        config: ScaffoldConfig, dict of overrides, or None for defaults

    Returns:
        ScaffoldResult with rendered files
    """
    if isinstance(config, dict):
        config = load_config(custom_config=config)

    model = ModelDefinition.from_dict(data)
    return generate_scaffold(model, config)


__all__ = [
    "ModelDefinition",
    "ScaffoldConfig",
    "ScaffoldGenerator",
    "ScaffoldResult",
    "StubRegistry",
    "StubTarget",
    "TemplateProcessor",
    "create_default_registry",
    "generate_scaffold",
    "load_config",
    "process_template",
    "scaffold_from_dict",
]
