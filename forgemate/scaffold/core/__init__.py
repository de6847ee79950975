"""
Core scaffold components.

Provides the naming helpers, model definitions, template processor and
stub loading used by the scaffold generator.
"""

from .naming import (
    NameTransformer,
    NamingCase,
    convert_case,
    pluralize,
    singularize,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
    to_upper_snake_case,
)
from .schema import (
    AttributeDefinition,
    GenerationOptions,
    ModelDefinition,
    ModelValidationError,
    RelationshipDefinition,
    collect_warnings,
    ensure_valid,
    validate_model,
)
from .processor import TemplateProcessor, process_template
from .config import ScaffoldConfig, ConfigManager, ConfigError, load_config
from .templates import StubLoader, TemplateError, create_stub_loader
from .generator import (
    GeneratedFile,
    ScaffoldError,
    ScaffoldGenerator,
    ScaffoldResult,
    generate_scaffold,
    resolve_migration_time,
)

__all__ = [
    # Naming utilities
    "NameTransformer",
    "NamingCase",
    "convert_case",
    "pluralize",
    "singularize",
    "to_camel_case",
    "to_kebab_case",
    "to_pascal_case",
    "to_snake_case",
    "to_upper_snake_case",
    # Model definitions
    "AttributeDefinition",
    "GenerationOptions",
    "ModelDefinition",
    "ModelValidationError",
    "RelationshipDefinition",
    "collect_warnings",
    "ensure_valid",
    "validate_model",
    # Template processing
    "TemplateProcessor",
    "process_template",
    # Configuration system
    "ScaffoldConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Stub loading
    "StubLoader",
    "TemplateError",
    "create_stub_loader",
    # Generation
    "GeneratedFile",
    "ScaffoldError",
    "ScaffoldGenerator",
    "ScaffoldResult",
    "generate_scaffold",
    "resolve_migration_time",
]
