"""
Scaffold generator.

Plans which stubs apply to a model, renders each one and computes the
project-relative path of the file it produces. Nothing is written to
disk here; callers decide what to do with the result.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union

import dateparser

from ...logging_config import get_logger
from ..registry import StubRegistry, StubTarget, create_default_registry
from .config import ScaffoldConfig
from .processor import TemplateProcessor, replace_tokens
from .schema import ModelDefinition, collect_warnings, ensure_valid
from .templates import StubLoader, TemplateError, create_stub_loader

logger = get_logger(__name__)

MIGRATION_TIMESTAMP_FORMAT = "%Y_%m_%d_%H%M%S"


class ScaffoldError(Exception):
    """Base exception for scaffold generation errors."""

    pass


def resolve_migration_time(value: Union[str, datetime, None] = None) -> datetime:
    """
    Resolve the moment used in migration file names.

    Args:
        value: datetime, a date string understood by dateparser
            ("2024-03-01 10:00", "yesterday"...), or None for now

    Returns:
        Resolved datetime

    Raises:
        ScaffoldError: If the string cannot be parsed
    """
    if value is None:
        return datetime.now()
    if isinstance(value, datetime):
        return value

    parsed = dateparser.parse(value)
    if parsed is None:
        raise ScaffoldError(f"Could not understand migration date: {value}")
    return parsed


@dataclass
class GeneratedFile:
    """One rendered stub and its destination."""

    stub: str
    path: str
    content: str
    layer: str
    custom_stub: bool = False


class ScaffoldResult:
    """Container for scaffold results and metadata."""

    def __init__(
        self,
        files: List[GeneratedFile],
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        self.files = files
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "ScaffoldResult":
        """Create a failed scaffold result."""
        result = cls(files=[])
        result.success = False
        result.error_message = message
        result.exception = exception
        return result

    def get_file(self, stub: str) -> Optional[GeneratedFile]:
        for generated in self.files:
            if generated.stub == stub:
                return generated
        return None


class ScaffoldGenerator:
    """Renders every applicable stub for a model definition."""

    def __init__(
        self,
        config: Optional[ScaffoldConfig] = None,
        loader: Optional[StubLoader] = None,
        registry: Optional[StubRegistry] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize generator.

        Args:
            config: Scaffold configuration (defaults if None)
            loader: Stub loader (built from config if None)
            registry: Stub targets (default Laravel layout if None)
            clock: Returns the time used for migration file names
        """
        self.config = config or ScaffoldConfig()
        self.loader = loader or create_stub_loader(self.config)
        self.registry = registry or create_default_registry()
        self.clock = clock or datetime.now
        self.processor = TemplateProcessor(
            self.config.naming_case, self.config.frontend_import_path
        )

    def plan(self, model: ModelDefinition) -> List[StubTarget]:
        """Targets to render for a model, honoring its generation options."""
        return [
            target
            for target in self.registry.targets()
            if model.options.is_enabled(target.option)
        ]

    def target_path(self, target: StubTarget, model: ModelDefinition) -> str:
        """Project-relative output path for a target."""
        tokens = self.processor.simple_variables(model)
        tokens["{{timestamp}}"] = self.clock().strftime(MIGRATION_TIMESTAMP_FORMAT)
        return replace_tokens(target.path_pattern, tokens)

    def render(self, target: StubTarget, model: ModelDefinition) -> GeneratedFile:
        content = self.loader.render_stub(target.stub, model, self.processor)
        return GeneratedFile(
            stub=target.stub,
            path=self.target_path(target, model),
            content=content,
            layer=target.layer,
            custom_stub=self.loader.is_custom(target.stub),
        )

    def generate(self, model: ModelDefinition) -> ScaffoldResult:
        """
        Generate all scaffold files for a model.

        Args:
            model: Model definition

        Returns:
            ScaffoldResult with files, warnings and metadata

        Raises:
            ModelValidationError: If the model is invalid
            ScaffoldError: If a stub cannot be loaded
        """
        ensure_valid(model)
        warnings = collect_warnings(model)

        files = []
        for target in self.plan(model):
            try:
                files.append(self.render(target, model))
            except TemplateError as e:
                raise ScaffoldError(f"Failed to render {target.stub}: {e}") from e

        logger.info("Generated %d file(s) for %s", len(files), model.name)

        metadata = {
            "model": model.name,
            "file_count": len(files),
            "stubs": [generated.stub for generated in files],
            "custom_stubs": [generated.stub for generated in files if generated.custom_stub],
            "relationship_naming": self.config.relationship_naming,
        }
        return ScaffoldResult(files, warnings, metadata)


def generate_scaffold(
    model: ModelDefinition,
    config: Optional[ScaffoldConfig] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> ScaffoldResult:
    """
    Generate a scaffold with error handling.

    Args:
        model: Model definition
        config: Scaffold configuration
        clock: Time source for migration names

    Returns:
        ScaffoldResult; ``success`` is False if generation failed
    """
    try:
        return ScaffoldGenerator(config, clock=clock).generate(model)
    except Exception as e:
        logger.error("Scaffold generation failed for %s: %s", model.name, e)
        return ScaffoldResult.error(f"Scaffold generation failed: {e}", exception=e)
