"""
Stub loading for scaffold generation.

Stubs are looked up through Jinja2 loaders: a project-specific custom
directory first (when enabled), then the stubs bundled with the package.
Stub text is returned raw; rendering is done by the TemplateProcessor
because stub syntax is not Jinja syntax.
"""

from pathlib import Path
from typing import List, Optional, Union

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, TemplateNotFound

from ...logging_config import get_logger
from .processor import TemplateProcessor
from .schema import ModelDefinition

logger = get_logger(__name__)

STUB_SUFFIX = ".stub"

BUNDLED_STUBS_DIR = Path(__file__).resolve().parent.parent.parent / "stubs"


class TemplateError(Exception):
    """Exception raised for stub-related errors."""

    pass


def stub_filename(stub_name: str) -> str:
    """``backend/model`` -> ``backend/model.stub``."""
    if stub_name.endswith(STUB_SUFFIX):
        return stub_name
    return f"{stub_name}{STUB_SUFFIX}"


class StubLoader:
    """Resolves stub names to stub text."""

    def __init__(
        self,
        custom_dir: Optional[Union[str, Path]] = None,
        default_dir: Optional[Union[str, Path]] = None,
    ):
        """
        Initialize stub loader.

        Args:
            custom_dir: Directory with project-specific stubs that shadow
                the defaults (ignored if it does not exist)
            default_dir: Directory with default stubs (bundled stubs if None)
        """
        self.default_dir = Path(default_dir) if default_dir else BUNDLED_STUBS_DIR
        self.custom_dir = Path(custom_dir) if custom_dir else None
        self._custom_loader = None

        loaders = []
        if self.custom_dir is not None:
            if self.custom_dir.is_dir():
                self._custom_loader = FileSystemLoader(str(self.custom_dir))
                loaders.append(self._custom_loader)
            else:
                logger.warning("Custom stubs directory not found: %s", self.custom_dir)
        loaders.append(FileSystemLoader(str(self.default_dir)))

        self._env = Environment(loader=ChoiceLoader(loaders))

    def get_stub(self, stub_name: str) -> str:
        """
        Get raw stub content by name.

        Args:
            stub_name: Stub name such as ``backend/model``

        Returns:
            Stub text

        Raises:
            TemplateError: If no loader provides the stub
        """
        filename = stub_filename(stub_name)
        try:
            source, path, _uptodate = self._env.loader.get_source(self._env, filename)
        except TemplateNotFound as e:
            raise TemplateError(f"Stub file not found: {filename}") from e

        if self.is_custom(stub_name):
            logger.info("Using custom stub: %s", path)
        else:
            logger.debug("Using default stub: %s", path)

        return source

    def is_custom(self, stub_name: str) -> bool:
        """Check whether a stub is served from the custom directory."""
        if self._custom_loader is None:
            return False
        try:
            self._custom_loader.get_source(self._env, stub_filename(stub_name))
        except TemplateNotFound:
            return False
        return True

    def has_stub(self, stub_name: str) -> bool:
        try:
            self._env.loader.get_source(self._env, stub_filename(stub_name))
        except TemplateNotFound:
            return False
        return True

    def list_stubs(self) -> List[str]:
        """List available stub names without the suffix."""
        return sorted(
            name[: -len(STUB_SUFFIX)]
            for name in self._env.loader.list_templates()
            if name.endswith(STUB_SUFFIX)
        )

    def render_stub(
        self,
        stub_name: str,
        model: ModelDefinition,
        processor: Optional[TemplateProcessor] = None,
    ) -> str:
        """Load a stub and process it for a model."""
        processor = processor or TemplateProcessor()
        return processor.process_template(self.get_stub(stub_name), model)


def create_stub_loader(config=None) -> StubLoader:
    """
    Create a stub loader from a ScaffoldConfig.

    Args:
        config: ScaffoldConfig or None for bundled stubs only

    Returns:
        Configured StubLoader
    """
    if config is None:
        return StubLoader()
    return StubLoader(custom_dir=config.custom_stubs_path())
