"""
Configuration management for scaffold generation.

Scaffold settings come from three layers, later ones winning: built-in
defaults, an optional JSON settings file, and explicit overrides. Editor
setting names (``laravelForgemate.useCustomStubs``) are accepted as well
as field names.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...logging_config import get_logger
from .fragments import DEFAULT_RESOURCE_IMPORT_PATH
from .naming import NamingCase, to_snake_case

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class ScaffoldConfig:
    """Settings for stub lookup and generated code style."""

    # Naming settings
    relationship_naming: str = "camel"  # camel, snake

    # Stub lookup
    use_custom_stubs: bool = False
    stubs_directory: str = "stubs/scaffold"
    project_path: Optional[str] = None

    # Frontend output
    frontend_import_path: str = DEFAULT_RESOURCE_IMPORT_PATH

    # Unrecognized settings
    custom: Dict[str, Any] = field(default_factory=dict)

    @property
    def naming_case(self) -> NamingCase:
        return NamingCase(self.relationship_naming)

    def custom_stubs_path(self) -> Optional[Path]:
        """Directory holding project-specific stubs, if enabled."""
        if not self.use_custom_stubs or not self.project_path:
            return None
        return Path(self.project_path) / self.stubs_directory


DEFAULT_CONFIG: Dict[str, Any] = {
    f.name: f.default for f in fields(ScaffoldConfig) if f.name != "custom"
}

# Editor setting names as they appear in workspace settings files
SETTING_ALIASES: Dict[str, str] = {
    "relationshipNaming": "relationship_naming",
    "useCustomStubs": "use_custom_stubs",
    "stubsDirectory": "stubs_directory",
    "laravelProjectPath": "project_path",
    "frontendImportPath": "frontend_import_path",
}

VALID_NAMING_STYLES = {"camel", "snake"}


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        self._defaults: Dict[str, Any] = dict(DEFAULT_CONFIG)

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> ScaffoldConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = self._defaults.copy()

        if config_file:
            base_config.update(self._normalize_keys(self._load_config_file(config_file)))

        if custom_config:
            base_config.update(self._normalize_keys(custom_config))

        config = self._dict_to_config(base_config)

        errors = self.validate_config(config)
        if errors:
            raise ConfigError("; ".join(errors))

        return config

    def _normalize_keys(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Map editor-style camelCase keys onto field names."""
        normalized = {}
        for key, value in config.items():
            key = key.split(".")[-1]  # "laravelForgemate.useCustomStubs"
            if key in SETTING_ALIASES:
                key = SETTING_ALIASES[key]
            elif key not in DEFAULT_CONFIG and key != "custom":
                key = to_snake_case(key)
            normalized[key] = value
        return normalized

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.info("Loaded configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> ScaffoldConfig:
        """Convert dictionary to ScaffoldConfig instance."""
        known_fields = {f.name for f in fields(ScaffoldConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return ScaffoldConfig(**config_args)

    def save_config(self, config: ScaffoldConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        config_dict.update(config_dict.pop("custom"))

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_config(self, config: ScaffoldConfig) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of validation errors
        """
        errors = []

        if config.relationship_naming not in VALID_NAMING_STYLES:
            errors.append(f"Invalid relationship_naming: {config.relationship_naming}")

        if not isinstance(config.use_custom_stubs, bool):
            errors.append(f"use_custom_stubs must be a boolean: {config.use_custom_stubs}")

        if not config.stubs_directory:
            errors.append("stubs_directory must not be empty")

        return errors


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> ScaffoldConfig:
    """
    Convenience function to load configuration.

    A fresh manager is used per call so settings are never cached
    between generation requests.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return ConfigManager().get_config(custom_config, config_file)
