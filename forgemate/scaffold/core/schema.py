"""
Model definition representation for scaffold generation.

Converts user-authored dictionaries (UI payloads, JSON files) into
normalized dataclasses that the template processor consumes.
"""

import json
import math
import re
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

from ...logging_config import get_logger
from .naming import to_camel_case

logger = get_logger(__name__)

MODEL_NAME_PATTERN = re.compile(r"^[A-Z][a-zA-Z0-9]*$")
ATTRIBUTE_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")

ATTRIBUTE_TYPES = (
    "string",
    "text",
    "integer",
    "bigInteger",
    "boolean",
    "date",
    "datetime",
    "time",
    "timestamp",
    "decimal",
    "float",
    "json",
    "jsonb",
    "uuid",
)

RELATIONSHIP_TYPES = ("hasOne", "hasMany", "belongsTo", "belongsToMany")

COLLECTION_RELATIONSHIPS = ("hasMany", "belongsToMany")

NUMERIC_TYPES = ("integer", "bigInteger", "decimal", "float")
JSON_TYPES = ("json", "jsonb")


class ModelValidationError(Exception):
    """Exception raised when a model definition fails validation."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key, accepting camelCase and snake_case."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass
class AttributeDefinition:
    """A single column/field of a model."""

    name: str
    type: str
    nullable: bool = False
    unique: bool = False
    unsigned: bool = False
    index: bool = False
    default: Any = None
    max_length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None

    @property
    def has_default(self) -> bool:
        return self.default is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AttributeDefinition":
        return cls(
            name=str(_pick(data, "name", default="")),
            type=str(_pick(data, "type", default="")),
            nullable=bool(_pick(data, "nullable", default=False)),
            unique=bool(_pick(data, "unique", default=False)),
            unsigned=bool(_pick(data, "unsigned", default=False)),
            index=bool(_pick(data, "index", default=False)),
            default=_pick(data, "default", "defaultValue", "default_value"),
            max_length=_pick(data, "maxLength", "max_length"),
            precision=_pick(data, "precision"),
            scale=_pick(data, "scale"),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name": self.name, "type": self.type}
        for flag in ("nullable", "unique", "unsigned", "index"):
            if getattr(self, flag):
                result[flag] = True
        if self.default is not None:
            result["default"] = self.default
        if self.max_length is not None:
            result["maxLength"] = self.max_length
        if self.precision is not None:
            result["precision"] = self.precision
        if self.scale is not None:
            result["scale"] = self.scale
        return result


@dataclass
class RelationshipDefinition:
    """An association between the model and another model."""

    type: str
    related_model: str
    foreign_key: Optional[str] = None
    local_key: Optional[str] = None
    pivot: Optional[str] = None
    pivot_foreign_key: Optional[str] = None
    pivot_related_key: Optional[str] = None

    @property
    def is_collection(self) -> bool:
        return self.type in COLLECTION_RELATIONSHIPS

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RelationshipDefinition":
        return cls(
            type=str(_pick(data, "type", default="")),
            related_model=str(_pick(data, "relatedModel", "related_model", default="")),
            foreign_key=_pick(data, "foreignKey", "foreign_key"),
            local_key=_pick(data, "localKey", "local_key"),
            pivot=_pick(data, "pivot"),
            pivot_foreign_key=_pick(data, "pivotForeignKey", "pivot_foreign_key"),
            pivot_related_key=_pick(data, "pivotRelatedKey", "pivot_related_key"),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.type, "relatedModel": self.related_model}
        optional = {
            "foreignKey": self.foreign_key,
            "localKey": self.local_key,
            "pivot": self.pivot,
            "pivotForeignKey": self.pivot_foreign_key,
            "pivotRelatedKey": self.pivot_related_key,
        }
        result.update({key: value for key, value in optional.items() if value})
        return result


@dataclass
class GenerationOptions:
    """Which scaffold files to produce. ``None`` means enabled by default."""

    generate_model: Optional[bool] = None
    generate_migration: Optional[bool] = None
    generate_factory: Optional[bool] = None
    generate_seeder: Optional[bool] = None
    generate_controller: Optional[bool] = None
    generate_api_controller: Optional[bool] = None
    generate_service: Optional[bool] = None
    generate_repository: Optional[bool] = None
    generate_requests: Optional[bool] = None
    generate_resource: Optional[bool] = None
    generate_frontend: Optional[bool] = None
    generate_routes: Optional[bool] = None

    def is_enabled(self, option: str) -> bool:
        return getattr(self, option, None) is not False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationOptions":
        values = {}
        for option in fields(cls):
            value = _pick(data, to_camel_case(option.name), option.name)
            if value is not None:
                values[option.name] = bool(value)
        return cls(**values)

    def to_dict(self) -> Dict[str, bool]:
        return {
            to_camel_case(option.name): getattr(self, option.name)
            for option in fields(self)
            if getattr(self, option.name) is not None
        }


@dataclass
class ModelDefinition:
    """Root input of a generation request."""

    name: str
    attributes: List[AttributeDefinition] = field(default_factory=list)
    relationships: List[RelationshipDefinition] = field(default_factory=list)
    table_name: Optional[str] = None
    timestamps: bool = True
    soft_deletes: bool = False
    options: GenerationOptions = field(default_factory=GenerationOptions)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelDefinition":
        """
        Build a model definition from a dictionary.

        Accepts the camelCase keys used by the editor payloads
        (``tableName``, ``softDeletes``, ``relatedModel``...) as well as
        snake_case equivalents. Unknown keys are ignored.

        Args:
            data: Raw model definition

        Returns:
            Normalized ModelDefinition
        """
        if not isinstance(data, dict):
            raise ModelValidationError(
                [f"Model definition must be an object, got {type(data).__name__}"]
            )

        attributes = [
            AttributeDefinition.from_dict(item)
            for item in _pick(data, "attributes", default=[])
        ]
        relationships = [
            RelationshipDefinition.from_dict(item)
            for item in _pick(data, "relationships", default=[])
        ]
        timestamps = _pick(data, "timestamps", default=True)
        soft_deletes = _pick(data, "softDeletes", "soft_deletes", default=False)

        return cls(
            name=str(_pick(data, "name", default="")),
            attributes=attributes,
            relationships=relationships,
            table_name=_pick(data, "tableName", "table_name"),
            timestamps=timestamps is not False,
            soft_deletes=soft_deletes is True,
            options=GenerationOptions.from_dict(_pick(data, "options", default={})),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "name": self.name,
            "attributes": [attr.to_dict() for attr in self.attributes],
            "relationships": [rel.to_dict() for rel in self.relationships],
            "timestamps": self.timestamps,
            "softDeletes": self.soft_deletes,
        }
        if self.table_name:
            result["tableName"] = self.table_name
        options = self.options.to_dict()
        if options:
            result["options"] = options
        return result


def validate_model(model: ModelDefinition) -> List[str]:
    """
    Validate a model definition before generation.

    Args:
        model: Model definition to check

    Returns:
        List of error messages (empty if the model is valid)
    """
    errors = []

    if not model.name:
        errors.append("Model name is required")
    elif not MODEL_NAME_PATTERN.match(model.name):
        errors.append(f"Model name '{model.name}' must be in PascalCase")

    if not model.attributes:
        errors.append("At least one attribute is required")

    for attr in model.attributes:
        if not attr.name:
            errors.append("Attribute name is required")
            continue
        if not attr.type:
            errors.append(f"Type is required for attribute '{attr.name}'")
        if not ATTRIBUTE_NAME_PATTERN.match(attr.name):
            errors.append(f"Attribute name '{attr.name}' must be in snake_case format")

    for rel in model.relationships:
        if not rel.type:
            errors.append("Relationship type is required")
        elif rel.type not in RELATIONSHIP_TYPES:
            errors.append(f"Invalid relationship type: '{rel.type}'")
        if not rel.related_model:
            errors.append("Related model is required for relationship")

    return errors


def ensure_valid(model: ModelDefinition) -> ModelDefinition:
    """Raise ModelValidationError if the model has validation errors."""
    errors = validate_model(model)
    if errors:
        logger.error("Model '%s' failed validation: %s", model.name, errors)
        raise ModelValidationError(errors)
    return model


def is_valid_default(attr: AttributeDefinition) -> bool:
    """Check whether an attribute's default value fits its declared type."""
    if attr.default is None:
        return False

    if attr.type in NUMERIC_TYPES:
        if isinstance(attr.default, bool):
            return False
        try:
            number = float(attr.default)
        except (TypeError, ValueError):
            return False
        return math.isfinite(number)

    if attr.type in JSON_TYPES:
        if isinstance(attr.default, (dict, list)):
            return True
        try:
            json.loads(str(attr.default))
        except ValueError:
            return False
        return True

    return True


def collect_warnings(model: ModelDefinition) -> List[str]:
    """
    Collect non-fatal notices about a model definition.

    Generation still succeeds for every case reported here; the
    processor falls back to generic output.
    """
    warnings = []
    seen = set()

    for attr in model.attributes:
        if attr.name in seen:
            warnings.append(f"Duplicate attribute name '{attr.name}'")
        seen.add(attr.name)

        if attr.type and attr.type not in ATTRIBUTE_TYPES:
            warnings.append(
                f"Unknown type '{attr.type}' for attribute '{attr.name}' - using generic output"
            )

        if attr.default is not None and not is_valid_default(attr):
            warnings.append(
                f"Default value {attr.default!r} is not a valid {attr.type} "
                f"for attribute '{attr.name}' - a fallback will be used"
            )

    for rel in model.relationships:
        has_pivot_info = rel.pivot or rel.pivot_foreign_key or rel.pivot_related_key
        if has_pivot_info and rel.type != "belongsToMany":
            warnings.append(
                f"Pivot settings on {rel.type} relationship to '{rel.related_model}' are ignored"
            )

    for warning in warnings:
        logger.warning("%s: %s", model.name, warning)

    return warnings
