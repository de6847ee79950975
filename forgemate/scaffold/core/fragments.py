"""
Derived code fragments for scaffold templates.

Each generator turns the attribute or relationship list of a model into
a block of PHP or TypeScript source. Type-specific behavior is driven by
flat lookup tables keyed by attribute type; unknown types fall back to
generic output instead of failing.
"""

import json
from typing import Dict, List, Optional

from .naming import (
    NamingCase,
    pluralize,
    to_camel_case,
    to_pascal_case,
    to_snake_case,
)
from .schema import (
    JSON_TYPES,
    NUMERIC_TYPES,
    AttributeDefinition,
    ModelDefinition,
    RelationshipDefinition,
    is_valid_default,
)

INDENTATION: Dict[str, str] = {
    "default": "    ",
    "migration": "            ",
    "factory": "            ",
    "rules": "            ",
    "interface": "  ",
}

DEFAULT_RESOURCE_IMPORT_PATH = "@/Support/Interfaces/Resources"

TS_TYPE_MAP: Dict[str, str] = {
    "string": "string",
    "text": "string",
    "integer": "number",
    "bigInteger": "number",
    "boolean": "boolean",
    "date": "string",
    "datetime": "string",
    "time": "string",
    "timestamp": "string",
    "decimal": "number",
    "float": "number",
    "json": "Record<string, any>",
    "jsonb": "Record<string, any>",
    "uuid": "string",
}

VALIDATION_RULE_MAP: Dict[str, str] = {
    "string": "string",
    "text": "string",
    "integer": "integer",
    "bigInteger": "integer",
    "decimal": "numeric",
    "float": "numeric",
    "boolean": "boolean",
    "date": "date",
    "datetime": "date_format:Y-m-d H:i:s",
    "timestamp": "date_format:Y-m-d H:i:s",
    "json": "json",
    "jsonb": "json",
    "uuid": "uuid",
}

FAKER_METHOD_MAP: Dict[str, str] = {
    "string": "sentence()",
    "text": "paragraphs(3, true)",
    "integer": "numberBetween(1, 1000)",
    "bigInteger": "numberBetween(1, 1000)",
    "decimal": "randomFloat(2, 1, 1000)",
    "float": "randomFloat(2, 1, 1000)",
    "boolean": "boolean()",
    "date": "dateTimeThisMonth()->format('Y-m-d H:i:s')",
    "datetime": "dateTimeThisMonth()->format('Y-m-d H:i:s')",
    "timestamp": "dateTimeThisMonth()->format('Y-m-d H:i:s')",
    "json": "json_encode(['key' => 'value'])",
    "jsonb": "json_encode(['key' => 'value'])",
    "uuid": "uuid()",
}
FAKER_FALLBACK = "word()"

CAST_MAP: Dict[str, str] = {
    "boolean": "boolean",
    "date": "date",
    "datetime": "datetime",
    "timestamp": "datetime",
    "decimal": "decimal",
    "float": "decimal",
    "integer": "integer",
    "bigInteger": "integer",
    "json": "array",
    "jsonb": "array",
}

TRUTHY_STRINGS = {"true", "1", "yes", "on"}


def indent(kind: str = "default") -> str:
    """Return the indentation used for a fragment kind."""
    return INDENTATION.get(kind, INDENTATION["default"])


# Default value formatting


def quote_php_string(value: str) -> str:
    """Wrap a value in single quotes, escaping backslashes and quotes."""
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_default_value(attr: AttributeDefinition) -> Optional[str]:
    """
    Format an attribute default as a PHP literal.

    Invalid values fall back to a safe literal for the type:
    ``0`` for numbers and ``'{}'`` for JSON.

    Args:
        attr: Attribute with an optional default

    Returns:
        PHP literal, or None when the attribute has no default
    """
    value = attr.default
    if value is None:
        return None

    if attr.type == "boolean":
        if isinstance(value, str):
            truthy = value.strip().lower() in TRUTHY_STRINGS
        else:
            truthy = bool(value)
        return "true" if truthy else "false"

    if attr.type in NUMERIC_TYPES:
        if not is_valid_default(attr):
            return "0"
        if isinstance(value, int):
            return str(value)
        return _format_number(float(value))

    if attr.type in JSON_TYPES:
        if not is_valid_default(attr):
            return "'{}'"
        parsed = value if isinstance(value, (dict, list)) else json.loads(str(value))
        return quote_php_string(json.dumps(parsed, separators=(",", ":")))

    if isinstance(value, bool):
        return quote_php_string("true" if value else "false")

    return quote_php_string(value)


# Attribute fragments


def attribute_names(attributes: List[AttributeDefinition]) -> List[str]:
    return [attr.name for attr in attributes or []]


def attribute_names_with_comma(attributes: List[AttributeDefinition]) -> str:
    return ", ".join(attribute_names(attributes))


def attribute_names_with_comma_quoted(attributes: List[AttributeDefinition]) -> str:
    return ", ".join(f"'{name}'" for name in attribute_names(attributes))


def migration_column(attr: AttributeDefinition) -> str:
    """Build one ``$table->type('name')->modifier()`` line."""
    column = f"{indent('migration')}$table->{attr.type}('{attr.name}')"

    modifiers = []
    if attr.nullable:
        modifiers.append("nullable()")
    if attr.unique:
        modifiers.append("unique()")
    default = format_default_value(attr)
    if default is not None:
        modifiers.append(f"default({default})")
    if attr.unsigned:
        modifiers.append("unsigned()")
    if attr.index:
        modifiers.append("index()")

    if modifiers:
        column += "->" + "->".join(modifiers)

    return column + ";"


def migration_columns(attributes: List[AttributeDefinition]) -> str:
    return "\n".join(migration_column(attr) for attr in attributes or [])


def ts_type(attribute_type: str) -> str:
    """Map an attribute type to a TypeScript type."""
    return TS_TYPE_MAP.get(attribute_type, "any")


def ts_interface_properties(attributes: List[AttributeDefinition]) -> str:
    lines = []
    for attr in attributes or []:
        optional = "?" if attr.nullable else ""
        lines.append(f"{indent('interface')}{attr.name}{optional}: {ts_type(attr.type)};")
    return "\n".join(lines)


def validation_rules(attr: AttributeDefinition) -> List[str]:
    """
    Build the Laravel validation rule list for an attribute.

    Order: required/nullable, type rule, max length, uniqueness.
    """
    rules = ["nullable" if attr.nullable else "required"]

    base_rule = VALIDATION_RULE_MAP.get(attr.type)
    if base_rule:
        rules.append(base_rule)

    if attr.type == "string" and attr.max_length:
        rules.append(f"max:{attr.max_length}")

    if attr.unique:
        rules.append("unique")

    return rules


def request_rules(attributes: List[AttributeDefinition]) -> str:
    lines = []
    for attr in attributes or []:
        rules = "', '".join(validation_rules(attr))
        lines.append(f"{indent('rules')}'{attr.name}' => ['{rules}'],")
    return "\n".join(lines)


def factory_value(attr: AttributeDefinition) -> str:
    """Literal default when valid for the type, otherwise a faker call."""
    if is_valid_default(attr):
        return format_default_value(attr)
    method = FAKER_METHOD_MAP.get(attr.type, FAKER_FALLBACK)
    return f"$this->faker->{method}"


def factory_definitions(attributes: List[AttributeDefinition]) -> str:
    return "\n".join(
        f"{indent('factory')}'{attr.name}' => {factory_value(attr)},"
        for attr in attributes or []
    )


def cast_keyword(attr: AttributeDefinition) -> Optional[str]:
    """Eloquent cast for an attribute, or None when the type is not cast."""
    cast = CAST_MAP.get(attr.type)
    if cast == "decimal" and attr.precision:
        return f"decimal:{attr.precision}"
    return cast


def model_casts(attributes: List[AttributeDefinition]) -> str:
    lines = []
    for attr in attributes or []:
        cast = cast_keyword(attr)
        if cast:
            lines.append(f"{indent()}'{attr.name}' => '{cast}',")
    return "\n".join(lines)


def resource_attributes(attributes: List[AttributeDefinition]) -> str:
    return "\n".join(
        f"{indent()}'{attr.name}' => $this->{attr.name},"
        for attr in attributes or []
    )


# Relationship fragments


def relationship_method_name(
    relation: RelationshipDefinition,
    naming: NamingCase = NamingCase.CAMEL_CASE,
) -> str:
    """
    Derive the accessor method name for a relationship.

    Collection relationships (hasMany, belongsToMany) use the plural of
    the related model, the others use the model name as given.
    """
    base = relation.related_model
    if relation.is_collection:
        base = pluralize(base)

    if naming == NamingCase.SNAKE_CASE:
        return to_snake_case(base)
    return to_camel_case(base)


def relationship_arguments(relation: RelationshipDefinition) -> List[str]:
    """Positional arguments of the relation call after the related class."""
    arguments = []
    if relation.foreign_key:
        arguments.append(f"'{relation.foreign_key}'")
    if relation.local_key:
        arguments.append(f"'{relation.local_key}'")

    if relation.type == "belongsToMany" and relation.pivot:
        arguments.append(f"'{relation.pivot}'")
        if relation.pivot_foreign_key:
            arguments.append(f"'{relation.pivot_foreign_key}'")
        if relation.pivot_related_key:
            arguments.append(f"'{relation.pivot_related_key}'")

    return arguments


def relationship_block(
    relation: RelationshipDefinition,
    naming: NamingCase = NamingCase.CAMEL_CASE,
) -> str:
    related = to_pascal_case(relation.related_model)
    method_name = relationship_method_name(relation, naming)
    arguments = ", ".join([f"{related}::class"] + relationship_arguments(relation))

    return (
        f"    /**\n"
        f"     * {relation.type} relationship with {related}.\n"
        f"     */\n"
        f"    public function {method_name}()\n"
        f"    {{\n"
        f"        return $this->{relation.type}({arguments});\n"
        f"    }}"
    )


def model_relationships(
    model: ModelDefinition, naming: NamingCase = NamingCase.CAMEL_CASE
) -> str:
    return "\n\n".join(
        relationship_block(relation, naming) for relation in model.relationships or []
    )


def resource_relationships(
    model: ModelDefinition, naming: NamingCase = NamingCase.CAMEL_CASE
) -> str:
    lines = []
    for relation in model.relationships or []:
        related = to_pascal_case(relation.related_model)
        method_name = relationship_method_name(relation, naming)
        loaded = f"$this->whenLoaded('{method_name}')"

        if relation.is_collection:
            value = f"{related}Resource::collection({loaded})"
        else:
            value = f"new {related}Resource({loaded})"
        lines.append(f"{indent()}'{method_name}' => {value},")

    return "\n".join(lines)


def frontend_relation_imports(
    model: ModelDefinition, import_path: str = DEFAULT_RESOURCE_IMPORT_PATH
) -> str:
    """One import line per distinct related model, in first-seen order."""
    unique_models = list(
        dict.fromkeys(relation.related_model for relation in model.relationships or [])
    )
    return "\n".join(
        f"import {{ {to_pascal_case(related)}Resource }} from '{import_path}';"
        for related in unique_models
    )


def frontend_relation_properties(
    model: ModelDefinition, naming: NamingCase = NamingCase.CAMEL_CASE
) -> str:
    lines = []
    for relation in model.relationships or []:
        related = to_pascal_case(relation.related_model)
        method_name = relationship_method_name(relation, naming)
        suffix = "[]" if relation.is_collection else ""
        lines.append(f"{indent()}{method_name}?: {related}Resource{suffix};")
    return "\n".join(lines)
