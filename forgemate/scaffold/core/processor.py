"""
Template processor for scaffold stubs.

Renders a stub against a model definition in three passes:

1. simple ``{{token}}`` substitution of model naming forms,
2. ``{{#flag}}...{{/flag}}`` conditional sections,
3. derived fragments computed from attributes and relationships.

The processor holds no mutable state; the only configuration is the
relationship accessor naming style, fixed at construction time.
"""

import re
from typing import Callable, Dict, Union

from ...logging_config import get_logger
from . import fragments
from .naming import (
    NamingCase,
    pluralize,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
    to_upper_snake_case,
)
from .schema import ModelDefinition

logger = get_logger(__name__)

TOKEN_PATTERN = re.compile(r"\{\{(\w+)\}\}")


def _token(name: str) -> str:
    return "{{" + name + "}}"


def replace_tokens(template: str, replacements: Dict[str, str]) -> str:
    """Replace every literal occurrence of each token with its value."""
    result = template
    for token, value in replacements.items():
        pattern = re.compile(re.escape(token))
        result = pattern.sub(lambda _match: value, result)
    return result


def resolve_section(template: str, flag: str, enabled: bool) -> str:
    """
    Resolve every ``{{#flag}}...{{/flag}}`` section for one flag.

    The first open marker pairs with the next close marker; sections of
    the same flag do not nest. An open marker without a later close
    marker stops processing and is left in the output.

    Args:
        template: Template text
        flag: Conditional flag name
        enabled: Keep section content when True, drop it when False

    Returns:
        Template with the flag's sections resolved
    """
    open_tag = _token(f"#{flag}")
    close_tag = _token(f"/{flag}")

    start = template.find(open_tag)
    while start != -1:
        end = template.find(close_tag, start)
        if end == -1:
            logger.warning("Unclosed conditional section '%s' left as-is", flag)
            break

        content = template[start + len(open_tag) : end]
        replacement = content if enabled else ""
        template = template[:start] + replacement + template[end + len(close_tag) :]

        start = template.find(open_tag)

    return template


class TemplateProcessor:
    """Turns stub templates into source text for a model definition."""

    def __init__(
        self,
        relationship_naming: Union[NamingCase, str] = NamingCase.CAMEL_CASE,
        resource_import_path: str = fragments.DEFAULT_RESOURCE_IMPORT_PATH,
    ):
        """
        Initialize the processor.

        Args:
            relationship_naming: Case style for relationship accessor names
                (camel or snake)
            resource_import_path: Module path used for frontend resource imports
        """
        if isinstance(relationship_naming, str):
            relationship_naming = NamingCase(relationship_naming)
        self.relationship_naming = relationship_naming
        self.resource_import_path = resource_import_path

    def process_template(self, template: str, model: ModelDefinition) -> str:
        """Process a template by replacing template variables with model data."""
        result = self.replace_simple_variables(template, model)
        result = self.replace_conditional_sections(result, model)
        result = self.replace_complex_variables(result, model)
        return result

    # Pass 1

    def simple_variables(self, model: ModelDefinition) -> Dict[str, str]:
        """Build the table of naming tokens for a model."""
        name = model.name
        plural = pluralize(name)
        table_name = model.table_name or to_snake_case(plural)

        variables = {
            "modelName": name,
            "modelLowercase": name.lower(),
            "modelUppercase": name.upper(),
            "modelCamelCase": to_camel_case(name),
            "modelPascalCase": name,
            "modelSnakeCase": to_snake_case(name),
            "modelKebabCase": to_kebab_case(name),
            "modelUpperSnakeCase": to_upper_snake_case(name),
            "modelPlural": plural,
            "modelPluralLowercase": plural.lower(),
            "modelPluralUppercase": plural.upper(),
            "modelPluralCamelCase": to_camel_case(plural),
            "modelPluralPascalCase": to_pascal_case(plural),
            "modelPluralSnakeCase": to_snake_case(plural),
            "modelPluralKebabCase": to_kebab_case(plural),
            "modelPluralUpperSnakeCase": to_upper_snake_case(plural),
            "tableName": table_name,
        }
        return {_token(key): value for key, value in variables.items()}

    def replace_simple_variables(self, template: str, model: ModelDefinition) -> str:
        return replace_tokens(template, self.simple_variables(model))

    # Pass 2

    def conditions(self, model: ModelDefinition) -> Dict[str, bool]:
        return {
            "softDeletes": model.soft_deletes is True,
            "timestamps": model.timestamps is not False,
        }

    def replace_conditional_sections(self, template: str, model: ModelDefinition) -> str:
        for flag, enabled in self.conditions(model).items():
            template = resolve_section(template, flag, enabled)
        return template

    # Pass 3

    def complex_variables(self) -> Dict[str, Callable[[ModelDefinition], str]]:
        """Derived tokens mapped to the generator producing their value."""
        naming = self.relationship_naming
        import_path = self.resource_import_path

        return {
            "modelStringAttributesWithComma": lambda m: fragments.attribute_names_with_comma(
                m.attributes
            ),
            "modelStringAttributesWithCommaQuoted": lambda m: fragments.attribute_names_with_comma_quoted(
                m.attributes
            ),
            "migrationColumns": lambda m: fragments.migration_columns(m.attributes),
            "tsInterfaceProperties": lambda m: fragments.ts_interface_properties(
                m.attributes
            ),
            "requestRules": lambda m: fragments.request_rules(m.attributes),
            "factoryDefinitions": lambda m: fragments.factory_definitions(m.attributes),
            "modelCasts": lambda m: fragments.model_casts(m.attributes),
            "modelRelationships": lambda m: fragments.model_relationships(m, naming),
            "resourceAttributes": lambda m: fragments.resource_attributes(m.attributes),
            "resourceRelationships": lambda m: fragments.resource_relationships(
                m, naming
            ),
            "frontendResourceRelationImports": lambda m: fragments.frontend_relation_imports(
                m, import_path
            ),
            "frontendResourceRelationProperties": lambda m: fragments.frontend_relation_properties(
                m, naming
            ),
        }

    def replace_complex_variables(self, template: str, model: ModelDefinition) -> str:
        """Substitute derived tokens in one scan; inserted text is never rescanned."""
        generators = self.complex_variables()
        rendered: Dict[str, str] = {}

        def substitute(match: re.Match) -> str:
            key = match.group(1)
            if key not in generators:
                return match.group(0)
            if key not in rendered:
                rendered[key] = generators[key](model)
            return rendered[key]

        result = TOKEN_PATTERN.sub(substitute, template)
        logger.debug("Rendered %d derived fragment(s) for %s", len(rendered), model.name)
        return result


def process_template(
    template: str,
    model: ModelDefinition,
    relationship_naming: Union[NamingCase, str] = NamingCase.CAMEL_CASE,
) -> str:
    """
    Convenience function to process a template.

    Args:
        template: Stub template text
        model: Model definition
        relationship_naming: Case style for relationship accessor names

    Returns:
        Rendered source text
    """
    return TemplateProcessor(relationship_naming).process_template(template, model)
