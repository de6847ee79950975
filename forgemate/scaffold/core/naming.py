"""
Naming utilities for scaffold generation.

Handles case conversions and English pluralization of model names
used throughout the generated PHP and TypeScript sources.
"""

import re
from enum import Enum
from typing import Dict, Tuple


class NamingCase(Enum):
    """Different naming case styles."""

    CAMEL_CASE = "camel"  # blogPost
    PASCAL_CASE = "pascal"  # BlogPost
    SNAKE_CASE = "snake"  # blog_post
    KEBAB_CASE = "kebab"  # blog-post
    UPPER_SNAKE = "upper_snake"  # BLOG_POST


# Singular -> plural. Lookups are done on the lowercased last word.
IRREGULAR_PLURALS: Dict[str, str] = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "foot": "feet",
    "tooth": "teeth",
    "goose": "geese",
    "mouse": "mice",
    "ox": "oxen",
    "criterion": "criteria",
    "phenomenon": "phenomena",
    "datum": "data",
    "medium": "media",
    "index": "indices",
    "matrix": "matrices",
    "vertex": "vertices",
    "analysis": "analyses",
    "diagnosis": "diagnoses",
    "basis": "bases",
    "crisis": "crises",
    "thesis": "theses",
    "cactus": "cacti",
    "leaf": "leaves",
    "life": "lives",
    "knife": "knives",
    "wife": "wives",
    "half": "halves",
    "shelf": "shelves",
    "quiz": "quizzes",
    "shoe": "shoes",
    "photo": "photos",
    "piano": "pianos",
    "memo": "memos",
    "logo": "logos",
    "demo": "demos",
}

IRREGULAR_SINGULARS: Dict[str, str] = {
    plural: singular for singular, plural in IRREGULAR_PLURALS.items()
}

UNCOUNTABLE_WORDS = {
    "equipment",
    "information",
    "rice",
    "money",
    "series",
    "species",
    "fish",
    "sheep",
    "deer",
    "moose",
    "news",
    "feedback",
    "metadata",
    "software",
    "traffic",
}

_PLURAL_RULES: Tuple[Tuple[str, str], ...] = (
    (r"([^aeiou])y$", r"\1ies"),
    (r"(s|x|z|ch|sh)$", r"\1es"),
    (r"([^aeiou])o$", r"\1oes"),
    (r"$", "s"),
)

_SINGULAR_RULES: Tuple[Tuple[str, str], ...] = (
    (r"(ss|us|is)$", r"\1"),
    (r"([^aeiou])ies$", r"\1y"),
    (r"([^aeiou]us)es$", r"\1"),
    (r"(ss|x|z|ch|sh)es$", r"\1"),
    (r"([^aeiou])oes$", r"\1o"),
    (r"s$", ""),
)


def to_camel_case(value: str) -> str:
    """Convert to camelCase: ``blog_post`` / ``BlogPost`` -> ``blogPost``."""
    if not value:
        return value
    rest = re.sub(r"[\s_-]([A-Za-z0-9])", lambda m: m.group(1).upper(), value[1:])
    return value[0].lower() + rest


def to_pascal_case(value: str) -> str:
    """Convert to PascalCase: ``blog_post`` -> ``BlogPost``."""
    if not value:
        return value
    return value[0].upper() + to_camel_case(value)[1:]


def to_snake_case(value: str) -> str:
    """Convert to snake_case: ``BlogPost`` -> ``blog_post``."""
    value = re.sub(r"([a-z])([A-Z])", r"\1_\2", value)
    value = re.sub(r"[\s-]", "_", value)
    return value.lower()


def to_kebab_case(value: str) -> str:
    """Convert to kebab-case: ``BlogPost`` -> ``blog-post``."""
    value = re.sub(r"([a-z])([A-Z])", r"\1-\2", value)
    value = re.sub(r"[\s_]", "-", value)
    return value.lower()


def to_upper_snake_case(value: str) -> str:
    """Convert to UPPER_SNAKE_CASE: ``BlogPost`` -> ``BLOG_POST``."""
    return to_snake_case(value).upper()


def convert_case(value: str, target_case: NamingCase) -> str:
    """Convert name to target case style."""
    if target_case == NamingCase.CAMEL_CASE:
        return to_camel_case(value)
    elif target_case == NamingCase.PASCAL_CASE:
        return to_pascal_case(value)
    elif target_case == NamingCase.SNAKE_CASE:
        return to_snake_case(value)
    elif target_case == NamingCase.KEBAB_CASE:
        return to_kebab_case(value)
    elif target_case == NamingCase.UPPER_SNAKE:
        return to_upper_snake_case(value)
    else:
        return value


def _split_last_word(value: str) -> Tuple[str, str]:
    """Split a compound identifier into (prefix, last word)."""
    if value.isupper() or value.islower():
        match = re.search(r"[A-Za-z0-9]+$", value)
    else:
        match = re.search(r"[A-Z]?[a-z0-9]+$|[A-Z0-9]+$", value)

    if not match:
        return value, ""
    return value[: match.start()], match.group(0)


def _match_case(source: str, target: str) -> str:
    """Give ``target`` the capitalization of ``source``."""
    if len(source) > 1 and source.isupper():
        return target.upper()
    if source[:1].isupper():
        return target[:1].upper() + target[1:]
    return target


def _apply_rules(word: str, rules: Tuple[Tuple[str, str], ...]) -> str:
    lower = word.lower()
    for pattern, replacement in rules:
        if re.search(pattern, lower):
            return _match_case(word, re.sub(pattern, replacement, lower, count=1))
    return word


def _pluralize_word(word: str) -> str:
    lower = word.lower()
    if lower in UNCOUNTABLE_WORDS or lower in IRREGULAR_SINGULARS:
        return word
    if lower in IRREGULAR_PLURALS:
        return _match_case(word, IRREGULAR_PLURALS[lower])
    return _apply_rules(word, _PLURAL_RULES)


def _singularize_word(word: str) -> str:
    lower = word.lower()
    if lower in UNCOUNTABLE_WORDS or lower in IRREGULAR_PLURALS:
        return word
    if lower in IRREGULAR_SINGULARS:
        return _match_case(word, IRREGULAR_SINGULARS[lower])
    return _apply_rules(word, _SINGULAR_RULES)


def pluralize(value: str) -> str:
    """
    Pluralize the last word of an identifier.

    Words ending in ``s`` are not treated as already plural, so
    ``Status`` becomes ``Statuses``.

    Args:
        value: Identifier in any case style

    Returns:
        Identifier with its last word pluralized
    """
    prefix, word = _split_last_word(value)
    if not word:
        return value
    if len(word) > 1 and word.isupper() and not value.isupper():
        # trailing acronym: UserID -> UserIDs
        plural = _pluralize_word(word.lower())
        if plural.startswith(word.lower()):
            return prefix + word + plural[len(word) :]
    return prefix + _pluralize_word(word)


def singularize(value: str) -> str:
    """Singularize the last word of an identifier."""
    prefix, word = _split_last_word(value)
    if not word:
        return value
    return prefix + _singularize_word(word)


class NameTransformer:
    """Stateless facade over the naming functions."""

    def to_camel_case(self, value: str) -> str:
        return to_camel_case(value)

    def to_pascal_case(self, value: str) -> str:
        return to_pascal_case(value)

    def to_snake_case(self, value: str) -> str:
        return to_snake_case(value)

    def to_kebab_case(self, value: str) -> str:
        return to_kebab_case(value)

    def to_upper_snake_case(self, value: str) -> str:
        return to_upper_snake_case(value)

    def pluralize(self, value: str) -> str:
        return pluralize(value)

    def singularize(self, value: str) -> str:
        return singularize(value)

    def convert(self, value: str, target_case: NamingCase) -> str:
        return convert_case(value, target_case)

    def table_name(self, model_name: str) -> str:
        """Default table name for a model: pluralized snake_case."""
        return to_snake_case(pluralize(model_name))
