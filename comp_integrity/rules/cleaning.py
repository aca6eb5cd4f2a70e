"""Field normalisation transforms used by the cleaner.

Each transform is pure and idempotent. Transforms expect the field's natural
type and may raise on anything else; the cleaner catches that and keeps the
original value.
"""

from typing import Any

from comp_integrity.rules.vocab import canonical_country, canonical_rating


def trim_whitespace(value: str) -> str:
    return value.strip()


def title_case(value: str) -> str:
    """Capitalise each space-separated word and lowercase the rest of it."""
    return " ".join(word.capitalize() for word in value.split(" "))


def normalize_country(value: str) -> str:
    return canonical_country(value)


def normalize_rating(value: Any) -> Any:
    match value:
        case {"text": str() as text}:
            return {**value, "text": canonical_rating(text.strip())}
        case str():
            return canonical_rating(value.strip())
        case _:
            return value
