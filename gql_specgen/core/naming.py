"""Identifier casing for generated Python code."""

import keyword
import re


def snake_case(name: str) -> str:
    """Convert PascalCase or camelCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def pascal_case(name: str) -> str:
    """Convert snake_case or camelCase to PascalCase."""
    return "".join(word[:1].upper() + word[1:] for word in snake_case(name).split("_") if word)


def safe_identifier(name: str) -> str:
    """Make a name usable as a Python identifier.

    Leading underscores move to the end (``_eq`` -> ``eq_``), since pydantic
    rejects field names starting with one. Keywords get an underscore suffix;
    a leading digit gets an ``n`` prefix.
    """
    name = re.sub(r"\W", "_", name)
    stripped = name.lstrip("_")
    had_underscore = stripped != name
    name = stripped or "field"
    if name[:1].isdigit():
        name = f"n{name}"
    if had_underscore or keyword.iskeyword(name) or name in ("type", "self"):
        return f"{name}_"
    return name


def attribute_name(graphql_name: str) -> str:
    """Python attribute name for a GraphQL field or argument name."""
    return safe_identifier(snake_case(graphql_name))


def enum_member_name(value: str) -> str:
    """Python enum member name for a GraphQL enum value."""
    return safe_identifier(snake_case(value).upper())


def safe_docstring(text: str | None) -> str:
    """Escape text for use in docstrings."""
    if not text:
        return ""
    text = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        text += " "
    return text


def safe_comment(text: str | None) -> str:
    """Flatten text into a single line fit for a ``#`` comment."""
    if not text:
        return ""
    text = re.sub(r"\s+", " ", text)
    if len(text) > 120:
        text = text[:117] + "..."
    return text.strip()
