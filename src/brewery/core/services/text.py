"""String helpers shared by the catalog services."""


def has_text(value: str | None) -> bool:
    """True when ``value`` contains at least one non-whitespace character."""
    return value is not None and bool(value.strip())
