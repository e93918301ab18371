"""Configuration constants for dragtree."""

import os

# Horizontal distance, in pixels, of one depth level.
DEFAULT_INDENTATION_WIDTH: int = 50

# Environment override for the indentation width.
INDENTATION_WIDTH_ENV_VAR: str = "DRAGTREE_INDENTATION_WIDTH"


def resolve_indentation_width(value: int | None = None) -> int:
    """Pick the indentation width: explicit value, then environment, then default."""
    if value is None:
        raw = os.environ.get(INDENTATION_WIDTH_ENV_VAR)
        if raw is None:
            return DEFAULT_INDENTATION_WIDTH
        try:
            value = int(raw)
        except ValueError:
            msg = f"{INDENTATION_WIDTH_ENV_VAR} must be an integer, got {raw!r}"
            raise ValueError(msg) from None

    if value <= 0:
        msg = f"Indentation width must be positive, got {value!r}"
        raise ValueError(msg)
    return value
