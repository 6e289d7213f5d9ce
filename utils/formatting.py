"""Formatting helpers for values reported by the device."""

from typing import Union


def format_version(version: Union[int, float, str], decimals: int = 3) -> str:
    """
    Format a version number with a fixed number of decimal places.

    Args:
        version: Version as returned by the driver (numeric or numeric string)
        decimals: Decimal places to keep

    Returns:
        Version string, e.g. "1.430"

    Raises:
        ValueError: If version is not numeric.
    """
    try:
        number = float(version)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Version must be numeric, got {version!r}") from e
    return f"{number:.{decimals}f}"
