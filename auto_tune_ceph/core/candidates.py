"""Candidate value generation for a single option."""

from __future__ import annotations

import random

from .errors import CatalogError
from .parameters import ConfigOption


def generate_candidate(option: ConfigOption, rng: random.Random) -> str:
    """Draw a new legal value for ``option``.

    Booleans are a fair coin. Integral bounds give an integer in
    ``[min, max)``: ``max`` itself is never drawn. Fractional bounds give a
    real number in ``[min, max]``. The asymmetry is deliberate and changes
    the candidate distribution if "fixed".

    Raises:
        CatalogError: the numeric bounds describe an empty range.
    """
    if option.is_bool:
        return "true" if rng.randrange(2) == 0 else "false"

    if option.min_value is None or option.max_value is None:
        raise CatalogError(f"Option '{option.name}' has no numeric bounds")

    if option.has_integral_bounds:
        low, high = int(option.min_value), int(option.max_value)
        if high <= low:
            raise CatalogError(
                f"Option '{option.name}' has an empty integer range [{low}, {high})"
            )
        return str(rng.randrange(low, high))

    low, high = float(option.min_value), float(option.max_value)
    if high < low:
        raise CatalogError(f"Option '{option.name}' has max {high} below min {low}")
    return repr(low + rng.random() * (high - low))
