"""Equality helpers for floats and JSON documents."""

import json
import math

__all__ = ["float_equals", "json_equals"]


def float_equals(x1, x2, abs_tol):
    """True if x1 and x2 are within abs_tol of each other, or are both NaN."""
    return (
        x1 == x2
        or abs(x1 - x2) < abs_tol
        or (math.isnan(x1) and math.isnan(x2))
    )


def _reject_constant(name):
    raise ValueError(f"invalid JSON value: {name}")


def _load(document):
    # All numbers are compared as floats, as in generic JSON decoding.
    return json.loads(document, parse_int=float, parse_constant=_reject_constant)


def _deep_equal(a, b):
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, dict) or isinstance(b, dict):
        return (
            isinstance(a, dict)
            and isinstance(b, dict)
            and a.keys() == b.keys()
            and all(_deep_equal(a[k], b[k]) for k in a)
        )
    if isinstance(a, list) or isinstance(b, list):
        return (
            isinstance(a, list)
            and isinstance(b, list)
            and len(a) == len(b)
            and all(_deep_equal(x, y) for x, y in zip(a, b))
        )
    return type(a) is type(b) and a == b


def json_equals(j1, j2):
    """True if both documents hold equal JSON values; invalid JSON raises ValueError."""
    return _deep_equal(_load(j1), _load(j2))