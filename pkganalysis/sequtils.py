"""Small helpers for sequences, bytes and regular expressions."""

import re

__all__ = ["combine_regexp", "last_n_bytes", "remove_duplicates", "transform"]


def combine_regexp(*args):
    """Join the patterns with '|', each in its own non-capturing group."""
    patterns = transform(
        args,
        lambda r: "(?:" + (r.pattern if isinstance(r, re.Pattern) else r) + ")",
    )
    return re.compile("|".join(patterns))


def last_n_bytes(data, n):
    """Return the last n bytes of data, or data itself if it is no longer than n."""
    if n < 0:
        raise ValueError("n cannot be negative")
    if len(data) <= n:
        return data
    return data[len(data) - n:]


def remove_duplicates(items):
    """Return the unique items, in order of their first occurrence."""
    return list(dict.fromkeys(items))


def transform(items, fn):
    """Apply fn to each item and return the results as a list."""
    return [fn(item) for item in items]