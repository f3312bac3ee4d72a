"""
S-expression reading shared by the internal-types table and the
discovery-event replay format.

Depends on:
    - sexpdata          (S-expression parsing)
"""

from __future__ import annotations

from typing import Any, List

import sexpdata


class SexpSyntaxError(ValueError):
    """Raised when text is not a well-formed S-expression stream."""
    pass


def normalise(obj: Any) -> Any:
    """Recursively normalise ``sexpdata`` output to plain Python types.

    - ``sexpdata.Symbol`` → ``str``
    - ``list`` → ``list`` (recursively normalised)
    - atoms (int, float, str) → kept as-is
    """
    if isinstance(obj, list):
        return [normalise(x) for x in obj]
    if isinstance(obj, sexpdata.Symbol):
        value = getattr(obj, "value", None)
        if callable(value):
            return str(value())
        return str(obj)
    return obj


def parse_many(text: str) -> List[Any]:
    """Parse a string containing any number of top-level S-expressions.

    Returns
    -------
    list
        One normalised parse tree per top-level form.
    """
    # sexpdata does not natively parse multiple forms; we wrap in a list
    # and strip the outer layer.
    try:
        parsed = sexpdata.loads(f"({text}\n)", nil=None, true=None)
    except Exception as exc:
        raise SexpSyntaxError(f"Failed to parse S-expression stream: {exc}") from exc
    return [normalise(item) for item in parsed]
