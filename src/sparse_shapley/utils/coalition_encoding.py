from __future__ import annotations

import json
import math
import numbers
from typing import Any

from ..model.coalition import Coalition


def normalize_coalition(value: Any) -> Coalition:
    """Parse a table cell or Python value into a :class:`Coalition`.

    Accepted forms: Coalition, set/frozenset/list/tuple of ids, an int bitmask
    (bit i set means player i), and strings such as ``"{1,2}"``, ``"(1,2)"``,
    ``"[1, 2]"``, ``"1,2"``, ``"10"`` (player 10) or a bitstring like ``"0b0110"``.
    """
    if isinstance(value, Coalition):
        return value
    if isinstance(value, (set, frozenset, list, tuple)):
        return Coalition(int(x) for x in value)
    if isinstance(value, bool):
        msg = f"Cannot interpret {value!r} as a coalition."
        raise ValueError(msg)
    if isinstance(value, numbers.Integral):
        return _from_bitmask(int(value))
    # blank CSV cell
    if isinstance(value, float) and math.isnan(value):
        return Coalition()
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return Coalition()
        # tuple-like string e.g. "('0','1')" or "(0,1)"
        if s.startswith("(") and s.endswith(")"):
            inner = s.strip("()").strip()
            if not inner:
                return Coalition()
            cleaned = []
            for part in inner.split(","):
                part = part.strip().strip("'").strip('"')
                if part:
                    cleaned.append(int(part))
            return Coalition(cleaned)
        if s.startswith("{") and s.endswith("}"):
            inner = s.strip("{}").strip()
            if not inner:
                return Coalition()
            return Coalition(int(x.strip()) for x in inner.split(","))
        if s.startswith("[") and s.endswith("]"):
            parsed = json.loads(s)
            if isinstance(parsed, list):
                return Coalition(int(x) for x in parsed)
        # bitstrings need the 0b prefix; bare digits are always player ids
        if s[:2].lower() == "0b":
            return _from_bitstring(s[2:])
        return Coalition(int(x.strip()) for x in s.split(",") if x.strip())
    msg = f"Cannot interpret {value!r} as a coalition."
    raise ValueError(msg)


def _from_bitmask(mask: int) -> Coalition:
    if mask < 0:
        msg = f"Bitmask must be non-negative, got {mask}."
        raise ValueError(msg)
    players: list[int] = []
    i = 0
    while mask:
        if mask & 1:
            players.append(i)
        mask >>= 1
        i += 1
    return Coalition(players)


def _from_bitstring(bits: str) -> Coalition:
    if not bits or not set(bits) <= {"0", "1"}:
        msg = f"Invalid bitstring: 0b{bits}"
        raise ValueError(msg)
    return Coalition(i for i, b in enumerate(reversed(bits)) if b == "1")
