"""Tuning parameters for the blocked linear-algebra routines.

``ilaenv`` answers block-size questions for a routine named like
``Rpotrf`` or ``Cgetrf``: the first letter names the arithmetic (``R`` or
``C``), the rest names the routine. Only the first six characters of the
name are looked at, without regard to case.
"""

from __future__ import annotations

__all__ = ["ilaenv"]

_NAME_SIZE = 6

# Block size (ispec 1), keyed on the name without its leading letter.
_BLOCK_SIZE = {
    "orgqr": 32,
    "orgql": 32,
    "potrf": 64,
    "trtri": 64,
    "dsytrd": 32,
    "getrf": 64,
    "getri": 64,
}

# Minimum block size (ispec 2).
_MIN_BLOCK_BY_SUFFIX = {"orgqr": 2, "orgql": 2, "trtri": 2}
_MIN_BLOCK_BY_NAME = {"dsytrd": 2, "getri": 2}

# Crossover point to unblocked code (ispec 3).
_CROSSOVER_BY_SUFFIX = {"orgqr": 128, "orgql": 128}
_CROSSOVER_BY_NAME = {"dsytrd": 32}


def ilaenv(ispec, name, opts, n1, n2, n3, n4) -> int:
    """Return the tuning parameter ``ispec`` for routine ``name``.

    ``ispec`` 1 is the block size, 2 the minimum block size and 3 the
    crossover point; 4 to 16 are always 1. Any other ``ispec``, or a name
    that does not start with ``R`` or ``C``, gives -1.
    """
    key = str(name)[:_NAME_SIZE].lower()
    if not key or key[0] not in "rc":
        return -1
    suffix = key[1:]

    if ispec == 1:
        return _BLOCK_SIZE.get(suffix, 1)
    if ispec == 2:
        if suffix in _MIN_BLOCK_BY_SUFFIX:
            return _MIN_BLOCK_BY_SUFFIX[suffix]
        return _MIN_BLOCK_BY_NAME.get(key, 1)
    if ispec == 3:
        if suffix in _CROSSOVER_BY_SUFFIX:
            return _CROSSOVER_BY_SUFFIX[suffix]
        return _CROSSOVER_BY_NAME.get(key, 1)
    if 4 <= ispec <= 16:
        return 1
    return -1