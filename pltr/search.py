"""Bisection over monotone integer predicates."""

from __future__ import annotations

from typing import Callable, Optional


def binary_search_maximum(predicate: Callable[[int], bool], a: int, b: int) -> Optional[int]:
    """Largest ``x`` in ``[a, b)`` with ``predicate(x)`` true.

    Precondition (not checked): ``predicate`` is monotonically non-increasing
    on ``[a, b)``, i.e. true on a prefix ``a..x`` and false afterwards. The
    lower bound ``a`` is assumed true and is only evaluated when the search
    window collapses onto it.

    Args:
        predicate: Monotone test on integer positions.
        a: Inclusive lower bound.
        b: Exclusive upper bound, ``b > a``.

    Returns:
        The last position for which the predicate holds, or None if it does
        not even hold at ``a``.
    """
    if b <= a:
        raise ValueError(f"empty search range [{a}, {b})")
    t = a + (b - a) // 2
    while b - a > 1:
        if predicate(t):
            a = t
        else:
            b = t
        t = a + (b - a) // 2
    if predicate(t):
        return t
    return None
