#!/usr/bin/env python3
"""
Neighbor search — previous/next prime by walking odd candidates through one
PrimeEngine, so the whole walk shares the engine's growing sieve.

next_prime() returning None is a statement about the integer width, not about
primes: the walk ran past the engine's max_value (or reached a number it
cannot evaluate) before finding one.
"""

from __future__ import annotations
from typing import Optional

from prime_engine import Primality, PrimeEngine, PrimeInvariantError


def _check_domain(engine: PrimeEngine, n: int) -> None:
    if not engine.in_domain(n):
        raise ValueError(f"{n} is outside [0, 2**{engine.value_bits} - 1]")


def previous_prime(engine: PrimeEngine, n: int) -> Optional[int]:
    """Largest prime strictly below n, or None if n <= 2."""
    _check_domain(engine, n)
    if n <= 2:
        return None
    if n == 3:
        return 2

    cand = n - 1
    if cand % 2 == 0:
        cand -= 1
    while True:
        res = engine.is_prime(cand)
        if res is Primality.TRUE:
            return cand
        if res is Primality.INDETERMINATE:
            # every candidate is below n, which was representable
            raise PrimeInvariantError(f"primality of {cand} is not calculable "
                                      f"while searching below {n}")
        cand -= 2


def next_prime(engine: PrimeEngine, n: int) -> Optional[int]:
    """
    Smallest prime strictly above n, or None if the search leaves the
    representable range (or hits a number it cannot evaluate) first.
    """
    _check_domain(engine, n)
    if n < 2:
        return 2

    cand = n + 1
    if cand > engine.max_value:
        return None
    if cand % 2 == 0:
        # max_value is odd, so an even cand <= max_value leaves room for + 1
        cand += 1
    while True:
        res = engine.is_prime(cand)
        if res is Primality.TRUE:
            return cand
        if res is Primality.INDETERMINATE:
            return None
        cand += 2
        if cand > engine.max_value:
            return None
