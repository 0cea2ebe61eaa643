#!/usr/bin/env python3
"""
Prime Engine — adaptive primality decision over a fixed-width integer domain.

Numbers the sieve already covers are answered by lookup. Anything larger is
trial-divided by the odd primes up to its square root; the sieve is grown on
demand to supply them. The sieve never shrinks, so later queries reuse the
work of earlier ones on the same engine.

The domain is [0, 2**value_bits - 1]. The square root of a queried number must
also fit into 2**index_bits - 1 (the width the sieve is indexed with);
otherwise the answer is Primality.INDETERMINATE ("cannot calculate").
"""

from __future__ import annotations
from enum import Enum
from math import isqrt

from odd_sieve import OddSieve


DEFAULT_VALUE_BITS = 128
DEFAULT_INDEX_BITS = 64


class Primality(Enum):
    TRUE = "true"
    FALSE = "false"
    INDETERMINATE = "indeterminate"

    @classmethod
    def of(cls, flag: bool) -> "Primality":
        return cls.TRUE if flag else cls.FALSE


class PrimeInvariantError(RuntimeError):
    """An engine answer contradicted a guarantee the search relies on."""


class PrimeEngine:
    """
    Owns exactly one OddSieve. Not thread-safe: one logical owner per engine.
    """

    def __init__(self, value_bits: int = DEFAULT_VALUE_BITS,
                 index_bits: int = DEFAULT_INDEX_BITS,
                 verbose: bool = False):
        if value_bits < 2 or index_bits < 2:
            raise ValueError("value_bits and index_bits must be >= 2")
        self.value_bits: int = value_bits
        self.index_bits: int = index_bits
        self.max_value: int = 2 ** value_bits - 1
        self.max_index_value: int = 2 ** index_bits - 1
        self.sieve: OddSieve = OddSieve(verbose=verbose)

    def in_domain(self, n: int) -> bool:
        return 0 <= n <= self.max_value

    def is_prime(self, n: int) -> Primality:
        if n == 2 or n == 3:
            return Primality.TRUE
        if n < 2 or n % 2 == 0:
            return Primality.FALSE
        if n > self.max_value:
            return Primality.INDETERMINATE

        cached = self.sieve.lookup(n)
        if cached is not None:
            return Primality.of(cached)

        root = isqrt(n)
        if root < 3:
            root = 3
        if root > self.max_index_value:
            return Primality.INDETERMINATE

        self.sieve.ensure(root)
        for p in self.sieve.iter_primes(root):
            if n % p == 0:
                return Primality.FALSE
        return Primality.TRUE
