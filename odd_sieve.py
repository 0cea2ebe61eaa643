#!/usr/bin/env python3
"""
Odd Sieve — cached primality flags over the odd numbers >= 3.

Index i of the flag array stands for the odd number (i+1)*2 + 1:

    index   0  1  2  3  4  5  ...
    number  3  5  7  9 11 13  ...

The number 2 never enters the array; callers handle it (and every other even
number) before touching the sieve.

The sieve only grows. Every growth rebuilds the whole array with the classical
sieve of Eratosthenes restricted to the odd lattice; the old array is dropped,
not extended. An incremental (segmented) extension would avoid redoing the
already covered prefix.
"""

from __future__ import annotations
import sys
import time
from math import isqrt
from typing import Iterator, List, Optional

from bitarray import bitarray
from bitarray.util import ones


def num_to_index(n: int) -> int:
    """
    Index of the odd number n (n >= 3).
    Not validated: an even n yields the index of n - 1.
    """
    return (n - 1) // 2 - 1


def index_to_num(i: int) -> int:
    """Odd number stored at index i. Range checks are up to the caller."""
    return (i + 1) * 2 + 1


class OddSieve:
    """
    Growable bit cache: flags[i] is True iff index_to_num(i) is prime,
    for every i below the current extent.
    """

    def __init__(self, verbose: bool = False):
        # covers exactly the number 3
        self.flags: bitarray = ones(1)
        self.verbose: bool = verbose
        # stats
        self.rebuilds: int = 0

    @property
    def extent(self) -> int:
        """Number of cached flags."""
        return len(self.flags)

    @property
    def high_water(self) -> int:
        """Largest number with a cached flag."""
        return index_to_num(len(self.flags) - 1)

    def ensure(self, max_value: int) -> None:
        """Grow the cache so that it covers max_value. No-op if it already does."""
        max_index = 0 if max_value < 3 else num_to_index(max_value)
        if max_index < len(self.flags):
            return

        t0 = time.time()
        root = isqrt(max_value)
        if root < 3:
            root = 3
        root_index = num_to_index(root)

        flags = ones(max_index + 1)
        for i in range(root_index + 1):
            if not flags[i]:
                continue
            p = index_to_num(i)
            # i + k*p is the index of the odd multiple (2k+1)*p
            flags[i + p::p] = 0

        self.flags = flags
        self.rebuilds += 1
        if self.verbose:
            print(f"[sieve] rebuilt {len(flags):,} flags (up to {self.high_water:,}) "
                  f"in {time.time() - t0:.3f}s", file=sys.stderr)

    def lookup(self, n: int) -> Optional[bool]:
        """
        Cached flag for the odd number n >= 3, or None if n lies beyond the
        current extent.
        """
        if n > self.high_water:
            return None
        return bool(self.flags[num_to_index(n)])

    def iter_primes(self, value: int) -> Iterator[int]:
        """Cached odd primes <= value, ascending, produced one at a time."""
        if value < 3:
            return
        stop = min(num_to_index(value), len(self.flags) - 1) + 1
        for i in self.flags.search(1, 0, stop):
            yield index_to_num(i)

    def primes_upto(self, value: int) -> List[int]:
        """Cached odd primes <= value, ascending."""
        return list(self.iter_primes(value))

    def count_range(self, lo: int, hi: int) -> int:
        """Number of cached primes among the odd numbers in [lo, hi]."""
        lo = max(lo, 3)
        if lo % 2 == 0:
            lo += 1
        hi = min(hi, self.high_water)
        if hi < lo:
            return 0
        return self.flags.count(1, num_to_index(lo), num_to_index(hi) + 1)
