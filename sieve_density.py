#!/usr/bin/env python3
"""
Sieve density report — purely informational.

For each magnitude band, compares the share of primes in the band with the
break-even density between two storage layouts:
  - the sieve: one bit per odd number, i.e. 1/2 bit per integer
  - a result vector: an explicit list of primes, `width` bytes per entry
The list wins while density * 8 * width < 1/2, i.e. density < 1 / (16 * width).
"""

from __future__ import annotations
from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from odd_sieve import OddSieve

# Optional for PNG
try:
    import matplotlib.pyplot as plt
    HAVE_MPL = True
except Exception:
    HAVE_MPL = False


# (lo, hi, width in bytes); hi=None means "up to the sieve's high-water mark"
DENSITY_BANDS: Tuple[Tuple[int, Optional[int], int], ...] = (
    (3, 2 ** 8 - 1, 1),
    (2 ** 8 + 1, 2 ** 16 - 1, 2),
    (2 ** 16 + 1, 999_999, 4),
    (1_000_001, 9_999_999, 4),
    (10_000_001, 99_999_999, 4),
    (100_000_001, 999_999_999, 4),
    (1_000_000_001, 2 ** 32 - 1, 4),
    (2 ** 32 + 1, 9_999_999_999, 8),
    (10_000_000_001, None, 8),
)


class BandDensity(NamedTuple):
    lo: int
    hi: int
    width: int
    primes: int
    density: float
    threshold: float

    @property
    def storage(self) -> str:
        return "sieve" if self.density > self.threshold else "result vector"


def storage_threshold(width: int) -> float:
    return 1.0 / (16.0 * width)


def band_density(sieve: OddSieve, lo: int, hi: int, width: int) -> BandDensity:
    """Density of cached primes in [lo, hi]; the sieve must cover hi."""
    primes = sieve.count_range(lo, hi)
    density = primes / (hi - lo) if hi > lo else 0.0
    return BandDensity(lo, hi, width, primes, density, storage_threshold(width))


def density_report(sieve: OddSieve, bands=DENSITY_BANDS) -> List[BandDensity]:
    """Rows for every band the sieve reaches, each clipped to the high-water mark."""
    top = sieve.high_water
    rows: List[BandDensity] = []
    for lo, hi, width in bands:
        if lo > top:
            break
        hi = top if hi is None else min(hi, top)
        if hi <= lo:
            continue
        rows.append(band_density(sieve, lo, hi, width))
    return rows


def format_report(rows: List[BandDensity], fmt=str) -> List[str]:
    out: List[str] = []
    for r in rows:
        out.append(f"Distribution from {fmt(r.lo)} to {fmt(r.hi)} ({r.width} Byte area):")
        out.append(f"{r.density * 100:.2f} % -> better stored in {r.storage} "
                   f"(threshold: {r.threshold * 100:.2f} %)")
    return out


def save_density_png(rows: List[BandDensity], png_path: str) -> None:
    """Bar chart of band densities against their storage thresholds."""
    import matplotlib.pyplot as plt

    labels = [f"{r.lo:.0e}..{r.hi:.0e}" if r.hi >= 10 ** 6 else f"{r.lo}..{r.hi}" for r in rows]
    dens = np.array([r.density for r in rows], dtype=float) * 100.0
    thr = np.array([r.threshold for r in rows], dtype=float) * 100.0
    xs = np.arange(len(rows))

    plt.figure(figsize=(8, 4), dpi=150)
    colors = ["tab:blue" if d > t else "tab:orange" for d, t in zip(dens, thr)]
    plt.bar(xs, dens, color=colors, label="prime density")
    plt.step(xs, thr, where="mid", color="black", linewidth=1.0, label="storage threshold")
    plt.xticks(xs, labels, rotation=30, ha="right", fontsize=7)
    plt.ylabel("% of integers in band")
    plt.title("Sieve density (blue: bitmap cheaper, orange: list cheaper)", fontsize=10)
    plt.legend(loc="upper right", frameon=False, fontsize=8)
    plt.tight_layout()
    plt.savefig(png_path, dpi=150)
    plt.close()
    print(f"[saved] {png_path}")
