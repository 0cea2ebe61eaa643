#!/usr/bin/env python3
"""
Prime Calc — CLI

Decide whether a number is prime, or find the previous / next prime, using one
adaptive sieve + trial division engine for the whole run.

Usage examples:
  - Is it prime?
      python prime_calc.py 1_000_003

  - Previous / next prime (grouped input is fine):
      python prime_calc.py --prev 1.000.004
      python prime_calc.py --next 1_000_002

  - Interactive: one command per line, "i N", "p N", "n N", "q" to quit:
      python prime_calc.py --interactive

  - Sieve density report after the query, plus a PNG of it:
      python prime_calc.py --next 10_000_000_000_000 --report --png density.png
"""

from __future__ import annotations
import argparse
import locale
import re
import sys
from typing import Callable, Optional, TextIO

from prime_engine import DEFAULT_INDEX_BITS, DEFAULT_VALUE_BITS, Primality, PrimeEngine
from prime_neighbors import next_prime, previous_prime
import sieve_density


__PRIME_CALC_VERSION__ = "1.0.0"

OPS = {"i": "is", "p": "prev", "n": "next"}

_NUMBER_RE = re.compile(r"\d+(?:([^\dA-Za-z])\d+(?:\1\d+)*)?")


# ------------------------- Number I/O -------------------------

def parse_number(val: str) -> int:
    """
    Parse a non-negative decimal, optionally grouped with one non-digit
    separator between digit runs: 1000003, 1_000_003, 1.000.003, 1,000,003.
    """
    s = str(val).strip()
    if not _NUMBER_RE.fullmatch(s):
        raise argparse.ArgumentTypeError(f"Invalid number: {val!r}")
    return int(re.sub(r"\D", "", s))


def make_formatter(sep: Optional[str]) -> Callable[[int], str]:
    """Digit grouping: explicit separator, or the current locale's if sep is None."""
    if sep is None:
        return lambda n: f"{n:n}"
    return lambda n: f"{n:,}".replace(",", sep)


# ------------------------- Queries -------------------------

def run_query(engine: PrimeEngine, op: str, n: int, fmt: Callable[[int], str] = str) -> str:
    """Run one of the three operations and render its outcome as a line of text."""
    if op == "is":
        res = engine.is_prime(n)
        if res is Primality.TRUE:
            return f"{fmt(n)} is a prime"
        if res is Primality.FALSE:
            return f"{fmt(n)} is not a prime"
        return (f"{fmt(n)}: cannot calculate "
                f"(square root exceeds the {engine.index_bits}-bit index range)")
    if op == "prev":
        p = previous_prime(engine, n)
        if p is None:
            return f"there is no prime before {fmt(n)}"
        return f"previous prime before {fmt(n)}: {fmt(p)}"
    if op == "next":
        p = next_prime(engine, n)
        if p is None:
            return f"next prime after {fmt(n)}: cannot calculate within {engine.value_bits} bits"
        return f"next prime after {fmt(n)}: {fmt(p)}"
    raise ValueError(f"unknown operation: {op}")


def interactive(engine: PrimeEngine, fmt: Callable[[int], str] = str,
                stream: Optional[TextIO] = None, out: Optional[TextIO] = None) -> int:
    """
    Line loop: "i N" (is prime), "p N" (previous), "n N" (next), "q" (quit).
    Bad lines are reported and skipped. Returns the number of answered queries.
    """
    stream = sys.stdin if stream is None else stream
    out = sys.stdout if out is None else out
    answered = 0
    for raw in stream:
        line = raw.strip()
        if not line:
            continue
        cmd, rest = line[0].lower(), line[1:].strip()
        if cmd == "q":
            break
        if cmd not in OPS:
            print(f"[error] unknown command {line[0]!r} (use i, p, n or q)", file=out)
            continue
        try:
            n = parse_number(rest)
        except argparse.ArgumentTypeError as e:
            print(f"[error] {e}", file=out)
            continue
        if not engine.in_domain(n):
            print(f"[error] {fmt(n)} exceeds the {engine.value_bits}-bit range", file=out)
            continue
        print(run_query(engine, OPS[cmd], n, fmt), file=out)
        answered += 1
    return answered


# ------------------------- CLI -------------------------

def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Prime Calc — is-prime, previous and next prime via an adaptive sieve.")
    p.add_argument("number", nargs="?", type=parse_number,
                   help="Number to query; digit groups may be separated, e.g. 1_000_003.")
    mode = p.add_mutually_exclusive_group()
    mode.add_argument("-p", "--prev", action="store_true", help="Find the previous prime instead.")
    mode.add_argument("-n", "--next", action="store_true", help="Find the next prime instead.")
    mode.add_argument("-i", "--interactive", action="store_true",
                      help="Read 'i N', 'p N', 'n N' lines from stdin ('q' quits).")
    p.add_argument("--bits", type=int, default=DEFAULT_VALUE_BITS,
                   help=f"Width of the number domain in bits (default {DEFAULT_VALUE_BITS}).")
    p.add_argument("--index-bits", type=int, default=DEFAULT_INDEX_BITS,
                   help=f"Width of the sieve index in bits (default {DEFAULT_INDEX_BITS}).")
    p.add_argument("--sep", type=str, default=None,
                   help="Digit group separator for output (default: locale grouping).")
    p.add_argument("--report", action="store_true", help="Print the sieve density report at the end.")
    p.add_argument("--png", type=str, default=None, help="Also save the density report as a PNG.")
    p.add_argument("-v", "--verbose", action="store_true", help="Report sieve rebuilds on stderr.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__PRIME_CALC_VERSION__}")
    return p


def main(argv=None):
    ap = build_arg_parser()
    args = ap.parse_args(argv)

    if args.bits < 2 or args.index_bits < 2:
        ap.error("--bits and --index-bits must be >= 2")
    if args.number is None and not args.interactive:
        ap.error("a number is required unless --interactive is given")

    try:
        locale.setlocale(locale.LC_NUMERIC, "")
    except locale.Error:
        print("[warn] locale not available; falling back to C grouping", file=sys.stderr)
    fmt = make_formatter(args.sep)

    engine = PrimeEngine(value_bits=args.bits, index_bits=args.index_bits, verbose=args.verbose)

    if args.interactive:
        interactive(engine, fmt)
    else:
        if not engine.in_domain(args.number):
            ap.error(f"{args.number} exceeds the {args.bits}-bit range")
        op = "prev" if args.prev else "next" if args.next else "is"
        print(run_query(engine, op, args.number, fmt))

    if args.report or args.png:
        rows = sieve_density.density_report(engine.sieve)
        if args.report:
            print("--- sieve density ---")
            for line in sieve_density.format_report(rows, fmt):
                print(line)
        if args.png:
            if not sieve_density.HAVE_MPL:
                print("[warn] matplotlib not available; no PNG written", file=sys.stderr)
            elif not rows:
                print("[warn] sieve too small for a density report; no PNG written", file=sys.stderr)
            else:
                sieve_density.save_density_png(rows, args.png)


if __name__ == "__main__":
    main()
