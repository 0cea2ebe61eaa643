import argparse
import io

import pytest

import prime_calc
from prime_calc import interactive, make_formatter, parse_number, run_query
from prime_engine import PrimeEngine


def test_parse_number() -> None:
    assert parse_number("1000003") == 1_000_003
    assert parse_number("1_000_003") == 1_000_003
    assert parse_number("1.000.003") == 1_000_003
    assert parse_number("1,000,003") == 1_000_003
    assert parse_number(" 42 ") == 42
    assert parse_number("0") == 0
    for bad in ("", "-5", "abc", "1__000", "_1", "1_", "1_000.003", "0x10"):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_number(bad)


def test_formatter_with_separator() -> None:
    fmt = make_formatter("_")
    assert fmt(1_000_003) == "1_000_003"
    assert fmt(999) == "999"
    assert make_formatter(".")(2 ** 32) == "4.294.967.296"


def test_run_query_messages() -> None:
    engine = PrimeEngine()
    fmt = make_formatter("_")
    assert run_query(engine, "is", 1_000_003, fmt) == "1_000_003 is a prime"
    assert run_query(engine, "is", 1_000_001, fmt) == "1_000_001 is not a prime"
    assert run_query(engine, "prev", 1_000_004, fmt) == "previous prime before 1_000_004: 1_000_003"
    assert run_query(engine, "prev", 2, fmt) == "there is no prime before 2"
    assert run_query(engine, "next", 1_000_002, fmt) == "next prime after 1_000_002: 1_000_003"
    assert run_query(engine, "next", 2 ** 128 - 1).endswith("cannot calculate within 128 bits")
    with pytest.raises(ValueError):
        run_query(engine, "bogus", 3)


def test_run_query_indeterminate() -> None:
    engine = PrimeEngine(index_bits=3)
    assert run_query(engine, "is", 101) == \
        "101: cannot calculate (square root exceeds the 3-bit index range)"


def test_interactive_session() -> None:
    engine = PrimeEngine()
    stream = io.StringIO("i 997\n\np 1_000_004\nn 0\nx 5\ni abc\nI 999\nq\ni 7\n")
    out = io.StringIO()
    answered = interactive(engine, make_formatter("_"), stream, out)
    assert answered == 4
    assert out.getvalue().splitlines() == [
        "997 is a prime",
        "previous prime before 1_000_004: 1_000_003",
        "next prime after 0: 2",
        "[error] unknown command 'x' (use i, p, n or q)",
        "[error] Invalid number: 'abc'",
        "999 is not a prime",
    ]


def test_interactive_rejects_out_of_range() -> None:
    out = io.StringIO()
    interactive(PrimeEngine(value_bits=8), str, io.StringIO("n 300\n"), out)
    assert out.getvalue() == "[error] 300 exceeds the 8-bit range\n"


def test_main_modes(capsys) -> None:
    prime_calc.main(["--sep", "_", "1_000_003"])
    assert capsys.readouterr().out == "1_000_003 is a prime\n"
    prime_calc.main(["--sep", "_", "--prev", "1_000_004"])
    assert capsys.readouterr().out == "previous prime before 1_000_004: 1_000_003\n"
    prime_calc.main(["--sep", "_", "-n", "1_000_002"])
    assert capsys.readouterr().out == "next prime after 1_000_002: 1_000_003\n"


def test_main_interactive(capsys, monkeypatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("p 3\nn 2\n"))
    prime_calc.main(["-i", "--sep", "_"])
    assert capsys.readouterr().out == "previous prime before 3: 2\nnext prime after 2: 3\n"


def test_main_report(capsys) -> None:
    prime_calc.main(["--sep", "_", "--next", "1_000_002", "--report"])
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "next prime after 1_000_002: 1_000_003"
    assert out[1] == "--- sieve density ---"
    assert out[2] == "Distribution from 3 to 255 (1 Byte area):"
    assert out[3] == "21.03 % -> better stored in sieve (threshold: 6.25 %)"
    assert out[4] == "Distribution from 257 to 999 (2 Byte area):"


@pytest.mark.parametrize("argv", [
    [],
    ["--bits", "1", "7"],
    ["--bits", "8", "300"],
    ["--prev", "--next", "7"],
    ["1__0"],
])
def test_main_usage_errors(argv, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        prime_calc.main(argv)
    assert exc.value.code == 2
    capsys.readouterr()
