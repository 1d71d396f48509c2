"""
bnengine - Main Entry Point

Prints the engine's reference vectors, one line per operation, with results
in hex like the classic bignum self-test.
"""

import argparse
import logging
import sys

from .core import Bignum, Sign, add, subtract, negate, multiply, divide, powm, configure
from .integration.event_logger import EventLogger


NUM1 = bytes([0x01, 0x23, 0x45, 0x67, 0x89, 0xab, 0xcd, 0xef])
NUM2 = bytes([0xab, 0xbc, 0xde, 0xf0, 0x12, 0x34])


def output(title: str, r: Bignum) -> str:
    """Format a bignum as 'title => [minus ]hexdigits'."""
    prefix = "minus " if r.get_sign() == Sign.NEGATIVE else ""
    return f"{title} => {prefix}{abs(r).to_bytes().hex()}"


def run_vectors() -> list:
    """Compute the reference vectors and return the formatted lines."""
    lines = []
    r = Bignum()
    a = Bignum().set_si(-6666)
    b = Bignum().set_si(7777)
    c = Bignum.from_bytes(NUM1)
    d = Bignum.from_bytes(NUM2)

    add(r, a, b)
    lines.append(output("add(-6666,7777)", r))
    negate(r)
    lines.append(output("neg()", r))
    add(r, b, a)
    lines.append(output("add(7777,-6666)", r))
    add(r, a, a)
    lines.append(output("add(-6666,-6666)", r))
    add(r, b, b)
    lines.append(output("add(7777,7777)", r))
    subtract(r, a, b)
    lines.append(output("sub(-6666,7777)", r))
    subtract(r, b, a)
    lines.append(output("sub(7777,-6666)", r))
    subtract(r, a, a)
    lines.append(output("sub(-6666,-6666)", r))
    multiply(r, b, b)
    lines.append(output("mul(7777,7777)", r))

    lines.append(output("num1", c))
    lines.append(output("num2", d))
    multiply(r, c, d)
    lines.append(output("mul(num1,num2)", r))

    q, rem = Bignum(), Bignum()
    divide(q, rem, Bignum().set_ui(66778811), Bignum().set_ui(678))
    lines.append(output("div(66778811,678) quotient", q))
    lines.append(output("div(66778811,678) remainder", rem))

    powm(r, Bignum().set_ui(4), Bignum().set_ui(13), Bignum().set_ui(497))
    lines.append(output("powm(4,13,497)", r))

    return lines


def main(argv=None) -> int:
    """Main entry point for bnengine."""
    parser = argparse.ArgumentParser(description="bnengine reference vectors")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="log engine events (buffer growth, releases)")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
        configure(event_logger=EventLogger())

    print("=" * 50)
    print("bnengine reference vectors")
    print("=" * 50)
    for line in run_vectors():
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
