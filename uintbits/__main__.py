"""Top-level script environment."""
import argparse
import contextlib
import logging
import sys

from uintbits.bitvector.context import Aliasing, NativeWidth, OverflowCheck
from uintbits.bitvector.core import BitValue
from uintbits.bitvector.operation import BvAdd, BvSub, BvMul, BvAnd, BvOr, BvXor


results = [
    ("Sum", BvAdd), ("Difference", BvSub), ("Product", BvMul),
    ("AND", BvAnd), ("OR", BvOr), ("XOR", BvXor),
]


def read_operand(value, prompt, parser):
    if value is None:
        value = input(prompt)
    try:
        return BitValue(int(value))
    except ValueError as e:
        parser.error("invalid operand {!r}: {}".format(value, e))


def main(argv=None):
    parser = argparse.ArgumentParser(prog="uintbits")
    parser.add_argument("a", nargs="?")
    parser.add_argument("b", nargs="?")
    parser.add_argument("-w", "--native_width", type=int, default=32,
                        help="bit-width of the native integer (0 for unbounded)")
    parser.add_argument("--strict_overflow", action="store_true")
    parser.add_argument("--aliasing", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.native_width < 0:
        parser.error("native width must be non-negative")

    a = read_operand(args.a, "Enter the first unsigned integer: ", parser)
    b = read_operand(args.b, "Enter the second unsigned integer: ", parser)

    with contextlib.ExitStack() as stack:
        stack.enter_context(NativeWidth(args.native_width or None))
        stack.enter_context(OverflowCheck(args.strict_overflow))
        stack.enter_context(Aliasing(args.aliasing))

        print("a: {}".format(a))
        print("b: {}".format(b))
        for name, op in results:
            try:
                print("{}: {}".format(name, op(a, b)))
            except OverflowError as e:
                print("{}: {}".format(name, e), file=sys.stderr)


if __name__ == "__main__":
    main()
