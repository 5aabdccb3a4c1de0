"""Tests for the operation module."""
import doctest
import unittest

from hypothesis import given
from hypothesis.strategies import integers

from uintbits.bitvector.context import Aliasing, NativeWidth, OverflowCheck
from uintbits.bitvector.core import BitValue
from uintbits.bitvector.operation import (
    BvAnd, BvOr, BvXor, BvAdd, BvSub, BvMul, BvNeg, ZeroExtend
)

MAX_VALUE = 2 ** 15 - 1
MAX_WIDTH = 24


simple_op = {BvAnd, BvOr, BvXor, BvAdd, BvSub, BvMul}
unary_op = {BvNeg}


def extended(i, extra):
    return ZeroExtend(BitValue(i), extra)


class TestOperation(unittest.TestCase):
    """Test for the Operation class and subclasses."""

    def test_literal_scenario(self):
        a, b = BitValue(6), BitValue(3)
        self.assertEqual(str(a), "0b0110")
        self.assertEqual(str(b), "0b011")

        expected = [
            (BvAdd, 9, "1001"),
            (BvSub, 3, "011"),
            (BvMul, 18, "10010"),
            (BvAnd, 2, "010"),
            (BvOr, 7, "111"),
            (BvXor, 5, "101"),
        ]
        for op, val, digits in expected:
            result = op(a, b)
            self.assertEqual(result.to_int(), val, op.__name__)
            self.assertEqual(result.bits.to01(), digits, op.__name__)
            self.assertEqual(str(result), "0b0" + digits, op.__name__)

        self.assertEqual(a.vrepr(), "BitValue(0b110, width=3)")
        self.assertEqual(b.vrepr(), "BitValue(0b11, width=2)")

    def test_operators(self):
        a, b = BitValue(12), BitValue(10)

        self.assertEqual(a & b, BvAnd(a, b))
        self.assertEqual(a | b, BvOr(a, b))
        self.assertEqual(a ^ b, BvXor(a, b))
        self.assertEqual(a + b, BvAdd(a, b))
        self.assertEqual(a - b, BvSub(a, b))
        self.assertEqual(a * b, BvMul(a, b))
        self.assertEqual(-a, BvNeg(a))

        self.assertEqual(3 + a, 15)
        self.assertEqual(20 - a, 8)
        self.assertEqual(2 * a, 24)
        self.assertEqual(5 & a, 4)

    def test_inplace_operators(self):
        v = BitValue(6)
        original = v
        v += 3
        v -= BitValue(4)
        v *= 2
        v ^= 1
        v |= 0b100000
        v &= 0b101011
        self.assertIs(v, original)
        self.assertEqual(v.val, 0b101011 & (((6 + 3 - 4) * 2 ^ 1) | 0b100000))

    def test_commutativity(self):
        x, y = BitValue(0b1011), BitValue(0b110)

        for op in simple_op:
            if getattr(op, "is_symmetric", False):
                self.assertEqual(op(x, y), op(y, x))
            else:
                self.assertNotEqual(op(x, y), op(y, x))

    @given(
        integers(min_value=0, max_value=MAX_VALUE),
        integers(min_value=0, max_value=MAX_VALUE),
        integers(min_value=0, max_value=MAX_VALUE),
    )
    def test_addition(self, x, y, z):
        a, b, c = BitValue(x), BitValue(y), BitValue(z)

        self.assertEqual((a + b).to_int(), x + y)
        self.assertEqual((a + b).to_int(), (b + a).to_int())
        self.assertEqual(((a + b) + c).to_int(), (a + (b + c)).to_int())
        self.assertEqual((a + b).width, max((x + y).bit_length(), a.width, b.width))

    @given(
        integers(min_value=0, max_value=MAX_VALUE),
        integers(min_value=0, max_value=MAX_VALUE),
    )
    def test_subtraction(self, x, y):
        a, b = BitValue(x), BitValue(y)
        width = max(a.width, b.width)

        diff = a - b
        self.assertEqual(diff.width, width)
        self.assertEqual(diff.val, (x - y) % 2 ** width)
        if x >= y:
            self.assertEqual(diff.to_int() + b.to_int(), a.to_int())

    @given(
        integers(min_value=0, max_value=MAX_VALUE),
        integers(min_value=0, max_value=8),
    )
    def test_negation(self, x, extra):
        v = extended(x, extra)
        width = v.width

        negated = -v
        self.assertEqual(negated.val, 2 ** width - x)
        if x == 0:
            self.assertEqual(negated.width, width + 1)
        else:
            self.assertEqual(negated.width, width)
            self.assertEqual((v + negated).val, 2 ** width)

    @given(
        integers(min_value=0, max_value=MAX_VALUE),
        integers(min_value=0, max_value=8),
    )
    def test_bitwise_identities(self, x, extra):
        a = extended(x, extra)
        zeros = ZeroExtend(BitValue(0), a.width - 1)

        self.assertEqual(BvAnd(a, zeros), zeros)
        self.assertEqual(BvOr(a, zeros), a)
        self.assertEqual(BvXor(a, a), zeros)
        self.assertEqual(BvAnd(a, a), a)
        self.assertEqual(BvOr(a, BitValue(0)).val, x)
        self.assertEqual(BvAnd(BitValue(0), a).val, 0)

    @given(
        integers(min_value=0, max_value=MAX_VALUE),
        integers(min_value=0, max_value=MAX_VALUE),
    )
    def test_bitwise_operations(self, x, y):
        a, b = BitValue(x), BitValue(y)
        width = max(a.width, b.width)

        for op, expected in [(BvAnd, x & y), (BvOr, x | y), (BvXor, x ^ y)]:
            result = op(a, b)
            self.assertEqual(result.val, expected)
            self.assertEqual(result.width, width)

    @given(
        integers(min_value=0, max_value=MAX_VALUE),
        integers(min_value=0, max_value=2 ** 16 - 1),
    )
    def test_multiplication(self, x, y):
        a, b = BitValue(x), BitValue(y)

        product = a * b
        self.assertEqual(product.to_int(), x * y)
        self.assertEqual(product.width, max((x * y).bit_length(), 1))

        with NativeWidth(None):
            self.assertEqual(a * b, product)

    def test_multiplication_trims_width(self):
        a = extended(5, 10)
        product = a * 1
        self.assertEqual(product.vrepr(), "BitValue(0b101, width=3)")
        self.assertEqual((a * 0).vrepr(), "BitValue(0b0, width=1)")

        with NativeWidth(None):
            self.assertEqual((a * 0).vrepr(), "BitValue(0b0, width=1)")
            self.assertEqual((a * extended(1, 4)).vrepr(), "BitValue(0b101, width=3)")

    def test_multiplication_wraparound(self):
        a, b = BitValue(2 ** 20), BitValue(2 ** 12)

        # 2 ** 32 wraps to zero
        self.assertEqual((a * b).vrepr(), "BitValue(0b0, width=1)")

        # 2 ** 31 wraps to a negative native integer, rebuilt with 32 bits
        product = BitValue(2 ** 20) * BitValue(2 ** 11)
        self.assertEqual(product.width, 32)
        self.assertEqual(product.val, 2 ** 31)
        self.assertEqual(product.to_int(), -2 ** 31)

        with NativeWidth(None):
            self.assertEqual((a * b).val, 2 ** 32)
            big = BitValue(2 ** 70 + 3) * BitValue(2 ** 40 + 1)
            self.assertEqual(big.val, (2 ** 70 + 3) * (2 ** 40 + 1))

        with OverflowCheck(True):
            with self.assertRaises(OverflowError):
                a * b
            self.assertEqual((BitValue(2 ** 15) * BitValue(2 ** 15)).val, 2 ** 30)

    def test_subtraction_is_not_narrow(self):
        # the subtrahend is negated at the common width
        a, b = BitValue(0b1000), BitValue(0b1)
        self.assertEqual((a - b).vrepr(), "BitValue(0b0111, width=4)")
        self.assertEqual((b - a).vrepr(), "BitValue(0b1001, width=4)")
        self.assertEqual((a - BitValue(0)).vrepr(), "BitValue(0b1000, width=4)")
        self.assertEqual((a - a).vrepr(), "BitValue(0b0000, width=4)")

    # noinspection PyTypeChecker
    def test_invalid_operations(self):
        x = BitValue(3)

        with self.assertRaises(TypeError):
            x ** 2
        with self.assertRaises(TypeError):
            x // 2
        with self.assertRaises(TypeError):
            x + 1.5
        with self.assertRaises(TypeError):
            x & "1"

        for op in simple_op:
            with self.assertRaises(TypeError):
                op()
            with self.assertRaises(ValueError):
                op(x, -1)  # invalid range
            with self.assertRaises(TypeError):
                op(2, 3.0)
            with self.assertRaises(TypeError):
                op(x)  # invalid # of args
            with self.assertRaises(TypeError):
                op(x, x, x)

        for op in unary_op:
            with self.assertRaises(TypeError):
                op()
            with self.assertRaises(TypeError):
                op(1)
            with self.assertRaises(TypeError):
                op(x, x)

        with self.assertRaises(AssertionError):
            ZeroExtend(x, -1)
        with self.assertRaises(TypeError):
            ZeroExtend(x, x)


class TestAliasing(unittest.TestCase):
    """Tests of the in-place widening of the second operand."""

    def test_operands_not_modified(self):
        for method in ["and_", "or_", "xor", "add", "sub", "mul"]:
            a, b = BitValue(0b10110), BitValue(0b11)
            getattr(a, method)(b)
            self.assertEqual(b.vrepr(), "BitValue(0b11, width=2)", method)

        for op in simple_op:
            a, b = BitValue(0b10110), BitValue(0b11)
            op(a, b)
            op(b, a)
            self.assertEqual(a.vrepr(), "BitValue(0b10110, width=5)", op.__name__)
            self.assertEqual(b.vrepr(), "BitValue(0b11, width=2)", op.__name__)

    def test_operands_widened(self):
        with Aliasing(True):
            for method in ["and_", "or_", "xor", "add"]:
                a, b = BitValue(0b10110), BitValue(0b11)
                getattr(a, method)(b)
                self.assertEqual(b.width, 5, method)
                self.assertEqual(b.val, 0b11, method)

            # the pure forms only clone the first operand
            for op in [BvAnd, BvOr, BvXor, BvAdd]:
                a, b = BitValue(0b10110), BitValue(0b11)
                op(a, b)
                self.assertEqual(a.width, 5, op.__name__)
                self.assertEqual(b.width, 5, op.__name__)

            # the subtrahend and the multiplier are never widened
            for op in [BvSub, BvMul]:
                a, b = BitValue(0b10110), BitValue(0b11)
                op(a, b)
                self.assertEqual(b.width, 2, op.__name__)

    def test_aliasing_preserves_results(self):
        a, b = BitValue(0b10110), BitValue(0b11)
        expected = [op(a, b) for op in [BvAnd, BvOr, BvXor, BvAdd]]
        with Aliasing(True):
            for op, result in zip([BvAnd, BvOr, BvXor, BvAdd], expected):
                self.assertEqual(op(a, b).val, result.val)

    def test_self_operand(self):
        v = BitValue(5)
        v.add(v)
        self.assertEqual(v.vrepr(), "BitValue(0b1010, width=4)")
        v.xor(v)
        self.assertEqual(v.vrepr(), "BitValue(0b0000, width=4)")


# noinspection PyUnusedLocal,PyUnusedLocal
def load_tests(loader, tests, ignore):
    """Add doctests."""
    import uintbits.bitvector.operation
    tests.addTests(doctest.DocTestSuite(uintbits.bitvector.operation))
    return tests
