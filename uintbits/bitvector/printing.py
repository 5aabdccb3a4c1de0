"""Manage the representation of bit values."""
from sympy.printing import repr as sympy_repr
from sympy.printing import str as sympy_str


# noinspection PyPep8Naming,PyMethodMayBeStatic
class BitStrPrinter(sympy_str.StrPrinter):
    """Printing class that handles the `str` method of `BitValue`.

    The digits are preceded by the ``0b`` prefix and an extra ``0`` digit.

        >>> from uintbits.bitvector.core import BitValue
        >>> from uintbits.bitvector.printing import BitStrPrinter
        >>> BitStrPrinter().doprint(BitValue(6))
        '0b0110'
        >>> BitStrPrinter().doprint(BitValue(0))
        '0b00'

    """

    prefix = "0b0"

    def _print_BitValue(self, bv):
        return self.prefix + bv.bits.to01()


# noinspection PyPep8Naming,PyMethodMayBeStatic
class BitReprPrinter(sympy_repr.ReprPrinter):
    """Printing class that handles the `BitValue.vrepr` method."""

    def _print_BitValue(self, bv):
        return "{}({}, width={})".format(type(bv).__name__, bv.bin(), bv.width)
