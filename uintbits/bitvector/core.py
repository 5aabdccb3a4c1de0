"""Provide the bit value type and its in-place operations."""
import logging

from bitarray import bitarray
from bitarray import util as bitarray_util

from uintbits.bitvector import context

logger = logging.getLogger(__name__)


def _wrap(val, width):
    """Reduce an integer to a *width*-bit two's complement integer."""
    val &= (1 << width) - 1
    if val >> (width - 1):
        val -= 1 << width
    return val


def native_int(val, origin=None):
    """Convert the integer *val* to the native integer.

    The native integer is configured by the `NativeWidth` context.
    Values that do not fit silently wrap around, unless the
    `OverflowCheck` context is enabled.

        >>> from uintbits.bitvector.core import native_int
        >>> native_int(2 ** 31 - 1)
        2147483647
        >>> native_int(2 ** 31)
        -2147483648
        >>> native_int(2 ** 32 + 5)
        5

    """
    width = context.NativeWidth.current_context
    if width is None:
        return val

    wrapped = _wrap(val, width)
    if wrapped != val:
        if origin is None:
            origin = val
        if context.OverflowCheck.current_context:
            msg = "{} does not fit in a {}-bit native integer"
            raise OverflowError(msg.format(origin, width))
        logger.debug("%s wrapped to %d (%d-bit native integer)", origin, wrapped, width)
    return wrapped


class BitValue(object):
    """Represent an unsigned integer as an explicit sequence of bits.

    The bits are stored most significant first. A bit value
    :math:`(x_{n-1}, \\dots, x_1, x_0)` represents the non-negative integer
    :math:`x_0 + 2 x_1 + \\dots + 2^{n-1} x_{n-1}`. The width is never
    trimmed, so leading zeros are kept.

    Args:
        val: a non-negative integer, or a `BitValue` to clone.

    ::

        >>> from uintbits.bitvector.core import BitValue
        >>> BitValue(6)
        0b0110
        >>> BitValue(6).vrepr()
        'BitValue(0b110, width=3)'
        >>> BitValue(0).width
        1
        >>> BitValue(-1)
        Traceback (most recent call last):
         ...
        ValueError: negative values cannot be represented

    The methods ``and_``, ``or_``, ``xor``, ``add``, ``negate``, ``sub``
    and ``mul`` modify the bit value in place; their counterparts in
    `operation` (also available with the usual operator symbols) return
    a new bit value.

        >>> a = BitValue(6)
        >>> a.add(BitValue(3))
        >>> a
        0b01001
        >>> BitValue(6) + BitValue(3)
        0b01001

    Integer operands are converted to bit values automatically.

        >>> BitValue(6) * 3
        0b010010

    """

    __slots__ = ["_bits"]

    def __init__(self, val):
        if isinstance(val, BitValue):
            self._bits = bitarray(val._bits, endian="big")
        elif isinstance(val, int) and not isinstance(val, bool):
            if val < 0:
                raise ValueError("negative values cannot be represented")
            elif val == 0:
                self._bits = bitarray("0", endian="big")
            else:
                self._bits = bitarray_util.int2ba(val, endian="big")
        else:
            msg = "cannot convert '{}' to a bit value"
            raise TypeError(msg.format(type(val).__name__))

    @classmethod
    def from_int(cls, i):
        """Return the bit value of minimal width representing *i*.

            >>> from uintbits.bitvector.core import BitValue
            >>> BitValue.from_int(6).bin()
            '0b110'

        """
        if not isinstance(i, int) or isinstance(i, bool):
            msg = "from_int expects an int, got '{}'"
            raise TypeError(msg.format(type(i).__name__))
        return cls(i)

    def clone(self):
        """Return a copy with independent storage."""
        return type(self)(self)

    @property
    def bits(self):
        """The stored bits, most significant first."""
        return self._bits

    @property
    def width(self):
        """The number of stored bits."""
        return len(self._bits)

    length = width

    @property
    def val(self):
        """The unsigned integer represented by the bits.

        Unlike `to_int`, the value never wraps around.
        """
        return bitarray_util.ba2int(self._bits)

    def to_int(self):
        """Return the native integer represented by the bits.

            >>> from uintbits.bitvector.core import BitValue
            >>> BitValue(9).to_int()
            9
            >>> BitValue(2 ** 32 + 9).to_int()
            9

        See `NativeWidth` and `OverflowCheck` for the values that do not
        fit in the native integer.
        """
        val = 0
        for bit in self._bits:
            val = (val << 1) | bit
        return native_int(val, origin=self.bin())

    def bin(self):
        """Return the binary representation of the stored bits.

            >>> from uintbits.bitvector.core import BitValue
            >>> BitValue(3).bin()
            '0b11'

        """
        return "0b" + self._bits.to01()

    def vrepr(self):
        """Return a verbose string representation."""
        from uintbits.bitvector import printing
        return (printing.BitReprPrinter()).doprint(self)

    def __str__(self):
        """Return the decorated binary representation."""
        from uintbits.bitvector import printing
        return (printing.BitStrPrinter()).doprint(self)

    __repr__ = __str__

    def __int__(self):
        return self.to_int()

    def __bool__(self):
        return self._bits.any()

    def __len__(self):
        return len(self._bits)

    def __iter__(self):
        return iter(self._bits)

    def __getitem__(self, key):
        """Return the bit at position *key* (0 is the most significant)."""
        if not isinstance(key, int) or isinstance(key, bool):
            raise TypeError("invalid index")
        if key < 0 or key >= self.width:
            raise IndexError("index out of range")
        return self._bits[key]

    def __eq__(self, other):
        """Override == operator."""
        if isinstance(other, int) and not isinstance(other, bool):
            return self.val == other
        elif isinstance(other, BitValue):
            return self._bits == other._bits
        else:
            return NotImplemented

    __hash__ = None

    # Zero extension

    def extend(self, extra):
        """Prepend *extra* zero bits, preserving the value.

            >>> from uintbits.bitvector.core import BitValue
            >>> v = BitValue(3)
            >>> v.extend(2)
            >>> v.vrepr()
            'BitValue(0b0011, width=4)'

        """
        if extra < 0:
            raise ValueError("cannot extend by a negative number of bits")
        if extra > 0:
            self._bits = bitarray_util.zeros(extra, endian="big") + self._bits

    def _truncate(self, width):
        """Keep only the *width* least significant bits."""
        excess = self.width - width
        if excess > 0:
            del self._bits[:excess]

    def _trim(self):
        """Remove the leading zeros, keeping at least one bit."""
        first = self._bits.find(bitarray("1", endian="big"))
        if first == -1:
            self._bits = bitarray("0", endian="big")
        elif first > 0:
            del self._bits[:first]

    def _aligned(self, other):
        """Align *other* with self and return the aligned operand.

        Unless the `Aliasing` context is enabled, a narrower *other*
        is cloned before the alignment so that it is not modified.
        """
        other = bitvalueify(other)
        if other.width < self.width:
            if context.Aliasing.current_context:
                logger.debug("widening operand %s to %d bits", other, self.width)
            else:
                other = other.clone()
        align_lengths(self, other)
        return other

    # Bitwise operators

    def and_(self, other):
        """Replace self by the bitwise AND of self and *other*."""
        other = self._aligned(other)
        self._bits &= other._bits

    def or_(self, other):
        """Replace self by the bitwise OR of self and *other*."""
        other = self._aligned(other)
        self._bits |= other._bits

    def xor(self, other):
        """Replace self by the bitwise XOR of self and *other*."""
        other = self._aligned(other)
        self._bits ^= other._bits

    # Arithmetic operators

    def add(self, other):
        """Replace self by the sum of self and *other*.

        A carry out of the most significant bit adds a new bit, so the
        addition never overflows.

            >>> from uintbits.bitvector.core import BitValue
            >>> v = BitValue(7)
            >>> v.add(1)
            >>> v.vrepr()
            'BitValue(0b1000, width=4)'

        """
        other = self._aligned(other)
        bits = self._bits
        carry = 0
        for i in reversed(range(len(bits))):
            s = bits[i] + other._bits[i] + carry
            bits[i] = s % 2
            carry = s // 2

        if carry:
            self.extend(1)
            self._bits[0] = 1
            logger.debug("carry out, width grown to %d", self.width)

    def negate(self):
        """Replace self by its two's complement relative to its width.

        The bits are complemented and then 1 is added, so the result
        depends on the current width.

            >>> from uintbits.bitvector.core import BitValue
            >>> v = BitValue(3)
            >>> v.negate()
            >>> v.vrepr()
            'BitValue(0b01, width=2)'
            >>> v = BitValue(3)
            >>> v.extend(2)
            >>> v.negate()
            >>> v.vrepr()
            'BitValue(0b1101, width=4)'

        Negating zero carries out of the most significant bit.

            >>> v = BitValue(0)
            >>> v.negate()
            >>> v.vrepr()
            'BitValue(0b10, width=2)'

        """
        self._bits.invert()
        self.add(BitValue(1))

    def sub(self, other):
        """Replace self by the difference of self and *other*.

        The subtrahend is negated at the common width of both operands
        and the carry out is discarded, so the result is the difference
        modulo ``2 ** width``. The subtrahend is never modified.

            >>> from uintbits.bitvector.core import BitValue
            >>> v = BitValue(6)
            >>> v.sub(3)
            >>> v.vrepr()
            'BitValue(0b011, width=3)'
            >>> v = BitValue(3)
            >>> v.sub(6)
            >>> v.vrepr()
            'BitValue(0b101, width=3)'

        """
        other = bitvalueify(other)
        width = max(self.width, other.width)

        negated = other.clone()
        negated.extend(width - negated.width)
        negated.negate()

        self.extend(width - self.width)
        self.add(negated)
        self._truncate(width)

    def mul(self, other):
        """Replace self by the product of self and *other*.

        Shifted copies of self are accumulated for each set bit of
        *other*, then the bits are rebuilt with the minimal width of
        the product.

            >>> from uintbits.bitvector.core import BitValue
            >>> v = BitValue(6)
            >>> v.extend(3)
            >>> v.mul(BitValue(3))
            >>> v.vrepr()
            'BitValue(0b10010, width=5)'

        By default the operands and the accumulator are native integers
        (see `NativeWidth`), so a product that does not fit wraps around.
        When the native width is ``None``, the shifted copies are added
        bit by bit and the product is exact.
        """
        other = bitvalueify(other)
        positions = max(self.width, other.width)
        width = context.NativeWidth.current_context

        if width is None:
            product = BitValue(0)
            shifted = self.clone()
            multiplier = other._bits
            for i in range(min(positions, len(multiplier))):
                if multiplier[-1 - i]:
                    product.add(shifted)
                shifted._bits.append(0)
            product._trim()
            self._bits = product._bits
            return

        m, q = self.to_int(), other.to_int()
        result = 0
        for i in range(positions):
            if q & 1:
                partial = native_int(m << (i % width), origin="{} << {}".format(m, i))
                result = native_int(result + partial, origin="product")
            q >>= 1

        if result < 0:
            result &= (1 << width) - 1
        self._bits = BitValue(result)._bits

    # Operator symbols

    def __and__(self, other):
        """Override & operator."""
        from uintbits.bitvector import operation
        if not _is_operand(other):
            return NotImplemented
        return operation.BvAnd(self, other)

    __rand__ = __and__

    def __or__(self, other):
        """Override | operator."""
        from uintbits.bitvector import operation
        if not _is_operand(other):
            return NotImplemented
        return operation.BvOr(self, other)

    __ror__ = __or__

    def __xor__(self, other):
        """Override ^ operator."""
        from uintbits.bitvector import operation
        if not _is_operand(other):
            return NotImplemented
        return operation.BvXor(self, other)

    __rxor__ = __xor__

    def __neg__(self):
        """Override unary minus - operator."""
        from uintbits.bitvector import operation
        return operation.BvNeg(self)

    def __add__(self, other):
        """Override + operator."""
        from uintbits.bitvector import operation
        if not _is_operand(other):
            return NotImplemented
        return operation.BvAdd(self, other)

    __radd__ = __add__

    def __sub__(self, other):
        """Override - operator."""
        from uintbits.bitvector import operation
        if not _is_operand(other):
            return NotImplemented
        return operation.BvSub(self, other)

    def __rsub__(self, other):
        """Override reflected - operator."""
        from uintbits.bitvector import operation
        if not _is_operand(other):
            return NotImplemented
        return operation.BvSub(other, self)

    def __mul__(self, other):
        """Override * operator."""
        from uintbits.bitvector import operation
        if not _is_operand(other):
            return NotImplemented
        return operation.BvMul(self, other)

    __rmul__ = __mul__

    # In-place operator symbols

    def __iand__(self, other):
        if not _is_operand(other):
            return NotImplemented
        self.and_(other)
        return self

    def __ior__(self, other):
        if not _is_operand(other):
            return NotImplemented
        self.or_(other)
        return self

    def __ixor__(self, other):
        if not _is_operand(other):
            return NotImplemented
        self.xor(other)
        return self

    def __iadd__(self, other):
        if not _is_operand(other):
            return NotImplemented
        self.add(other)
        return self

    def __isub__(self, other):
        if not _is_operand(other):
            return NotImplemented
        self.sub(other)
        return self

    def __imul__(self, other):
        if not _is_operand(other):
            return NotImplemented
        self.mul(other)
        return self


def _is_operand(x):
    return isinstance(x, BitValue) or (isinstance(x, int) and not isinstance(x, bool))


def bitvalueify(x):
    """Convert the argument *x* to a bit value.

        >>> from uintbits.bitvector.core import bitvalueify
        >>> print(bitvalueify(5).vrepr())
        BitValue(0b101, width=3)

    Bit values are returned unchanged (not cloned).
    """
    if isinstance(x, BitValue):
        return x
    elif isinstance(x, int) and not isinstance(x, bool):
        return BitValue.from_int(x)
    else:
        msg = "cannot convert '{}' to a bit value"
        raise TypeError(msg.format(type(x).__name__))


def clone(bv):
    """Return a copy of *bv* with independent storage."""
    return bv.clone()


def to_int(bv):
    """Return the native integer represented by *bv*."""
    return bv.to_int()


def to_display_string(bv):
    """Return the decorated binary representation of *bv*.

        >>> from uintbits.bitvector.core import BitValue, to_display_string
        >>> to_display_string(BitValue(5))
        '0b0101'

    """
    return str(bv)


def align_lengths(a, b):
    """Zero-extend the narrower of *a* and *b* in place to the same width.

        >>> from uintbits.bitvector.core import BitValue, align_lengths
        >>> a, b = BitValue(6), BitValue(1)
        >>> align_lengths(a, b)
        >>> b.vrepr()
        'BitValue(0b001, width=3)'

    """
    width = max(a.width, b.width)
    a.extend(width - a.width)
    b.extend(width - b.width)
