"""Provide the pure (non-mutating) bit value operators."""
from uintbits.bitvector import core


class Operation(object):
    """Represent the pure form of a bit value operation.

    An operation takes some bit value operands (i.e. `BitValue`) and
    some scalar operands (i.e. `int`), and returns a new bit value.
    The first operand is cloned and the corresponding in-place method
    of `BitValue` is applied to the clone, so the first operand is
    never modified.

    This class is not meant to be instantiated but to provide a base
    class for the different types of operations; calling a subclass
    returns a `BitValue`, not an `Operation`.

    Attributes:
        arity: a pair of number specifying the number of bit value operands
            (at least one) and scalar operands.
        is_symmetric: True if the operator is symmetric with respect to
            its operands.
        is_simple: True if all the operands are bit values. Simple
            operators allow *Automatic Constant Conversion*, that is,
            operands can be passed as plain non-negative integers.

            ::

                >>> from uintbits.bitvector.core import BitValue
                >>> from uintbits.bitvector.operation import BvAdd
                >>> BvAdd(BitValue(1), 2).vrepr()
                'BitValue(0b11, width=2)'

        method: the name of the in-place method of `BitValue`.
        operand_types: a list specifying the types of the operands (optional
            if all operands are bit values)

    Note:
        The second operand is passed to the in-place method as is.
        When the `Aliasing` context is enabled, a second operand
        narrower than the first one is zero-extended in place.
    """

    is_simple = False
    is_symmetric = False

    def __new__(cls, *args):
        args = cls._parse_args(*args)
        return cls.eval(*args)

    @classmethod
    def _parse_args(cls, *args):
        # Automatic Constant Conversion
        if cls.is_simple:
            args = [core.bitvalueify(a) if isinstance(a, int) else a for a in args]

        if len(args) != sum(cls.arity):
            msg = "{} expects {} operands, got {}"
            raise TypeError(msg.format(cls.__name__, sum(cls.arity), len(args)))

        if hasattr(cls, "operand_types"):
            operand_types = cls.operand_types
        else:
            operand_types = [core.BitValue for _ in args]
        for arg_type, arg in zip(operand_types, args):
            if not isinstance(arg, arg_type):
                msg = "invalid operand '{}' for {}"
                raise TypeError(msg.format(type(arg).__name__, cls.__name__))

        assert cls.condition(*args), "{}.condition({}) did not hold".format(cls, args)

        return args

    @classmethod
    def condition(cls, *args):
        """Check if the operands verify the restrictions of the operator."""
        return True

    @classmethod
    def eval(cls, x, *args):
        """Evaluate the operator with given operands.

        This is an internal method. To evaluate an operation,
        use the operator ``()``.
        """
        result = x.clone()
        getattr(result, cls.method)(*args)
        return result


class ZeroExtend(Operation):
    """Extend with zeroes preserving the unsigned value.

        >>> from uintbits.bitvector.core import BitValue
        >>> from uintbits.bitvector.operation import ZeroExtend
        >>> ZeroExtend(BitValue(0b101), 3).vrepr()
        'BitValue(0b000101, width=6)'

    """

    arity = [1, 1]
    method = "extend"
    operand_types = [core.BitValue, int]

    @classmethod
    def condition(cls, x, i):
        return i >= 0


# Bitwise operators

class BvAnd(Operation):
    """Bitwise AND (logical conjunction) operation.

    It overrides the operator & and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from uintbits.bitvector.core import BitValue
        >>> from uintbits.bitvector.operation import BvAnd
        >>> BvAnd(BitValue(6), BitValue(3)).vrepr()
        'BitValue(0b010, width=3)'
        >>> BitValue(6) & 3
        0b0010

    """

    arity = [2, 0]
    is_symmetric = True
    is_simple = True
    method = "and_"


class BvOr(Operation):
    """Bitwise OR (logical disjunction) operation.

    It overrides the operator | and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from uintbits.bitvector.core import BitValue
        >>> from uintbits.bitvector.operation import BvOr
        >>> BvOr(BitValue(6), BitValue(3)).vrepr()
        'BitValue(0b111, width=3)'
        >>> BitValue(6) | 3
        0b0111

    """

    arity = [2, 0]
    is_symmetric = True
    is_simple = True
    method = "or_"


class BvXor(Operation):
    """Bitwise XOR (exclusive-or) operation.

    It overrides the operator ^ and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from uintbits.bitvector.core import BitValue
        >>> from uintbits.bitvector.operation import BvXor
        >>> BvXor(BitValue(6), BitValue(3)).vrepr()
        'BitValue(0b101, width=3)'
        >>> BitValue(6) ^ 3
        0b0101

    """

    arity = [2, 0]
    is_symmetric = True
    is_simple = True
    method = "xor"


# Arithmetic operators

class BvNeg(Operation):
    """Unary minus operation (two's complement relative to the width).

    It overrides the unary operator -. See `Operation` for more information.

        >>> from uintbits.bitvector.core import BitValue
        >>> from uintbits.bitvector.operation import BvNeg, ZeroExtend
        >>> BvNeg(BitValue(1)).vrepr()
        'BitValue(0b1, width=1)'
        >>> BvNeg(ZeroExtend(BitValue(1), 7)).vrepr()
        'BitValue(0b11111111, width=8)'
        >>> -BitValue(0)
        0b010

    """

    arity = [1, 0]
    method = "negate"


class BvAdd(Operation):
    """Addition operation with carry growth.

    It overrides the operator + and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from uintbits.bitvector.core import BitValue
        >>> from uintbits.bitvector.operation import BvAdd
        >>> BvAdd(BitValue(6), BitValue(3)).vrepr()
        'BitValue(0b1001, width=4)'
        >>> BitValue(6) + 3
        0b01001

    """

    arity = [2, 0]
    is_symmetric = True
    is_simple = True
    method = "add"


class BvSub(Operation):
    """Modular subtraction operation.

    It overrides the operator - and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from uintbits.bitvector.core import BitValue
        >>> from uintbits.bitvector.operation import BvSub
        >>> BvSub(BitValue(6), BitValue(3)).vrepr()
        'BitValue(0b011, width=3)'
        >>> BitValue(1) - 2
        0b011

    """

    arity = [2, 0]
    is_simple = True
    method = "sub"


class BvMul(Operation):
    """Shift-and-add multiplication operation.

    It overrides the operator * and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from uintbits.bitvector.core import BitValue
        >>> from uintbits.bitvector.operation import BvMul
        >>> BvMul(BitValue(6), BitValue(3)).vrepr()
        'BitValue(0b10010, width=5)'
        >>> BitValue(6) * 0
        0b00

    """

    arity = [2, 0]
    is_symmetric = True
    is_simple = True
    method = "mul"
