"""Provide context managers to modify the default behaviour."""
import contextlib


class StatefulContext(contextlib.AbstractContextManager):
    """Base class for context managers with history."""

    current_context = None

    def __init__(self, new_context):
        """Initialize the context."""
        self.new_context = new_context

    def __enter__(self):
        self.previous_context = type(self).current_context
        type(self).current_context = self.new_context

    def __exit__(self, *args):
        type(self).current_context = self.previous_context


class NativeWidth(StatefulContext):
    """Control the NativeWidth context.

    Control the bit-width of the native integer used by `BitValue.to_int`
    and by multiplication. By default, the native integer is a 32-bit
    signed machine integer and values that do not fit wrap around.

        >>> from uintbits.bitvector.core import BitValue
        >>> from uintbits.bitvector.context import NativeWidth
        >>> v = BitValue(2 ** 32 - 1)
        >>> v.to_int()
        -1
        >>> with NativeWidth(None):
        ...     v.to_int()
        4294967295
        >>> with NativeWidth(8):
        ...     BitValue(200).to_int()
        -56

    With ``None`` the native integer is an unbounded Python integer
    and multiplication no longer goes through it (see `BitValue.mul`).
    """

    current_context = 32

    def __init__(self, new_context):
        """Initialize the context."""
        assert new_context is None or (
            isinstance(new_context, int) and not isinstance(new_context, bool)
            and new_context > 0)
        super().__init__(new_context)


class OverflowCheck(StatefulContext):
    """Control the OverflowCheck context.

    Control whether or not a value that does not fit in the native
    integer raises `OverflowError` instead of silently wrapping around.
    By default, overflow is not checked.

        >>> from uintbits.bitvector.core import BitValue
        >>> from uintbits.bitvector.context import OverflowCheck
        >>> with OverflowCheck(True):
        ...     BitValue(2 ** 31).to_int()
        Traceback (most recent call last):
         ...
        OverflowError: 0b10000000000000000000000000000000 does not fit in a 32-bit native integer

    The context has no effect when the `NativeWidth` context is ``None``.
    """

    current_context = False

    def __init__(self, new_context):
        """Initialize the context."""
        assert new_context in [True, False]
        super().__init__(new_context)


class Aliasing(StatefulContext):
    """Control the Aliasing context.

    Control whether or not the second operand of a binary operation is
    zero-extended in place when it is narrower than the first one.
    By default, the second operand is never modified.

        >>> from uintbits.bitvector.core import BitValue
        >>> from uintbits.bitvector.context import Aliasing
        >>> a, b = BitValue(6), BitValue(1)
        >>> a.add(b)
        >>> b.width
        1
        >>> with Aliasing(True):
        ...     a.add(b)
        >>> b.width
        3

    When enabled, the pure forms of the operations (see `operation`)
    also widen their second argument, since they only clone the first one.
    """

    current_context = False

    def __init__(self, new_context):
        """Initialize the context."""
        assert new_context in [True, False]
        super().__init__(new_context)
