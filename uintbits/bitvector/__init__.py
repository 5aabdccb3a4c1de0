"""Manipulate unsigned integers as explicit sequences of bits.

This module represents unsigned integers with a growable sequence of
bits (most significant first) and implements bitwise logic and
ripple-carry arithmetic directly over the bits: addition with carry
growth, two's complement subtraction and shift-and-add multiplication.

"""
