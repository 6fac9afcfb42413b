# MIT License
# Copyright (c) 2025 Hashborn

"""
Checked unsigned integer arithmetic.

Genesis amounts are u128 on the target chain, parsed shares and tokens are
u256, and their products are u512. Python ints never wrap, so every operation here checks
the result against the declared width and raises ArithmeticOverflow
instead of producing a value the chain could not represent.
"""

from .common import ArithmeticOverflow

U128_BITS = 128
U256_BITS = 256
U512_BITS = 512

U128_MAX = (1 << U128_BITS) - 1
U256_MAX = (1 << U256_BITS) - 1


def _max_for(bits: int) -> int:
    return (1 << bits) - 1


def check_width(value: int, bits: int, what: str = "value") -> int:
    """Returns value unchanged if it fits an unsigned `bits`-wide integer."""
    if value < 0:
        raise ArithmeticOverflow(f"{what} is negative: {value}")
    if value > _max_for(bits):
        raise ArithmeticOverflow(f"{what} does not fit in u{bits}: {value}")
    return value


def checked_add(a: int, b: int, bits: int = U128_BITS) -> int:
    return check_width(a + b, bits, f"sum {a} + {b}")


def checked_sub(a: int, b: int, bits: int = U128_BITS) -> int:
    return check_width(a - b, bits, f"difference {a} - {b}")


def checked_mul(a: int, b: int, bits: int = U256_BITS) -> int:
    return check_width(a * b, bits, f"product {a} * {b}")


def checked_div(a: int, b: int, bits: int = U256_BITS) -> int:
    """Floor division; a zero divisor has no defined quotient and is rejected."""
    if b == 0:
        raise ArithmeticOverflow(f"division of {a} by zero")
    return check_width(a // b, bits, f"quotient {a} / {b}")


def narrow_u128(value: int) -> int:
    return check_width(value, U128_BITS, "amount")


def checked_sum(values, bits: int = U128_BITS) -> int:
    total = 0
    for v in values:
        total = checked_add(total, v, bits)
    return total


def mul_div_floor(a: int, b: int, d: int) -> int:
    """
    Computes floor(a * b / d) and narrows the result to u128.

    Operands are u256, so the product is held at u512 and can never
    overflow; only the final quotient is bounded.

    Used for delegated tokens = shares * validator_tokens / validator_shares.
    """
    check_width(a, U256_BITS, "multiplicand")
    check_width(b, U256_BITS, "multiplier")
    check_width(d, U256_BITS, "divisor")
    product = checked_mul(a, b, U512_BITS)
    quotient = checked_div(product, d, U512_BITS)
    return narrow_u128(quotient)
