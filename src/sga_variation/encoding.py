"""Bit-level encoding primitives for binary chromosomes.

This module provides the pure functions that map a binary chromosome to its
real-valued phenotype:
- bits_to_int / int_to_bits: unsigned integers, bit i worth 2**i
- binary_to_gray / gray_to_binary: reflected-binary gray code conversions
- decode_variable: one variable's bits to a real number in [lower, upper)
- decode: a whole chromosome to a phenotype vector
- genotype_string: most-significant-bit-first rendering for display

Storage order is least-significant bit first: ``bits[0]`` is bit 0. The
genotype string reverses each variable so it reads like a binary literal.
"""

from collections.abc import Sequence

import numpy as np


def bits_to_int(bits: Sequence[bool] | np.ndarray) -> int:
    """Interpret a bit sequence as an unsigned integer, least significant bit first.

    Args:
        bits: Bit sequence where ``bits[i]`` contributes ``2**i``.

    Returns:
        The unsigned integer value.

    Examples:
        >>> bits_to_int([1, 0, 1])
        5
        >>> bits_to_int([])
        0
    """
    value = 0
    for i, bit in enumerate(bits):
        if bit:
            value |= 1 << i
    return value


def int_to_bits(value: int, length: int) -> np.ndarray:
    """Encode an unsigned integer as a fixed-length bit array, least significant bit first.

    Args:
        value: Non-negative integer smaller than ``2**length``.
        length: Number of bits.

    Returns:
        Boolean array of shape (length,).

    Raises:
        ValueError: If value is negative or does not fit in ``length`` bits.

    Examples:
        >>> int_to_bits(5, 4).astype(int)
        array([1, 0, 1, 0])
    """
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")
    if value >> length:
        raise ValueError(f"value {value} does not fit in {length} bits")
    return np.array([(value >> i) & 1 for i in range(length)], dtype=bool)


def binary_to_gray(value: int) -> int:
    """Convert an unsigned integer to its reflected-binary gray code.

    Examples:
        >>> [binary_to_gray(b) for b in range(5)]
        [0, 1, 3, 2, 6]
    """
    return value ^ (value >> 1)


def gray_to_binary(value: int) -> int:
    """Convert a reflected-binary gray code back to the integer it encodes.

    Inverse of ``binary_to_gray``: every bit of the result is the XOR of all
    gray bits at or above its position.

    Examples:
        >>> [gray_to_binary(g) for g in [0, 1, 3, 2, 6]]
        [0, 1, 2, 3, 4]
    """
    result = value
    shift = value >> 1
    while shift:
        result ^= shift
        shift >>= 1
    return result


def decode_variable(
    bits: Sequence[bool] | np.ndarray,
    lower: float,
    upper: float,
    gray: bool = False,
) -> float:
    """Map one variable's bit sequence to a real value.

    Computes ``b / 2**len(bits) * (upper - lower) + lower`` where ``b`` is the
    unsigned integer of the bits (gray-decoded first when ``gray`` is True).
    The result lies in ``[lower, upper)``.

    Args:
        bits: Bit sequence, least significant bit first.
        lower: Lower search bound.
        upper: Upper search bound.
        gray: Interpret the bits as gray code.

    Returns:
        The decoded real value.

    Examples:
        >>> decode_variable([0, 0, 0, 0], -1.0, 2.0)
        -1.0
        >>> decode_variable([0, 0, 0, 1], 0.0, 1.0)
        0.5
    """
    value = bits_to_int(bits)
    if gray:
        value = gray_to_binary(value)
    return value / (1 << len(bits)) * (upper - lower) + lower


def decode(
    chromosome: np.ndarray,
    num_vars: int,
    lower: float,
    upper: float,
    gray: bool = False,
) -> np.ndarray:
    """Decode a flat binary chromosome into its phenotype.

    The chromosome is split into ``num_vars`` equal, contiguous segments; each
    segment is decoded independently with ``decode_variable``.

    Args:
        chromosome: Flat boolean array of shape (num_vars * genes_per_var,).
        num_vars: Number of variables encoded in the chromosome.
        lower: Lower search bound shared by all variables.
        upper: Upper search bound shared by all variables.
        gray: Interpret each segment as gray code.

    Returns:
        Float array of shape (num_vars,).

    Raises:
        ValueError: If the chromosome length is not a multiple of num_vars.
    """
    if num_vars <= 0:
        raise ValueError(f"num_vars must be positive, got {num_vars}")
    if len(chromosome) % num_vars != 0:
        raise ValueError(f"chromosome of length {len(chromosome)} cannot be split into {num_vars} variables")

    segments = np.asarray(chromosome, dtype=bool).reshape(num_vars, -1)
    return np.array([decode_variable(seg, lower, upper, gray) for seg in segments], dtype=np.float64)


def genotype_string(chromosome: np.ndarray, genes_per_var: int) -> str:
    """Render a chromosome as a string of 0/1, most significant bit first per variable.

    Examples:
        >>> genotype_string(np.array([1, 1, 0, 0, 1, 0], dtype=bool), 3)
        '011010'
    """
    segments = np.asarray(chromosome, dtype=bool).reshape(-1, genes_per_var)
    return "".join("".join("1" if bit else "0" for bit in seg[::-1]) for seg in segments)
