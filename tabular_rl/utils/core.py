"""
Core numeric utilities for tabular RL.

This module provides small generic helpers shared by the tabular components:
bulk copy between three-dimensional containers, tolerance-based floating
point comparison, lexicographic vector comparison, and a sequential
containment test over sorted sequences.

It also provides the iterator adaptor pair used with base_iter: Cursor, a
forward position into a sequence, and ReverseCursor, a backward position
whose base() unwraps to the matching Cursor.
"""

import copy
from enum import IntEnum
from typing import Any, Protocol, Sequence, TypeVar, overload

import numpy as np

# Machine epsilon for doubles (spacing of floats at magnitude 1)
EPSILON = float(np.finfo(float).eps)

# Absolute tolerance used for values expected near [0, 1]
SMALL_TOLERANCE = 5 * EPSILON

T = TypeVar('T')
B = TypeVar('B')


class Table1D(Protocol):
    """Anything supporting one level of index access."""

    def __getitem__(self, index: int) -> Any: ...


class Table2D(Protocol):
    """Anything supporting two levels of index access."""

    def __getitem__(self, index: int) -> Table1D: ...


class Table3D(Protocol):
    """
    Anything supporting three levels of index access, i.e. ``t[i][j][k]``.

    Nested lists, numpy arrays and dicts of dicts all qualify.
    """

    def __getitem__(self, index: int) -> Table2D: ...


class HasBase(Protocol[B]):
    """An iterator adaptor that can be unwrapped to its underlying iterator."""

    def base(self) -> B: ...


class Ordering(IntEnum):
    """Result of a three-way comparison."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


def copy_table_3d(in_table: Table3D, out_table: Any, d1: int, d2: int, d3: int) -> None:
    """
    Copy a 3d container into another 3d container.

    Both containers need to support data access through ``[i][j][k]``, and
    must be at least ``d1 x d2 x d3`` in size. No size checks are performed
    on either container.

    Args:
        in_table: Input container
        out_table: Output container, written in place
        d1: First dimension of the containers
        d2: Second dimension of the containers
        d3: Third dimension of the containers
    """
    for i in range(d1):
        for j in range(d2):
            for k in range(d3):
                out_table[i][j][k] = in_table[i][j][k]


def check_equal_small(a: float, b: float) -> bool:
    """
    Check whether two numbers near [0, 1] are reasonably equal.

    If the numbers are not near [0, 1] the result may not be what is
    expected. The order of the parameters is not important.

    Args:
        a: The first number to compare
        b: The second number to compare

    Returns:
        True if the two numbers are close enough, False otherwise
    """
    return abs(a - b) <= SMALL_TOLERANCE


def check_different_small(a: float, b: float) -> bool:
    """Negation of :func:`check_equal_small`."""
    return not check_equal_small(a, b)


def check_equal_general(a: float, b: float) -> bool:
    """
    Check whether two numbers of any magnitude are reasonably equal.

    The absolute test of :func:`check_equal_small` is tried first, so values
    near zero never reach the relative test. Otherwise the difference is
    compared relative to the smaller magnitude of the two.

    Args:
        a: The first number to compare
        b: The second number to compare

    Returns:
        True if the two numbers are close enough, False otherwise
    """
    if check_equal_small(a, b):
        return True
    smallest = min(abs(a), abs(b))
    if smallest == 0.0:
        return False
    return abs(a - b) / smallest < EPSILON


def check_different_general(a: float, b: float) -> bool:
    """Negation of :func:`check_equal_general`."""
    return not check_equal_general(a, b)


def veccmp(lhs: Sequence[float], rhs: Sequence[float]) -> Ordering:
    """
    Lexicographically compare two vectors of equal size.

    Args:
        lhs: The left hand side of the comparison
        rhs: The right hand side of the comparison

    Returns:
        Ordering.GREATER if lhs > rhs, Ordering.EQUAL if they are equal,
        Ordering.LESS otherwise
    """
    assert len(lhs) == len(rhs), "veccmp requires vectors of equal size"
    for left, right in zip(lhs, rhs):
        if left > right:
            return Ordering.GREATER
        if left < right:
            return Ordering.LESS
    return Ordering.EQUAL


def vec_less(lhs: Sequence[float], rhs: Sequence[float]) -> bool:
    """Lexicographic ``lhs < rhs``."""
    return veccmp(lhs, rhs) < 0


def vec_greater(lhs: Sequence[float], rhs: Sequence[float]) -> bool:
    """Lexicographic ``lhs > rhs``."""
    return veccmp(lhs, rhs) > 0


class OrderedVector:
    """
    Wrapper giving a vector lexicographic ordering operators.

    numpy arrays compare elementwise, so this wrapper is needed to sort them
    or to use them with ``<``/``>`` in the lexicographic sense. It can be
    passed directly as a sort key: ``sorted(vectors, key=OrderedVector)``.
    """

    __slots__ = ('vector',)

    def __init__(self, vector: Sequence[float]):
        self.vector = vector

    def __lt__(self, other: 'OrderedVector') -> bool:
        return vec_less(self.vector, other.vector)

    def __gt__(self, other: 'OrderedVector') -> bool:
        return vec_greater(self.vector, other.vector)

    def __le__(self, other: 'OrderedVector') -> bool:
        return veccmp(self.vector, other.vector) <= 0

    def __ge__(self, other: 'OrderedVector') -> bool:
        return veccmp(self.vector, other.vector) >= 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, OrderedVector):
            return NotImplemented
        return veccmp(self.vector, other.vector) == Ordering.EQUAL

    __hash__ = None

    def __repr__(self) -> str:
        return f"OrderedVector({list(self.vector)})"


def sequential_sorted_contains(v: Sequence[T], elem: T) -> bool:
    """
    Return whether an ascending sorted sequence contains an element.

    For small sequences a sequential scan is faster than a binary search.
    The scan stops at the first element not smaller than ``elem``. The
    result is unspecified if ``v`` is not sorted.

    Args:
        v: The sorted sequence to scan
        elem: The element to look for

    Returns:
        True if the sequence contains the element, False otherwise
    """
    for e in v:
        if e < elem:
            continue
        return bool(e == elem)
    return False


@overload
def base_iter(it: HasBase[B]) -> B: ...


@overload
def base_iter(it: T) -> T: ...


def base_iter(it):
    """
    Return the base iterator of an iterator adaptor.

    A base iterator exists if the iterator implements a ``base()`` method
    (e.g. :class:`ReverseCursor`); otherwise a shallow copy of the iterator
    is returned, so advancing the result leaves the input untouched. Objects
    that cannot be copied, such as generators, raise ``TypeError``.

    Args:
        it: The iterator to return the base of

    Returns:
        The base iterator of the input
    """
    base = getattr(it, 'base', None)
    if callable(base):
        return base()
    return copy.copy(it)


class Cursor:
    """
    A forward position into a sequence.

    This is the base iterator :func:`base_iter` recovers from a
    :class:`ReverseCursor`.
    """

    __slots__ = ('sequence', 'position')

    def __init__(self, sequence: Sequence[T], position: int = 0):
        self.sequence = sequence
        self.position = position

    def get(self):
        return self.sequence[self.position]

    def advance(self) -> 'Cursor':
        return Cursor(self.sequence, self.position + 1)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return self.sequence is other.sequence and self.position == other.position

    __hash__ = None

    def __repr__(self) -> str:
        return f"Cursor(position={self.position})"


class ReverseCursor:
    """
    A backward position into a sequence.

    ``ReverseCursor(seq, p)`` refers to ``seq[p - 1]``; its base is the
    forward cursor at ``p``, one past the element it refers to.
    """

    __slots__ = ('sequence', 'position')

    def __init__(self, sequence: Sequence[T], position: int):
        self.sequence = sequence
        self.position = position

    @classmethod
    def rbegin(cls, sequence: Sequence[T]) -> 'ReverseCursor':
        return cls(sequence, len(sequence))

    def get(self):
        return self.sequence[self.position - 1]

    def advance(self) -> 'ReverseCursor':
        return ReverseCursor(self.sequence, self.position - 1)

    def base(self) -> Cursor:
        return Cursor(self.sequence, self.position)

    def __repr__(self) -> str:
        return f"ReverseCursor(position={self.position})"
