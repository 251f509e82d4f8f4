"""
Utility functions for the tabular RL library.

This module provides generic numeric helpers used by the tabular components,
including table copying, tolerance-based float comparison and lexicographic
vector comparison.
"""

from tabular_rl.utils.core import (
    EPSILON,
    Ordering,
    OrderedVector,
    Cursor,
    ReverseCursor,
    copy_table_3d,
    check_equal_small,
    check_different_small,
    check_equal_general,
    check_different_general,
    veccmp,
    vec_less,
    vec_greater,
    sequential_sorted_contains,
    base_iter
)

__all__ = [
    'EPSILON',
    'Ordering',
    'OrderedVector',
    'Cursor',
    'ReverseCursor',
    'copy_table_3d',
    'check_equal_small',
    'check_different_small',
    'check_equal_general',
    'check_different_general',
    'veccmp',
    'vec_less',
    'vec_greater',
    'sequential_sorted_contains',
    'base_iter'
]
