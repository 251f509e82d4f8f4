"""
Experience tracking for finite Markov Decision Processes.

This module provides the Experience class, which records how many times each
(state, action, next_state) transition has been observed and how much reward
it produced in total. Model-learning code reads these statistics to estimate
transition probabilities and expected rewards.
"""

from typing import Sequence

import numpy as np

from tabular_rl.logging import get_logger
from tabular_rl.utils.core import Table3D, copy_table_3d

# Table dtypes
VISIT_DTYPE = np.uint64
REWARD_DTYPE = np.float64


class Experience:
    """
    Keeps track of registered transitions and rewards.

    This class is a simple logger of events. It keeps track of both the number
    of times a particular transition has happened and the total reward gained
    in that transition. It does not record events separately, so the results
    of a particular past transition cannot be extracted.

    Alongside the dense S x A x S tables, marginal sums over the next state
    are kept so that per (state, action) totals are available in O(1).
    Indices are not validated: out of range indices are a caller error.
    """

    def __init__(self, s: int, a: int):
        """
        Initialize an empty experience.

        Args:
            s: The number of states of the world
            a: The number of actions available to the agent

        Raises:
            ValueError: If either dimension is not positive
        """
        if s <= 0 or a <= 0:
            raise ValueError(f"Experience needs positive dimensions, got S={s}, A={a}")

        self.S = int(s)
        self.A = int(a)

        self._visits = np.zeros((self.S, self.A, self.S), dtype=VISIT_DTYPE)
        self._visits_sum = np.zeros((self.S, self.A), dtype=VISIT_DTYPE)

        self._rewards = np.zeros((self.S, self.A, self.S), dtype=REWARD_DTYPE)
        self._rewards_sum = np.zeros((self.S, self.A), dtype=REWARD_DTYPE)

        get_logger().debug({
            "event": "experience_created",
            "S": self.S,
            "A": self.A
        })

    def set_visits(self, v: Table3D) -> None:
        """
        Compatibility setter for the visits table.

        Copies an arbitrary three dimensional container, indexable as
        ``v[s][a][s1]``, into the visits table, then recomputes the visit
        sums from it. The container dimensions must be S x A x S; this is
        NOT checked.

        Args:
            v: The external visits container
        """
        copy_table_3d(v, self._visits, self.S, self.A, self.S)

        self._visits.sum(axis=2, out=self._visits_sum)

        get_logger().debug({
            "event": "experience_visits_imported",
            "total_visits": int(self._visits_sum.sum())
        })

    def set_rewards(self, r: Table3D) -> None:
        """
        Compatibility setter for the rewards table.

        Copies an arbitrary three dimensional container, indexable as
        ``r[s][a][s1]``, into the rewards table, then recomputes the reward
        sums from it. The container dimensions must be S x A x S; this is
        NOT checked.

        Args:
            r: The external rewards container
        """
        copy_table_3d(r, self._rewards, self.S, self.A, self.S)

        self._rewards.sum(axis=2, out=self._rewards_sum)

        get_logger().debug({
            "event": "experience_rewards_imported",
            "total_reward": float(self._rewards_sum.sum())
        })

    def record(self, s: int, a: int, s1: int, rew: float) -> None:
        """
        Add a new event to the recordings.

        Args:
            s: Old state
            a: Performed action
            s1: New state
            rew: Obtained reward
        """
        self._visits[s, a, s1] += 1
        self._visits_sum[s, a] += 1

        self._rewards[s, a, s1] += rew
        self._rewards_sum[s, a] += rew

    def record_batch(
        self,
        states: Sequence[int],
        actions: Sequence[int],
        next_states: Sequence[int],
        rewards: Sequence[float]
    ) -> None:
        """
        Add a batch of events to the recordings.

        Equivalent to calling :meth:`record` on each element in turn, but
        vectorized. Repeated transitions within the batch are all counted.

        Args:
            states: Old states
            actions: Performed actions
            next_states: New states
            rewards: Obtained rewards

        Raises:
            ValueError: If the inputs do not all have the same length
        """
        s = np.asarray(states, dtype=np.intp)
        a = np.asarray(actions, dtype=np.intp)
        s1 = np.asarray(next_states, dtype=np.intp)
        rew = np.asarray(rewards, dtype=REWARD_DTYPE)

        if not (len(s) == len(a) == len(s1) == len(rew)):
            raise ValueError(
                "record_batch inputs must have equal lengths, got "
                f"{len(s)}, {len(a)}, {len(s1)}, {len(rew)}"
            )

        ones = np.ones(len(s), dtype=VISIT_DTYPE)
        np.add.at(self._visits, (s, a, s1), ones)
        np.add.at(self._visits_sum, (s, a), ones)

        np.add.at(self._rewards, (s, a, s1), rew)
        np.add.at(self._rewards_sum, (s, a), rew)

        get_logger().debug({
            "event": "experience_batch_recorded",
            "transitions": len(s)
        })

    def reset(self) -> None:
        """Reset all experienced rewards and transitions."""
        self._visits.fill(0)
        self._visits_sum.fill(0)

        self._rewards.fill(0.0)
        self._rewards_sum.fill(0.0)

        get_logger().debug({"event": "experience_reset"})

    def get_visits(self, s: int, a: int, s1: int) -> int:
        """
        Return the number of recorded visits for a transition.

        Args:
            s: Old state
            a: Performed action
            s1: New state
        """
        return int(self._visits[s, a, s1])

    def get_visits_sum(self, s: int, a: int) -> int:
        """
        Return the number of recorded transitions starting with (s, a).

        Args:
            s: The initial state
            a: Performed action
        """
        return int(self._visits_sum[s, a])

    def get_reward(self, s: int, a: int, s1: int) -> float:
        """
        Return the cumulative reward obtained from a specific transition.

        Args:
            s: Old state
            a: Performed action
            s1: New state
        """
        return float(self._rewards[s, a, s1])

    def get_reward_sum(self, s: int, a: int) -> float:
        """
        Return the total reward obtained from transitions starting with (s, a).

        Args:
            s: The initial state
            a: Performed action
        """
        return float(self._rewards_sum[s, a])

    def get_visit_table(self) -> np.ndarray:
        """Return a read-only view of the S x A x S visits table."""
        return _read_only(self._visits)

    def get_visit_sum_table(self) -> np.ndarray:
        """Return a read-only view of the S x A visit sums table."""
        return _read_only(self._visits_sum)

    def get_reward_table(self) -> np.ndarray:
        """Return a read-only view of the S x A x S rewards table."""
        return _read_only(self._rewards)

    def get_reward_sum_table(self) -> np.ndarray:
        """Return a read-only view of the S x A reward sums table."""
        return _read_only(self._rewards_sum)

    def get_s(self) -> int:
        """Return the number of states of the world."""
        return self.S

    def get_a(self) -> int:
        """Return the number of actions available to the agent."""
        return self.A

    def __repr__(self) -> str:
        return f"Experience(S={self.S}, A={self.A}, visits={int(self._visits_sum.sum())})"


def _read_only(table: np.ndarray) -> np.ndarray:
    view = table.view()
    view.flags.writeable = False
    return view
