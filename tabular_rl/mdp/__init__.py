"""
Markov Decision Process (MDP) module for the tabular RL library.

This module provides classes for accumulating experience gathered while
interacting with a finite Markov Decision Process.
"""

from tabular_rl.mdp.experience import Experience

__all__ = [
    'Experience'
]
