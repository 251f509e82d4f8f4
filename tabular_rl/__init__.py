"""
Tabular Reinforcement Learning Library.

This library provides components for collecting statistics about finite
Markov Decision Processes, together with the numeric utilities they rely on.
"""

__version__ = '0.1.0'

# Import submodules to make them available through the package
from tabular_rl import config
from tabular_rl import logging
from tabular_rl import utils
from tabular_rl import mdp

__all__ = [
    'config',
    'logging',
    'utils',
    'mdp'
]
