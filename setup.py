"""
Setup script for the tabular_rl package.
"""

from setuptools import setup, find_packages

setup(
    name="tabular-rl",
    version="0.1.0",
    description="Experience statistics and numeric utilities for finite MDPs",
    packages=find_packages(exclude=["tabular_rl.tests"]),
    install_requires=[
        "numpy>=1.24.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    python_requires=">=3.8",
)
