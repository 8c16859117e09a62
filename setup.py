#!/usr/bin/env python3
"""Setup script for crowd-maze package."""

from setuptools import setup, find_packages

setup(
    name="crowd-maze",
    version="0.1.0",
    packages=find_packages(where=".", include=["crowdmaze*", "scripts*"]),
    package_dir={"": "."},
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
        "pyyaml",
        "tenacity",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
