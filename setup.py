#!/usr/bin/env python
"""Setup script for the forge_router package."""

from setuptools import setup, find_packages

setup(
    name="forge_router",
    version="0.1.0",
    description="Route groups, dispatch and reverse routing for the Forge Framework",
    author="Forge Framework",
    author_email="forge@example.com",
    packages=find_packages(include=["forge_router", "forge_router.*"]),
    install_requires=[
        "kink>=0.6.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.8",
)
