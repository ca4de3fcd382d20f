#!/usr/bin/env python3
"""Setup script for the PyMuPDF ruled-table reconstruction package."""

from setuptools import find_packages, setup

setup(
    name="pymupdf-grid",
    version="0.1.0",
    description="Reconstruct ruled tables from PDF vector graphics and map their text into cells.",
    python_requires=">=3.10",
    packages=find_packages(include=["pymupdf_grid", "pymupdf_grid.*"]),
    install_requires=[
        "pymupdf>=1.23",
        "numpy>=1.22",
        "numba>=0.57",
    ],
    extras_require={
        "test": [
            "pytest>=7",
            "reportlab>=3.6",
        ],
    },
    entry_points={
        "console_scripts": [
            "pymupdf-grid=pymupdf_grid.main:main",
        ],
    },
)
