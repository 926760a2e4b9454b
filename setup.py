#!/usr/bin/env python3
"""
Setup script for the Research Analysis Platform

Install with:
    pip install -e .

Or with test tooling:
    pip install -e ".[dev]"

Run the API:
    uvicorn app.main:create_app --factory --app-dir backend
"""

from setuptools import setup, find_namespace_packages
from pathlib import Path

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = ""
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

# Backend API dependencies
backend_requirements = [
    "fastapi>=0.110.0",
    "uvicorn[standard]>=0.27.0",
    "pydantic[email]>=2.5.0",
    "pydantic-settings>=2.1.0",
    "httpx>=0.26.0",
    "python-jose[cryptography]>=3.3.0",
    "bcrypt>=4.1.0",
    "slowapi>=0.1.9",
    "pandas>=2.1.0",
    "reportlab>=4.0.0",
    "python-multipart>=0.0.9",
]

# CLI dependencies
cli_requirements = [
    "httpx>=0.26.0",
    "rich>=13.7.0",
]

setup(
    name="research-analysis",
    version="1.0.0",
    description="Research Analysis Platform - research projects, data uploads and analysis method recommendations",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    package_dir={"app": "backend/app", "cli": "cli"},
    packages=(
        find_namespace_packages(where="backend", include=["app", "app.*"])
        + find_namespace_packages(include=["cli", "cli.*"])
    ),
    python_requires=">=3.9",
    install_requires=sorted(set(backend_requirements + cli_requirements)),
    extras_require={
        "cli": cli_requirements,
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
            "faker>=22.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "research=cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Framework :: FastAPI",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering",
    ],
    keywords="research statistics analysis fastapi supabase",
)
