#!/usr/bin/env python
"""
Setup configuration for PoseNet Decoder package

Installation:
    pip install -e .

Installation with development dependencies:
    pip install -e ".[dev]"
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="posenet-decoder",
    version="0.1.0",
    description="Keypoint decoding for PoseNet-style single- and multi-person pose estimation",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="PoseNet Decoder Team",
    author_email="",
    license="MIT",
    python_requires=">=3.8",

    packages=find_packages(include=["posenet*"]),

    # Core dependencies
    install_requires=[
        # Computer Vision
        "opencv-python>=4.5.0",
        "numpy>=1.21.0",

        # Data handling
        "pyyaml>=5.4.0",

        # Progress bars
        "tqdm>=4.60.0",

        # Logging
        "coloredlogs>=15.0",
    ],

    # Optional dependencies for development
    extras_require={
        "dev": [
            "pytest>=6.2.0",
            "pytest-cov>=2.12.0",
            "black>=21.0",
            "isort>=5.9.0",
            "flake8>=3.9.0",
            "mypy>=0.910",
        ],
    },

    # Entry points for CLI tools
    entry_points={
        "console_scripts": [
            "posenet-decode=posenet.cli:main",
        ],
    },

    # Metadata
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Topic :: Scientific/Engineering :: Image Recognition",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],

    keywords="pose-estimation posenet keypoints multi-person decoding",
)
