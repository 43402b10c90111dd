"""Setup script for galaxy-generator package."""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="galaxy-generator",
    version="0.1.0",
    description="Procedural spiral galaxy point-cloud generator with live regeneration",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["galaxy_gen", "galaxy_gen.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20.0",
        "matplotlib>=3.5.0",
        "pyyaml>=5.4.0",
    ],
    extras_require={
        "export": [
            "imageio>=2.28.0",
        ],
        "dev": [
            "pytest>=6.0.0",
            "pytest-cov>=2.12.0",
            "black>=21.0.0",
            "flake8>=3.9.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "galaxy-gen=galaxy_gen.cli.main:main",
            "galaxy-gen-gui=galaxy_gen.ui.main:run_gui",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Visualization",
    ],
)
