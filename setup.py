"""
Setup configuration for the terrain_tile package.

Version 0.1.0 - Grid generation, Terrarium elevation mapping, OBJ export
and the terrain-tile command line.
"""

from setuptools import find_packages, setup

setup(
    name="terrain-tile",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["tile_cli"],
    install_requires=[
        "numpy>=1.20.0",
        "matplotlib>=3.3.0",
        "pillow>=8.0.0",
        "opencv-python>=4.5.0",
        "scipy>=1.6.0",
        "typer>=0.9.0",
        "rich>=12.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "terrain-tile=terrain_tile.cli:main",
        ],
    },
    description="Terrain meshes for web-mercator tiles from Terrarium elevation images",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: GIS",
    ],
    python_requires=">=3.8",
)
