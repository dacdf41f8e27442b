#!/usr/bin/env python
"""Setup script to make the EPA CAMD to EIA-860 crosswalk directly installable with pip."""

from pathlib import Path

from setuptools import find_packages, setup

readme_path = Path(__file__).parent / "README.rst"
long_description = readme_path.read_text()

setup(
    name="catalystcoop.epacamd_eia",
    description="A crosswalk between EPA CAMD emissions units and EIA-860 generators.",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    version="0.1.0",
    author="Catalyst Cooperative",
    author_email="pudl@catalyst.coop",
    maintainer="Catalyst Cooperative",
    maintainer_email="pudl@catalyst.coop",
    url="https://github.com/catalyst-cooperative/epacamd-eia-crosswalk",
    license="MIT",
    keywords=[
        "electricity",
        "energy",
        "data",
        "epa camd",
        "epa cems",
        "eia 860",
        "crosswalk",
        "record linkage",
    ],
    python_requires=">=3.11",
    install_requires=[
        "click>=8.1,<9",
        "coloredlogs>=14.0,<16",
        "dagster>=1.9,<2",
        "pandas>=2.2,<3",
        "pandera>=0.20,<1",
        "pydantic>=2.7,<3",
        "pyyaml>=6,<7",
        "xlsxwriter>=3.2,<4",
    ],
    extras_require={
        "dev": [
            "ruff>=0.5",
        ],
        "test": [
            "coverage>=7.3",
            "pytest>=8,<9",
            "pytest-console-scripts>=1.4,<2",
            "pytest-cov>=4.1",
            "python-calamine>=0.2",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering",
    ],
    packages=find_packages("src"),
    package_dir={"": "src"},
    # package_data is data that is deployed within the python package on the
    # user's system. setuptools will get whatever is listed in MANIFEST.in
    include_package_data=True,
    # This defines the interfaces to the command line scripts we're including:
    entry_points={
        "console_scripts": [
            "epacamd_eia_crosswalk = epacamd_eia.cli:main",
        ]
    },
)
