#!/usr/bin/env python3


__copyright__ = 'Copyright (c) 2023'
__license__ = 'BSD 3-Clause License'
__version__ = '0.1.0'
__status__ = 'beta'

import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

with open('requirements.txt') as f:
    required = [line for line in f.read().splitlines() if line and not line.startswith('#')]

setuptools.setup(
    name="fefastq",
    version=__version__,
    description="FASTQ record validation and quality score statistics",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(include=["fefastq", "fefastq.*"]),
    python_requires=">=3.10",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Development Status :: 4 - Beta",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
    ],
    install_requires=required,
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "fefastq = fefastq.cli:run",
        ],
    },
)
