#!/usr/bin/env python3
"""
Setup script for yamlite.

yamlite is pure Python: a single-pass reader and a small writer for a
restricted YAML subset. The version is read from yamlite/__init__.py so it
is defined in one place.

Install:
    pip install .            # library and the 'yamlite' command
    pip install -e .[test]   # development install with the test tools
"""

import os
import re
from setuptools import setup

def read_version():
    """Return __version__ from the package without importing it."""
    here = os.path.dirname(os.path.abspath(__file__))
    with open(os.path.join(here, 'yamlite', '__init__.py'), encoding='utf-8') as f:
        match = re.search(r'^__version__ = "([^"]+)"', f.read(), re.M)
    if match is None:
        raise RuntimeError("unable to find __version__ in yamlite/__init__.py")
    return match.group(1)

def read_long_description():
    """Use the package docstring as the long description."""
    here = os.path.dirname(os.path.abspath(__file__))
    with open(os.path.join(here, 'yamlite', '__init__.py'), encoding='utf-8') as f:
        match = re.search(r'^"""(.*?)"""', f.read(), re.S)
    return match.group(1).strip() if match else ''

setup(
    name='yamlite',
    version=read_version(),
    description='Streaming reader and writer for a small YAML subset',
    long_description=read_long_description(),
    long_description_content_type='text/plain',
    packages=['yamlite'],
    package_data={'yamlite': ['__init__.pyi']},
    python_requires='>=3.8',
    install_requires=[],
    extras_require={
        'test': ['pytest>=7', 'PyYAML>=6'],
    },
    entry_points={
        'console_scripts': ['yamlite=yamlite.__main__:main'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'Topic :: Text Processing :: Markup',
    ],
)
