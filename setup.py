#!/usr/bin/env python

from setuptools import setup

long_description = """

Litedsn
-------
Litedsn parses SQLite connection descriptors such as ``sqlite://a.db?mode=ro``
or ``sqlite::memory:`` into immutable connect options, and turns connect
options back into a canonical descriptor. It is tested on Python versions
3.9.2+, on CPython and PyPy. Litedsn is distributed under the MIT Licence.
"""

setup(
    name="litedsn",
    version="0.1.0",
    description="SQLite connection descriptor parser",
    long_description=long_description,
    author="The Contributors",
    license="MIT",
    python_requires=">=3.9.2",
    install_requires=["loguru>=0.6"],
    extras_require={"test": ["pytest", "hypothesis"]},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: Implementation",
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: Implementation :: PyPy",
        "Operating System :: OS Independent",
        "Topic :: Database :: Front-Ends",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords="SQLite DSN URI connection options",
    packages=("litedsn",),
)
