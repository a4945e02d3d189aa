"""setup.py for sane-array.

Version is read from sane_array/__init__.py so it is defined in one place.
"""

import os
import re

from setuptools import find_packages, setup


def _read_version():
    """Read the package version from source without importing it."""
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                        "sane_array", "__init__.py")
    with open(path) as f:
        match = re.search(r'^__version__ = "([^"]+)"', f.read(), re.M)
    if match is None:
        raise RuntimeError("Unable to find __version__ in sane_array/__init__.py")
    return match.group(1)


setup(
    name="sane-array",
    version=_read_version(),
    description="Read and write SANE (Simple Array of Numbers Encoding) arrays with NumPy",
    license="MIT",
    python_requires=">=3.9",
    packages=find_packages(include=["sane_array", "sane_array.*"]),
    install_requires=[
        "numpy>=1.22",
        "rich>=12.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "sane = sane_array.__main__:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Intended Audience :: Developers",
        "Topic :: Scientific/Engineering",
    ],
)
