#!/usr/bin/env python

import io
import re

from setuptools import setup

# Get package metadata from sonosremote/__init__.py
with io.open("sonosremote/__init__.py", encoding="utf-8") as file_:
    SRC = file_.read()

METADATA = dict(re.findall(r'__([a-z]+)__\s*=\s*"([^"]+)"', SRC))

REQUIREMENTS = [
    "requests",
    "xmltodict",
]

TEST_REQUIREMENTS = [
    "pytest",
    "requests-mock",
]

setup(
    name="sonosremote",
    version=METADATA["version"],
    description="Control Sonos speakers over UPnP from Python or the command line",
    author=METADATA["author"],
    license=METADATA["license"],
    packages=["sonosremote"],
    python_requires=">=3.7",
    install_requires=REQUIREMENTS,
    extras_require={"testing": TEST_REQUIREMENTS},
    entry_points={"console_scripts": ["sonosremote = sonosremote.cli:main"]},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Home Automation",
        "Topic :: Multimedia :: Sound/Audio :: Players",
    ],
)
