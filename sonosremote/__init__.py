"""sonosremote is a small library and command line tool to control Sonos
speakers over UPnP."""


import logging

from .core import Speaker
from .exceptions import SonosRemoteException

# Will be parsed by setup.py to determine package metadata
__author__ = "The sonosremote developers"
# Please increment the version number and add the suffix "-dev" after
# a release, to make it possible to identify in-development code
__version__ = "0.3.0"
__license__ = "MIT License"

# You really should not `import *` - it is poor practice
# but if you do, here is what you get:
__all__ = [
    "Speaker",
    "SonosRemoteException",
]

# http://docs.python.org/2/howto/logging.html#library-config
# Avoids spurious error messages if no logger is configured by the user

logging.getLogger(__name__).addHandler(logging.NullHandler())
