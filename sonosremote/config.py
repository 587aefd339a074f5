"""This module contains configuration variables.

They may be set by your code as follows::

    from sonosremote import config
    ...
    config.VARIABLE = value
"""

SONOS_PORT = 1400
"""The port on which Sonos speakers serve their UPnP control endpoints and
device description.

Every URL built by :class:`~sonosremote.core.Speaker` uses this port. It
only needs changing when talking to a proxy or a test double.
"""


REQUEST_TIMEOUT = 20.0
"""The timeout (in seconds) to be used when sending commands to a Sonos device.

It can be a float, an int, or None. If set to 'None', calls can potentially
wait indefinitely. The timeout applies to the device description fetch made
when a :class:`~sonosremote.core.Speaker` is created and to every action.

REQUEST_TIMEOUT can be set dynamically during program execution to adjust the
timeout at runtime. It can also be overridden for specific calls by using the
'timeout' kwarg in the relevant calling functions.
"""
