"""Gradually change a speaker's volume.

The speaker's volume is read, changed by a fixed step, and the loop sleeps
for a fixed interval, until the volume reaches 0 (when decreasing) or 100
(when increasing). This is done client side, unlike the device's own
``RampToVolume`` action, so any step size and interval can be used.
"""

import logging
import time

from .exceptions import InputValidationError
from .utils import clamp_volume

_LOG = logging.getLogger(__name__)


def gradually_change_volume(speaker, interval, volume_change, sleep=time.sleep):
    """Change the volume by ``volume_change`` every ``interval`` seconds.

    Args:
        speaker (`Speaker`): The speaker to control.
        interval (float): Seconds to wait between changes.
        volume_change (int): The change per step, -100 to 100, not 0.
        sleep (callable): Called with ``interval`` between steps.

    Returns:
        list: The volumes which were set, in order.

    Raises:
        InputValidationError: for an invalid interval or change.
    """
    if isinstance(volume_change, bool) or not isinstance(volume_change, int):
        raise InputValidationError("Volume change must be an integer")
    if volume_change == 0 or abs(volume_change) > 100:
        raise InputValidationError(
            "Volume change must be non-zero and no more than 100"
        )
    if interval < 0:
        raise InputValidationError("Interval must not be negative")

    limit = 0 if volume_change < 0 else 100
    started = time.monotonic()
    volumes = []
    while True:
        volume = speaker.get_volume()
        if volume == limit:
            _LOG.info("Volume has reached %s, stopping", limit)
            break

        new_volume = clamp_volume(volume + volume_change)
        speaker.set_volume(new_volume)
        volumes.append(new_volume)
        _LOG.info(
            "Changed volume from %s to %s after %.1f seconds",
            volume,
            new_volume,
            time.monotonic() - started,
        )
        if new_volume == limit:
            break
        sleep(interval)
    return volumes
