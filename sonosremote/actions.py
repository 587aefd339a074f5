"""The UPnP actions which can be sent to a speaker.

Every supported action is a subclass of `Action`. The set is closed: the
classes are listed in `ACTIONS`, keyed by their SOAP action name. An action
knows which service it targets, the arguments it sends and how to turn a
successful response into a result::

    >>> from sonosremote.actions import SetVolume
    >>> action = SetVolume(30)
    >>> action.service.name, action.name
    ('RenderingControl:1', 'SetVolume')
    >>> action.arguments()
    [('InstanceID', '0'), ('Channel', 'Master'), ('DesiredVolume', '30')]

Actions are executed by :meth:`sonosremote.core.Speaker.execute`.
"""

import re

from .exceptions import InputValidationError
from .parsers import parse_current_track, parse_queue, parse_status, parse_volume
from .services import AV_TRANSPORT, CONTENT_DIRECTORY, RENDERING_CONTROL

#: The acknowledgement returned by actions which have no payload.
SUCCESS = "Success"

#: Remediation hints for device error codes, keyed by
#: ``(action name, error code)``.
ERROR_HINTS = {
    ("Play", "701"): (
        "Action currently unavailable. Ensure there is a track selected and "
        "that it is not currently playing."
    ),
    ("Pause", "701"): (
        "Action currently unavailable. Ensure there is a track selected and "
        "that it is currently playing."
    ),
    ("Next", "711"): (
        "Could not find next track. Ensure that you are in the queue and "
        "that there are tracks after the current one."
    ),
    ("Previous", "711"): (
        "Could not find previous track. Ensure that you are in the queue and "
        "that there are tracks before the current one."
    ),
}

SEEK_TARGET_RE = re.compile(r"^[0-9][0-9]?:[0-9][0-9]:[0-9][0-9]\Z")
VOLUME_RE = re.compile(r"^[0-9]+\Z")


class Action:
    """Base class for all actions.

    Subclasses set `service` and `name`, and override `arguments` and
    `on_success` where the defaults do not fit.
    """

    #: `Service`: The service the action is sent to.
    service = AV_TRANSPORT
    #: str: The SOAP action name.
    name = None

    def arguments(self):
        """Return the action's arguments.

        Returns:
            list: ``(name, value)`` tuples, in the order in which they are
            sent.
        """
        return [("InstanceID", "0")]

    def on_success(self, body):  # pylint: disable=unused-argument,no-self-use
        """Interpret the body of a 200 response.

        Args:
            body (str): The response body.

        Returns:
            The action's result. By default the string ``"Success"``.
        """
        return SUCCESS

    def on_device_error(self, error_code):
        """Return a remediation hint for a device error code, or `None`.

        Args:
            error_code (str): The code sent by the device, eg ``"701"``.
        """
        return ERROR_HINTS.get((self.name, error_code))

    def __eq__(self, other):
        return type(self) is type(other) and self.arguments() == other.arguments()

    def __hash__(self):
        return hash((type(self), tuple(self.arguments())))

    def __repr__(self):
        return "<{} {}>".format(self.__class__.__name__, self.arguments())


class Play(Action):
    """Play the currently selected track."""

    name = "Play"

    def arguments(self):
        return [("InstanceID", "0"), ("Speed", "1")]


class Pause(Action):
    """Pause the currently playing track."""

    name = "Pause"


class Seek(Action):
    """Seek to a position in the current track.

    Args:
        target (str): The timestamp, in the format HH:MM:SS or H:MM:SS.

    Raises:
        InputValidationError: for any other format.
    """

    name = "Seek"

    def __init__(self, target):
        if not isinstance(target, str) or not SEEK_TARGET_RE.match(target):
            raise InputValidationError(
                "Invalid timestamp {!r}, use HH:MM:SS format".format(target)
            )
        self.target = target

    def arguments(self):
        return [("InstanceID", "0"), ("Unit", "REL_TIME"), ("Target", self.target)]


class SetURI(Action):
    """Replace what is playing with the stream or track at a URI."""

    name = "SetAVTransportURI"

    def __init__(self, uri):
        self.uri = uri

    def arguments(self):
        return [("InstanceID", "0"), ("CurrentURI", self.uri), ("CurrentURIMetaData", "")]


class SetVolume(Action):
    """Set the speaker's volume.

    Args:
        volume (int or str): The new volume, 0-100. Numeric strings are
            accepted.

    Raises:
        InputValidationError: if the volume is not an integer in range.
    """

    service = RENDERING_CONTROL
    name = "SetVolume"

    def __init__(self, volume):
        if isinstance(volume, str) and VOLUME_RE.match(volume.strip()):
            volume = int(volume.strip())
        elif isinstance(volume, bool) or not isinstance(volume, int):
            raise InputValidationError("Error parsing volume: {!r}".format(volume))
        if not 0 <= volume <= 100:
            raise InputValidationError("Volume out of range: {}".format(volume))
        self.volume = volume

    def arguments(self):
        return [
            ("InstanceID", "0"),
            ("Channel", "Master"),
            ("DesiredVolume", str(self.volume)),
        ]


class GetVolume(Action):
    """Get the speaker's volume, as an int."""

    service = RENDERING_CONTROL
    name = "GetVolume"

    def arguments(self):
        return [("InstanceID", "0"), ("Channel", "Master")]

    def on_success(self, body):
        return parse_volume(body)


class GetCurrentTrack(Action):
    """Get the current track, as a `CurrentTrackData`."""

    name = "GetPositionInfo"

    def on_success(self, body):
        return parse_current_track(body)


class GetStatus(Action):
    """Get the transport state, as a `PlaybackStatus`."""

    name = "GetTransportInfo"

    def on_success(self, body):
        return parse_status(body)


class GetQueue(Action):
    """Get the tracks in the queue, as a list of `QueueItem`.

    Args:
        start (int): The index of the first item to fetch.
        max_items (int): The maximum number of items to fetch.
    """

    service = CONTENT_DIRECTORY
    name = "Browse"

    def __init__(self, start=0, max_items=100):
        self.start = start
        self.max_items = max_items

    def arguments(self):
        return [
            ("ObjectID", "Q:0"),
            ("BrowseFlag", "BrowseDirectChildren"),
            ("Filter", "*"),
            ("StartingIndex", str(self.start)),
            ("RequestedCount", str(self.max_items)),
            ("SortCriteria", ""),
        ]

    def on_success(self, body):
        return parse_queue(body)


class Next(Action):
    """Go to the next track in the queue."""

    name = "Next"


class Previous(Action):
    """Go back to the previous track in the queue."""

    name = "Previous"


class AddToQueue(Action):
    """Add the track at a URI to the end of the queue."""

    name = "AddURIToQueue"

    def __init__(self, uri):
        self.uri = uri

    def arguments(self):
        return [
            ("InstanceID", "0"),
            ("EnqueuedURI", self.uri),
            ("EnqueuedURIMetaData", ""),
            ("DesiredFirstTrackNumberEnqueued", "0"),
            ("EnqueueAsNext", "0"),
        ]


class ClearQueue(Action):
    """Remove all tracks from the queue."""

    name = "RemoveAllTracksFromQueue"


class EndControlSession(Action):
    """End all third-party controlled streaming sessions."""

    name = "EndDirectControlSession"


#: Every supported action class, keyed by SOAP action name.
ACTIONS = {
    cls.name: cls
    for cls in (
        Play,
        Pause,
        Seek,
        SetURI,
        SetVolume,
        GetVolume,
        GetCurrentTrack,
        GetStatus,
        GetQueue,
        Next,
        Previous,
        AddToQueue,
        ClearQueue,
        EndControlSession,
    )
}
