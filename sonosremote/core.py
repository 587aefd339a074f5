"""The core module contains the Speaker class that implements
the main entry to the sonosremote functionality
"""

import ipaddress
import logging
from xml.parsers.expat import ExpatError

import requests
import xmltodict

from . import actions, config
from .exceptions import (
    ContentError,
    DeviceDescriptionError,
    DeviceFault,
    InputValidationError,
    MalformedFault,
    SonosTransportError,
)
from .parsers import parse_error_code
from .soap import build_envelope, prepare_headers
from .utils import prettify

_LOG = logging.getLogger(__name__)

DESCRIPTION_ENDPOINT = "/xml/device_description.xml"

# Fields copied from the <device> element of the description into
# `Speaker.speaker_info`
_DEVICE_FIELDS = {
    "zone_name": "roomName",
    "model_name": "modelName",
    "model_number": "modelNumber",
    "software_version": "softwareVersion",
    "serial_number": "serialNum",
}


def extract_uid(description):
    """Find the unique device id in a device description document.

    The id is the text starting at ``RINCON`` up to the next ``<``. The
    document is scanned, not parsed.

    Raises:
        ContentError: if no id can be found.
    """
    begin = description.find("RINCON")
    if begin == -1:
        raise ContentError("Unable to find speaker uid")
    end = description.find("<", begin)
    if end == -1:
        raise ContentError("Error extracting speaker uid")
    return description[begin:end]


class Speaker:

    """A connection to a single Sonos speaker.

    Creating a Speaker fetches the speaker's device description, so it will
    fail if the speaker cannot be reached::

        >>> from sonosremote import Speaker
        >>> speaker = Speaker("192.168.1.101")
        >>> speaker.uid
        'RINCON_000E58C3892E01400'
        >>> speaker.execute(actions.GetVolume())
        25

    `execute` sends an action and returns its result. Failures are raised:

    * `SonosTransportError` if the request cannot be sent or the response
      cannot be read
    * `DeviceFault` if the speaker returns a UPnP error code
    * `MalformedFault` if the speaker returns an error without a code
    * `ContentError` if a successful response lacks the expected data

    Nothing is retried.

    ..  rubric:: Convenience Methods
    ..  autosummary::

        play
        pause
        seek
        next
        previous
        play_uri
        set_volume
        get_volume
        get_current_track_info
        get_transport_info
        get_queue
        add_uri_to_queue
        clear_queue
        end_direct_control_session
        enter_queue
        action_then_current
    """

    def __init__(self, ip_address, timeout=None):
        """
        Args:
            ip_address (str): The speaker's IPv4 address.
            timeout (float): Timeout for the device description request.
                Defaults to `config.REQUEST_TIMEOUT`.

        Raises:
            InputValidationError: if ``ip_address`` is not an IPv4 address.
            SonosTransportError: if the description cannot be fetched.
            DeviceDescriptionError: if the speaker does not return it.
            ContentError: if it does not contain a device id.
        """
        # Sonos does not (yet) support IPv6
        try:
            ipaddress.IPv4Address(ip_address)
        except ValueError as error:
            raise InputValidationError("Not a valid IP address string") from error
        #: The speaker's ip address
        self.ip_address = ip_address
        self._session = requests.Session()

        description = self._fetch_description(timeout)
        self._uid = extract_uid(description)
        #: dict: Identity of the speaker, read from its device description
        self.speaker_info = self._parse_description(description)
        _LOG.info("Connected to speaker %s at %s", self._uid, ip_address)

    def __str__(self):
        return "<{} object at ip {}>".format(self.__class__.__name__, self.ip_address)

    def __repr__(self):
        return '{}("{}")'.format(self.__class__.__name__, self.ip_address)

    @property
    def uid(self):
        """str: A unique identifier, eg ``'RINCON_000XXXXXXXX01400'``."""
        return self._uid

    def get_info(self):
        """Describe the speaker without a network round trip."""
        lines = ["UID: {}".format(self._uid), "IP: {}".format(self.ip_address)]
        if self.speaker_info.get("zone_name"):
            lines.append("Zone: {}".format(self.speaker_info["zone_name"]))
        if self.speaker_info.get("model_name"):
            lines.append("Model: {}".format(self.speaker_info["model_name"]))
        return "\n".join(lines)

    def _url(self, endpoint):
        return "http://{}:{}{}".format(self.ip_address, config.SONOS_PORT, endpoint)

    def _fetch_description(self, timeout):
        url = self._url(DESCRIPTION_ENDPOINT)
        try:
            response = self._session.get(
                url, timeout=config.REQUEST_TIMEOUT if timeout is None else timeout
            )
            text = response.text
        except requests.exceptions.RequestException as error:
            raise SonosTransportError(
                "Request to device failed: {}".format(error)
            ) from error
        if response.status_code != 200:
            raise DeviceDescriptionError(
                "Device returned unsuccessful response: {}".format(
                    response.status_code
                ),
                response.status_code,
            )
        return text

    def _parse_description(self, description):
        info = {"uid": self._uid, "ip_address": self.ip_address}
        try:
            device = xmltodict.parse(description)["root"]["device"]
        except (ExpatError, KeyError, TypeError):
            _LOG.debug("Could not parse device description of %s", self.ip_address)
            return info
        if not isinstance(device, dict):
            _LOG.debug("Device description of %s has no device fields", self.ip_address)
            return info
        for key, field in _DEVICE_FIELDS.items():
            value = device.get(field)
            info[key] = value if isinstance(value, str) else None
        return info

    def execute(self, action, timeout=None):
        """Send an action to the speaker and return its result.

        Args:
            action (`sonosremote.actions.Action`): The action to send.
            timeout (float): Timeout for this request. Defaults to
                `config.REQUEST_TIMEOUT`.

        Returns:
            The result of ``action.on_success``: ``"Success"`` for actions
            without a payload, otherwise an int, `CurrentTrackData`,
            `PlaybackStatus` or list of `QueueItem`.

        Raises:
            SoapEncodingError: if the request cannot be built.
            SonosTransportError: if the request fails.
            DeviceFault: if the speaker returns an error code.
            MalformedFault: if the speaker returns an error without a code.
            ContentError: if a successful response cannot be interpreted.
        """
        service = action.service
        args = action.arguments()
        body = build_envelope(action.name, service.name, args)
        headers = prepare_headers(service.name, action.name)

        _LOG.debug("Sending %s %s to %s", action.name, args, self.ip_address)
        # Check log level before logging XML, since prettifying it is
        # expensive
        if _LOG.isEnabledFor(logging.DEBUG):
            _LOG.debug("Sending %s, %s", headers, prettify(body))

        try:
            response = self._session.post(
                self._url(service.endpoint),
                headers=headers,
                data=body.encode("utf-8"),
                timeout=config.REQUEST_TIMEOUT if timeout is None else timeout,
            )
            text = response.text
        except requests.exceptions.RequestException as error:
            raise SonosTransportError(
                "Error sending request: {}".format(error)
            ) from error

        status = response.status_code
        _LOG.debug("Received status %s from %s: %s", status, self.ip_address, text)
        if status == 200:
            return action.on_success(text)
        return self.handle_device_error(action, status, text)

    def handle_device_error(self, action, status, xml_error):
        """Dissect an error response, and raise an appropriate exception.

        Args:
            action (`sonosremote.actions.Action`): The action which failed.
            status (int): The HTTP status of the response.
            xml_error (str): The body of the response.

        Raises:
            DeviceFault: if the body contains an ``errorCode``.
            MalformedFault: otherwise.
        """
        try:
            error_code = parse_error_code(xml_error, action.name, action.service.name)
        except ContentError as error:
            _LOG.error("Unknown error received from %s", self.ip_address)
            raise MalformedFault(
                "Speaker responded with {}: non-200 response, no specific code "
                "found ({})".format(status, error),
                status_code=status,
                error_xml=xml_error,
            ) from error

        description = action.service.describe_error(error_code)
        details = action.on_device_error(error_code)
        if details is None:
            details = "device error code {}".format(error_code)
            if description:
                details += " ({})".format(description)
        _LOG.debug("%s failed on %s with error %s", action.name, self.ip_address, error_code)
        raise DeviceFault(
            message="Speaker responded with {}\n{}".format(status, details),
            error_code=error_code,
            error_xml=xml_error,
            status_code=status,
            action=action.name,
            error_description=description,
        )

    def play(self):
        """Play the currently selected track."""
        return self.execute(actions.Play())

    def pause(self):
        """Pause the currently playing track."""
        return self.execute(actions.Pause())

    def seek(self, position):
        """Seek to a timestamp (HH:MM:SS or H:MM:SS) in the current track."""
        return self.execute(actions.Seek(position))

    def next(self):
        """Go to the next track."""
        return self.execute(actions.Next())

    def previous(self):
        """Go back to the previously played track."""
        return self.execute(actions.Previous())

    def play_uri(self, uri):
        """Replace what is playing with the stream or track at ``uri``."""
        return self.execute(actions.SetURI(uri))

    def set_volume(self, volume):
        """Set the volume (0-100)."""
        return self.execute(actions.SetVolume(volume))

    def get_volume(self):
        """Return the volume, as an int between 0 and 100."""
        return self.execute(actions.GetVolume())

    def get_current_track_info(self):
        """Return the current track, as a `CurrentTrackData`.

        Raises:
            ContentError: if another source, eg Spotify, has control of the
                speaker and no track data is available.
        """
        return self.execute(actions.GetCurrentTrack())

    def get_transport_info(self):
        """Return the playback state, as a `PlaybackStatus`."""
        return self.execute(actions.GetStatus())

    def get_queue(self, start=0, max_items=100):
        """Return the tracks in the queue, as a list of `QueueItem`."""
        return self.execute(actions.GetQueue(start, max_items))

    def add_uri_to_queue(self, uri):
        """Add the track at ``uri`` to the end of the queue."""
        return self.execute(actions.AddToQueue(uri))

    def clear_queue(self):
        """Remove all tracks from the queue."""
        return self.execute(actions.ClearQueue())

    def end_direct_control_session(self):
        """End all third-party controlled streaming sessions."""
        return self.execute(actions.EndControlSession())

    def enter_queue(self):
        """Make the speaker's own queue the source of playback."""
        return self.execute(actions.SetURI("x-rincon-queue:{}#0".format(self._uid)))

    def action_then_current(self, action):
        """Execute ``action`` and then return the current track."""
        self.execute(action)
        return self.get_current_track_info()
