"""Parsers which turn the bodies of successful (and failed) action responses
into Python values.

Each parser cleans the raw body (see :mod:`sonosremote.soap`), parses it
with ElementTree and looks tags up by their bare local name. A missing
required tag raises `TagNotFoundError`; optional tags become `None`.
"""

import logging
from collections import namedtuple
from xml.sax.saxutils import unescape

from .exceptions import ContentError, TagNotFoundError
from .soap import clean_metadata, general_clean
from .xml import find_all, find_optional_text, find_tag, find_text, get_text, parse

_LOG = logging.getLogger(__name__)

#: The TrackDuration reported when another source, eg Spotify Connect, has
#: control of the transport.
NOT_IMPLEMENTED = "NOT_IMPLEMENTED"


class CurrentTrackData(
    namedtuple("CurrentTrackDataBase", "position, duration, uri, title, artist")
):
    """The track currently loaded on a speaker."""

    def __str__(self):
        return "{} by {}\nURI: {}\nPosition: {}/{}".format(
            self.title or "None",
            self.artist or "None",
            self.uri,
            self.position,
            self.duration,
        )


class QueueItem(namedtuple("QueueItemBase", "uri, duration, title, artist")):
    """A track in a speaker's queue."""

    def __str__(self):
        return "{} by {}\nURI: {}\nDuration: {}".format(
            self.title or "None",
            self.artist or "None",
            self.uri,
            self.duration or "N/A",
        )


class PlaybackStatus(namedtuple("PlaybackStatusBase", "state, status")):
    """The transport state (eg ``PLAYING``) and status (normally ``OK``)."""

    def __str__(self):
        return "{}: {}".format(self.status, self.state)


def _didl_text(text):
    """Decode the entity level left over from the embedded DIDL-Lite, eg
    ``&amp;`` in a title or a URI query string."""
    return None if text is None else unescape(text)


def _artist(element):
    return _didl_text(find_optional_text(element, "albumArtist", "creator"))


def parse_volume(xml):
    """Parse a GetVolume response.

    Returns:
        int: The volume, 0-100.
    """
    tree = parse(general_clean(xml, "GetVolume", "RenderingControl:1"))
    volume = find_text(tree, "CurrentVolume")
    try:
        return int(volume)
    except ValueError as error:
        raise ContentError("Invalid volume: {!r}".format(volume)) from error


def parse_status(xml):
    """Parse a GetTransportInfo response into a `PlaybackStatus`."""
    tree = parse(general_clean(xml, "GetTransportInfo", "AVTransport:1"))
    return PlaybackStatus(
        state=find_text(tree, "CurrentTransportState"),
        status=find_text(tree, "CurrentTransportStatus"),
    )


def parse_current_track(xml):
    """Parse a GetPositionInfo response into `CurrentTrackData`.

    Raises:
        ContentError: if the speaker reports no track data, which happens
            when an external source is in control of playback.
        TagNotFoundError: if a required tag is missing.
    """
    tree = parse(clean_metadata(general_clean(xml, "GetPositionInfo", "AVTransport:1")))

    duration = find_text(tree, "TrackDuration")
    if duration == NOT_IMPLEMENTED:
        raise ContentError(
            "Unable to fetch current track data. Another source may have "
            "control of the speaker."
        )

    return CurrentTrackData(
        position=find_text(tree, "RelTime"),
        duration=duration,
        uri=find_text(tree, "TrackURI"),
        title=_didl_text(find_optional_text(tree, "title")),
        artist=_artist(tree),
    )


def parse_queue_item(item):
    """Parse a single DIDL-Lite ``item`` element into a `QueueItem`.

    Raises:
        TagNotFoundError: if the item has no ``res`` element, or it is empty.
    """
    res = find_tag(item, "res")
    return QueueItem(
        uri=_didl_text(get_text(res, "res")),
        duration=res.get("duration"),
        title=_didl_text(find_optional_text(item, "title")),
        artist=_artist(item),
    )


def parse_queue(xml):
    """Parse a Browse response for the queue.

    Returns:
        list: `QueueItem` tuples, in queue order. The first malformed item
        fails the whole parse.
    """
    tree = parse(clean_metadata(general_clean(xml, "Browse", "ContentDirectory:1")))
    items = [parse_queue_item(item) for item in find_all(tree, "item")]
    _LOG.debug("Parsed %d queue items", len(items))
    return items


def parse_error_code(xml, action_name, service_name):
    """Extract the device error code from a fault response.

    An error response looks something like this::

        <s:Envelope ...>
          <s:Body>
            <s:Fault>
              <faultcode>s:Client</faultcode>
              <faultstring>UPnPError</faultstring>
              <detail>
                <UPnPError xmlns="urn:schemas-upnp-org:control-1-0">
                  <errorCode>error code</errorCode>
                </UPnPError>
              </detail>
            </s:Fault>
          </s:Body>
        </s:Envelope>

    Returns:
        str: The error code, eg ``"701"``.

    Raises:
        ContentError: if the body is not XML.
        TagNotFoundError: if there is no ``errorCode``.
    """
    tree = parse(general_clean(xml, action_name, service_name))
    code = find_text(tree, "errorCode").strip()
    if not code:
        raise TagNotFoundError("errorCode", "'errorCode' tag is empty")
    return code
