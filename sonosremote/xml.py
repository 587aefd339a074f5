# pylint: disable=invalid-name,wrong-import-position,redefined-builtin

"""This module contains XML related utility functions."""


import sys
import re

import xml.etree.ElementTree as XML

from .exceptions import ContentError, TagNotFoundError


# Create regular expression for filtering invalid characters, from:
# http://stackoverflow.com/questions/1707890/
# fast-way-to-filter-illegal-xml-unicode-chars-in-python

illegal_unichrs = [
    (0x00, 0x08),
    (0x0B, 0x0C),
    (0x0E, 0x1F),
    (0x7F, 0x84),
    (0x86, 0x9F),
    (0xD800, 0xDFFF),
    (0xFDD0, 0xFDDF),
    (0xFFFE, 0xFFFF),
    (0x1FFFE, 0x1FFFF),
    (0x2FFFE, 0x2FFFF),
    (0x3FFFE, 0x3FFFF),
    (0x4FFFE, 0x4FFFF),
    (0x5FFFE, 0x5FFFF),
    (0x6FFFE, 0x6FFFF),
    (0x7FFFE, 0x7FFFF),
    (0x8FFFE, 0x8FFFF),
    (0x9FFFE, 0x9FFFF),
    (0xAFFFE, 0xAFFFF),
    (0xBFFFE, 0xBFFFF),
    (0xCFFFE, 0xCFFFF),
    (0xDFFFE, 0xDFFFF),
    (0xEFFFE, 0xEFFFF),
    (0xFFFFE, 0xFFFFF),
    (0x10FFFE, 0x10FFFF),
]

illegal_ranges = [
    "{}-{}".format(chr(low), chr(high))
    for (low, high) in illegal_unichrs
    if low < sys.maxunicode
]

illegal_xml_re = re.compile("[%s]" % "".join(illegal_ranges))

#: Namespaces, and their usual abbreviations, used in the DIDL-Lite metadata
#: embedded in Sonos responses.
NAMESPACES = {
    "dc": "http://purl.org/dc/elements/1.1/",
    "upnp": "urn:schemas-upnp-org:metadata-1-0/upnp/",
    "": "urn:schemas-upnp-org:metadata-1-0/DIDL-Lite/",
    "r": "urn:schemas-rinconnetworks-com:metadata-1-0/",
}

#: Matches names which may be used, unprefixed, as XML element names.
xml_name_re = re.compile(r"^[A-Za-z_][\w.\-]*\Z")


def local_name(tag):
    """Return the local part of an ElementTree tag.

    >>> local_name('{urn:schemas-upnp-org:control-1-0}errorCode')
    'errorCode'
    """
    return tag.rsplit("}", 1)[-1]


def parse(xml_string):
    """Parse a (cleaned) XML string into an ElementTree element.

    Characters which are illegal in XML are filtered out and the parse is
    retried once before giving up.

    Args:
        xml_string (str): The XML text (unicode, not utf-8).

    Returns:
        :class:`~xml.etree.ElementTree.Element`: the root element.

    Raises:
        ContentError: if the text is not well formed XML.
    """
    try:
        return XML.fromstring(xml_string.encode("utf-8"))
    except XML.ParseError:
        filtered = illegal_xml_re.sub("", xml_string)
    try:
        return XML.fromstring(filtered.encode("utf-8"))
    except XML.ParseError as error:
        raise ContentError("Error parsing xml: {}".format(error)) from error


def find_tag(element, tag):
    """Return the first descendant of ``element`` whose local name is
    ``tag``, in document order.

    ``element`` itself is considered too. Namespaces are ignored, so this
    works whatever is left over after textual cleaning.

    Raises:
        TagNotFoundError: if there is no such tag.
    """
    for node in element.iter():
        if local_name(node.tag) == tag:
            return node
    raise TagNotFoundError(tag)


def find_all(element, tag):
    """Yield every descendant of ``element`` with local name ``tag``."""
    for node in element.iter():
        if local_name(node.tag) == tag:
            yield node


def get_text(node, tag=None):
    """Return the text of ``node``, which must not be empty.

    Raises:
        TagNotFoundError: if the node has no text.
    """
    if node.text is None:
        tag = tag or local_name(node.tag)
        raise TagNotFoundError(tag, "'{}' tag has no text".format(tag))
    return node.text


def find_text(element, tag):
    """Return the text of the first ``tag`` descendant of ``element``.

    Raises:
        TagNotFoundError: if the tag is missing or empty.
    """
    return get_text(find_tag(element, tag), tag)


def find_optional_text(element, *tags):
    """Return the text of the first of ``tags`` found under ``element``, or
    `None` if none of them is present with text."""
    for tag in tags:
        for node in find_all(element, tag):
            if node.text:
                return node.text
            break
    return None
