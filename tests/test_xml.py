"""Tests for the xml module."""

import pytest

from sonosremote import xml
from sonosremote.exceptions import ContentError, TagNotFoundError


DOCUMENT = (
    "<Envelope><Body>"
    '<UPnPError xmlns="urn:schemas-upnp-org:control-1-0">'
    "<errorCode>402</errorCode><errorDescription/>"
    "</UPnPError>"
    "</Body></Envelope>"
)


def test_local_name():
    assert xml.local_name("{urn:schemas-upnp-org:control-1-0}errorCode") == "errorCode"
    assert xml.local_name("errorCode") == "errorCode"


def test_find_tag_ignores_namespaces():
    tree = xml.parse(DOCUMENT)
    assert xml.find_text(tree, "errorCode") == "402"


def test_find_tag_missing():
    tree = xml.parse(DOCUMENT)
    with pytest.raises(TagNotFoundError) as excinfo:
        xml.find_tag(tree, "CurrentVolume")
    assert excinfo.value.tag == "CurrentVolume"
    assert "'CurrentVolume' tag not found" in str(excinfo.value)


def test_find_text_of_empty_tag():
    tree = xml.parse(DOCUMENT)
    with pytest.raises(TagNotFoundError):
        xml.find_text(tree, "errorDescription")


def test_find_optional_text():
    tree = xml.parse(DOCUMENT)
    assert xml.find_optional_text(tree, "errorDescription") is None
    assert xml.find_optional_text(tree, "title", "errorCode") == "402"


def test_parse_filters_illegal_characters():
    tree = xml.parse("<a>A\x04B</a>")
    assert tree.text == "AB"


def test_parse_invalid_xml():
    with pytest.raises(ContentError):
        xml.parse("<a><b></a>")
