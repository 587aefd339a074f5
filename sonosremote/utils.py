"""This module contains utility functions used internally by sonosremote."""

from xml.parsers.expat import ExpatError


def prettify(unicode_text):
    """Return a pretty-printed version of a unicode XML string.

    Useful for debugging. Text which is not well formed is returned
    unchanged.

    Args:
        unicode_text (str): A text representation of XML (unicode,
            *not* utf-8).

    Returns:
        str: A pretty-printed version of the input.

    """
    import xml.dom.minidom  # pylint: disable=import-outside-toplevel

    try:
        reparsed = xml.dom.minidom.parseString(unicode_text.encode("utf-8"))
    except ExpatError:
        return unicode_text
    return reparsed.toprettyxml(indent="  ", newl="\n")


def clamp_volume(volume):
    """Coerce a volume into the range 0-100.

    >>> clamp_volume(120), clamp_volume(-5), clamp_volume(30)
    (100, 0, 30)
    """
    return max(0, min(int(volume), 100))
