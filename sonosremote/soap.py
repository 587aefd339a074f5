# -*- coding: utf-8 -*-

"""Classes and functions for handling sonosremote's basic SOAP requirements.

This module does not handle anything like the full `SOAP Specification
<http://www.w3.org/TR/soap/>`_ , but is enough for talking to a Sonos
speaker. Sonos uses SOAP for UPnP communications.

Requests are built from a string template. Responses are *cleaned*
textually before they are handed to ElementTree: the SOAP framing prefixes
are stripped first, and then, for actions whose results embed escaped
DIDL-Lite metadata, the metadata is unescaped and its namespace prefixes
removed. The order matters, since unescaping first would expose the
embedded metadata to the framing substitutions.
"""

import re
from xml.sax.saxutils import escape

from .exceptions import ContentError, SoapEncodingError
from .xml import NAMESPACES, illegal_xml_re, local_name, parse, xml_name_re

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP_ENCODING = "http://schemas.xmlsoap.org/soap/encoding/"

# Sonos uses SOAP to send commands in the RPC form. A complete request
# should look something like this:

# POST path of control URL HTTP/1.1
# HOST: host of control URL:port of control URL
# CONTENT-LENGTH: bytes in body
# CONTENT-TYPE: text/xml; charset="utf-8"
# SOAPACTION: urn:schemas-upnp-org:service:serviceType:v#actionName
#
# <?xml version="1.0"?>
# <s:Envelope
#   xmlns:s="http://schemas.xmlsoap.org/soap/envelope/"
#   s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">
#   <s:Body>
#       <u:actionName
#           xmlns:u="urn:schemas-upnp-org:service:serviceType:v">
#           <argumentName>in arg value</argumentName>
#           ... other in args and their values go here, if any
#       </u:actionName>
#   </s:Body>
# </s:Envelope>

# pylint: disable=bad-continuation
SOAP_BODY_TEMPLATE = (
    '<?xml version="1.0"?>'
    '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/"'
    ' s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">'
    "<s:Body>"
    '<u:{action} xmlns:u="urn:schemas-upnp-org:service:{service}">'
    "{arguments}"
    "</u:{action}>"
    "</s:Body>"
    "</s:Envelope>"
)  # noqa PEP8

_SOAP_PREFIX_RE = re.compile(r"<(/?)s:")
_SERVICE_DECLARATION_RE = re.compile(r'\s+xmlns:u="urn:schemas-upnp-org:service:[^"]*"')
_ACTION_PREFIX_RE = re.compile(r"<(/?)u:")
_METADATA_PREFIX_RE = re.compile(r"<(/?)(?:dc|upnp|r):")
_METADATA_DECLARATIONS = [
    ("xmlns:" + prefix if prefix else "xmlns", uri)
    for prefix, uri in NAMESPACES.items()
]


def soap_action(service_name, action_name):
    """Return the SOAPACTION header value for an action.

    >>> soap_action("AVTransport:1", "Play")
    'urn:schemas-upnp-org:service:AVTransport:1#Play'
    """
    return "urn:schemas-upnp-org:service:{}#{}".format(service_name, action_name)


def prepare_headers(service_name, action_name):
    """Return the http headers for an action request."""
    return {
        "Content-Type": 'text/xml; charset="utf-8"',
        "SOAPACTION": soap_action(service_name, action_name),
    }


def wrap_arguments(args=None):
    """Wrap a list of tuples in xml ready to pass into a SOAP request.

    Args:
        args (list):  a list of (name, value) tuples specifying the
            name of each argument and its value, eg
            ``[('InstanceID', 0), ('Speed', 1)]``. The value
            can be a string or something with a string representation. The
            arguments are escaped and wrapped in <name> tags, in order.

    Raises:
        SoapEncodingError: if a name is not a valid element name, or a value
            contains characters which cannot be represented in XML.

    >>> wrap_arguments([('InstanceID', 0), ('Speed', 1)])
    '<InstanceID>0</InstanceID><Speed>1</Speed>'
    """
    if args is None:
        args = []

    tags = []
    for name, value in args:
        if not xml_name_re.match(name):
            raise SoapEncodingError("Invalid argument name: {!r}".format(name))
        text = "%s" % value
        if illegal_xml_re.search(text):
            raise SoapEncodingError(
                "Value of argument {} cannot be represented in XML".format(name)
            )
        tags.append(
            "<{name}>{value}</{name}>".format(
                name=name, value=escape(text, {'"': "&quot;"})
            )
        )
    return "".join(tags)


def build_envelope(action_name, service_name, arguments=None):
    """Build the SOAP envelope for an action.

    Args:
        action_name (str): The name of the action, eg ``"Play"``.
        service_name (str): The versioned service name, eg
            ``"AVTransport:1"``.
        arguments (list): ``(name, value)`` tuples, in the order in which the
            elements should appear.

    Returns:
        str: The envelope (unicode; it is encoded to utf-8 when sent).

    Raises:
        SoapEncodingError: if the envelope cannot be serialised.
    """
    if not xml_name_re.match(action_name):
        raise SoapEncodingError("Invalid action name: {!r}".format(action_name))
    return SOAP_BODY_TEMPLATE.format(
        action=action_name,
        service=escape(service_name, {'"': "&quot;"}),
        arguments=wrap_arguments(arguments),
    )


def remove_attribute(xml, name, value):
    """Remove every ``name="value"`` attribute, with its leading whitespace.

    >>> remove_attribute('<a  x:y="z" b="c"/>', "x:y", "z")
    '<a b="c"/>'
    """
    return re.sub(r'\s+{}="{}"'.format(re.escape(name), re.escape(value)), "", xml)


def strip_soap_framing(xml):
    """Remove the ``s:`` prefixes and SOAP namespace attributes."""
    xml = remove_attribute(xml, "xmlns:s", SOAP_ENV_NS)
    xml = remove_attribute(xml, "s:encodingStyle", SOAP_ENCODING)
    return _SOAP_PREFIX_RE.sub(r"<\1", xml)


def general_clean(xml, action_name, service_name):
    """Clean a raw SOAP response so that tags can be found by bare name.

    The ``s:`` framing is removed, the ``xmlns:u`` declaration for the
    service is dropped and ``u:{action_name}Response`` becomes
    ``{action_name}Response`` (the request form ``u:{action_name}`` likewise loses
    its prefix).

    Args:
        xml (str): The response body.
        action_name (str): The name of the action the response belongs to.
        service_name (str): The versioned service name, eg
            ``"AVTransport:1"``.

    Returns:
        str: The cleaned text. It has not been checked for well-formedness.
    """
    xml = strip_soap_framing(xml)
    xml = remove_attribute(
        xml, "xmlns:u", "urn:schemas-upnp-org:service:{}".format(service_name)
    )
    return re.sub(
        r"<(/?)u:({}(?:Response)?)(?=[\s/>])".format(re.escape(action_name)),
        r"<\1\2",
        xml,
    )


def unescape_entities(xml):
    """Turn the escaped markup of embedded metadata back into tags.

    ``&amp;`` is left alone, so that escaped ampersands in the metadata
    itself keep the document well formed. The parsers decode that last
    level on the text they read from the metadata.
    """
    return xml.replace("&quot;", '"').replace("&lt;", "<").replace("&gt;", ">")


def clean_metadata(xml):
    """Unescape embedded DIDL-Lite metadata and strip its namespaces.

    Must be applied to the output of `general_clean`.

    Args:
        xml (str): A response which has been through `general_clean`.

    Returns:
        str: The text with ``dc:``, ``upnp:`` and ``r:`` element prefixes and
        their declarations removed.
    """
    xml = unescape_entities(xml)
    for name, uri in _METADATA_DECLARATIONS:
        xml = remove_attribute(xml, name, uri)
    return _METADATA_PREFIX_RE.sub(r"<\1", xml)


def unwrap_envelope(xml):
    """Extract the action name and arguments from a SOAP envelope.

    Works for requests built by `build_envelope` and for action responses.

    Args:
        xml (str): A SOAP envelope.

    Returns:
        tuple: ``(action_name, arguments)``, where ``action_name`` has its
        namespace prefix removed and ``arguments`` is a list of
        ``(name, value)`` tuples in document order. Empty elements have
        the value ``""``.

    Raises:
        ContentError: if there is no action element in the body.
    """
    xml = _SERVICE_DECLARATION_RE.sub("", strip_soap_framing(xml))
    tree = parse(_ACTION_PREFIX_RE.sub(r"<\1", xml))
    body = tree.find("Body")
    if body is None or len(body) == 0:
        raise ContentError("No action found in SOAP body")
    action = body[0]
    arguments = [(local_name(arg.tag), arg.text or "") for arg in action]
    return local_name(action.tag), arguments
