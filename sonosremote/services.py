# pylint: disable=invalid-name

"""Static descriptions of the Sonos UPnP services used by sonosremote.

>>> from sonosremote.services import get_service
>>> service = get_service("AVTransport")
>>> service.name, service.endpoint
('AVTransport:1', '/MediaRenderer/AVTransport/Control')
>>> service.urn
'urn:schemas-upnp-org:service:AVTransport:1'

Info about a Sonos device, including every service it offers, is available
at <IP_address>:1400/xml/device_description.xml in the <service> tags. Only
the three services needed for playback, volume and queue control are
described here.
"""

# UPnP Spec at http://upnp.org/specs/arch/UPnP-arch-DeviceArchitecture-v1.0.pdf

from collections import namedtuple
from types import MappingProxyType


# From table 3.3 in
# http://upnp.org/specs/arch/UPnP-arch-DeviceArchitecture-v1.1.pdf
# This list may not be complete, but should be good enough to be going
# on with.  Error codes between 700-799 are defined for particular
# services, and are added per service below. NB It may well be that SONOS
# does not use some of these error codes.
UPNP_ERRORS = {
    400: "Bad Request",
    401: "Invalid Action",
    402: "Invalid Args",
    404: "Invalid Var",
    412: "Precondition Failed",
    501: "Action Failed",
    600: "Argument Value Invalid",
    601: "Argument Value Out of Range",
    602: "Optional Action Not Implemented",
    603: "Out Of Memory",
    604: "Human Intervention Required",
    605: "String Argument Too Long",
    606: "Action Not Authorized",
    607: "Signature Failure",
    608: "Signature Missing",
    609: "Not Encrypted",
    610: "Invalid Sequence",
    611: "Invalid Control URL",
    612: "No Such Session",
}


class Service(namedtuple("ServiceBase", "name, endpoint, errors")):
    """A UPnP service: its versioned name, control URL path and the
    meaning of the error codes it can return."""

    @property
    def urn(self):
        """str: The service namespace, used for the action element and the
        SOAPACTION header."""
        return "urn:schemas-upnp-org:service:{}".format(self.name)

    def describe_error(self, error_code):
        """Return the standard meaning of a UPnP error code, or ``""``.

        Args:
            error_code (str): The error code, as sent by the device.
        """
        try:
            return self.errors.get(int(error_code), "")
        except (TypeError, ValueError):
            return ""

    def __str__(self):
        return self.name


def _errors(extra=None):
    errors = dict(UPNP_ERRORS)
    errors.update(extra or {})
    return MappingProxyType(errors)


#: UPnP standard AV Transport service, for functions relating to transport
#: management, eg play, stop, seek, queues etc.
AV_TRANSPORT = Service(
    "AVTransport:1",
    "/MediaRenderer/AVTransport/Control",
    # For error codes, see
    # http://upnp.org/specs/av/UPnP-av-AVTransport-v1-Service.pdf
    _errors(
        {
            701: "Transition not available",
            702: "No contents",
            703: "Read error",
            704: "Format not supported for playback",
            705: "Transport is locked",
            706: "Write error",
            707: "Media is protected or not writeable",
            708: "Format not supported for recording",
            709: "Media is full",
            710: "Seek mode not supported",
            711: "Illegal seek target",
            712: "Play mode not supported",
            713: "Record quality not supported",
            714: "Illegal MIME-Type",
            715: 'Content "BUSY"',
            716: "Resource Not found",
            717: "Play speed not supported",
            718: "Invalid InstanceID",
            737: "No DNS Server",
            738: "Bad Domain Name",
            739: "Server Error",
        }
    ),
)

#: UPnP standard Content Directory service, for functions relating to
#: browsing, searching and listing available music, including the queue.
CONTENT_DIRECTORY = Service(
    "ContentDirectory:1",
    "/MediaServer/ContentDirectory/Control",
    # For error codes, see table 2.7.16 in
    # http://upnp.org/specs/av/UPnP-av-ContentDirectory-v1-Service.pdf
    _errors(
        {
            701: "No such object",
            702: "Invalid CurrentTagValue",
            703: "Invalid NewTagValue",
            704: "Required tag",
            705: "Read only tag",
            706: "Parameter Mismatch",
            708: "Unsupported or invalid search criteria",
            709: "Unsupported or invalid sort criteria",
            710: "No such container",
            711: "Restricted object",
            712: "Bad metadata",
            713: "Restricted parent object",
            714: "No such source resource",
            715: "Resource access denied",
            716: "Transfer busy",
            717: "No such file transfer",
            718: "No such destination resource",
            719: "Destination resource access denied",
            720: "Cannot process the request",
        }
    ),
)

#: UPnP standard rendering control service, for functions relating to
#: playback rendering, eg volume.
RENDERING_CONTROL = Service(
    "RenderingControl:1",
    "/MediaRenderer/RenderingControl/Control",
    _errors(),
)

SERVICES = MappingProxyType(
    {
        "AVTransport": AV_TRANSPORT,
        "ContentDirectory": CONTENT_DIRECTORY,
        "RenderingControl": RENDERING_CONTROL,
    }
)


def get_service(category):
    """Return the `Service` for a category.

    Args:
        category (str): One of ``"AVTransport"``, ``"ContentDirectory"`` or
            ``"RenderingControl"``.

    Raises:
        KeyError: for any other category.
    """
    return SERVICES[category]
