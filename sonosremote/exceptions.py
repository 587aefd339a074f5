"""Exceptions that are used by sonosremote."""


class SonosRemoteException(Exception):

    """Base class for all sonosremote exceptions."""


class SonosTransportError(SonosRemoteException):

    """A request could not be sent to the speaker, or its response could not
    be read.

    The underlying :mod:`requests` exception is available as ``__cause__``.
    """


class InputValidationError(SonosRemoteException, ValueError):

    """Raised when user supplied data is rejected before any network call,
    e.g. a volume outside 0-100."""


class SoapEncodingError(SonosRemoteException):

    """Raised if a SOAP request envelope cannot be serialised."""


class DeviceFault(SonosRemoteException):

    """A UPnP Fault Code, raised in response to actions sent over the
    network.

    """

    # pylint: disable=too-many-arguments
    def __init__(
        self, message, error_code, error_xml, status_code, action, error_description=""
    ):
        """
        Args:
            message (str): A human readable explanation of the fault.
            error_code (str): The UPnP Error Code as a string.
            error_xml (str): The body of the fault response.
            status_code (int): The HTTP status of the response.
            action (str): The name of the action which failed.
            error_description (str): The standard UPnP meaning of the error
                code for the service. Default is ""
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.error_xml = error_xml
        self.status_code = status_code
        self.action = action
        self.error_description = error_description

    def __str__(self):
        return self.message


class MalformedFault(SonosRemoteException):

    """A non-200 response from which no device error code could be
    extracted."""

    def __init__(self, message, status_code, error_xml):
        """
        Args:
            message (str): A description of the failure.
            status_code (int): The HTTP status of the response.
            error_xml (str): The raw body of the response.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_xml = error_xml

    def __str__(self):
        return self.message


class ContentError(SonosRemoteException):

    """Raised if a successful response does not contain the expected data,
    or its XML cannot be parsed."""


class TagNotFoundError(ContentError):

    """Raised when a required tag, or its text, is missing from a response.

    Attributes:
        tag (str): The local name of the missing tag
    """

    def __init__(self, tag, message=None):
        """
        Args:
            tag (str): The local name of the missing tag
            message (str): An optional message. Defaults to
                ``"'<tag>' tag not found"``
        """
        self.tag = tag
        super().__init__(message or "'{}' tag not found".format(tag))


class DeviceDescriptionError(SonosRemoteException):

    """Raised when a speaker's device description cannot be fetched, eg when
    the device responds with a non-200 status.

    Attributes:
        status_code (int): The HTTP status of the response
    """

    def __init__(self, message, status_code):
        super().__init__(message)
        self.status_code = status_code
