"""Exceptions raised by the upload client."""


class ClientRequestError(Exception):
    """Raised when the relay call fails or returns a non-2xx status."""
