"""Upload client for the animation relay."""

from .client_errors import ClientRequestError
from .relay_client import RelayClient
from .upload_session import SelectedImage, UploadSession

__all__ = [
    "ClientRequestError",
    "RelayClient",
    "SelectedImage",
    "UploadSession",
]
