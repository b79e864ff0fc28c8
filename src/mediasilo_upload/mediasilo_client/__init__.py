"""MediaSilo API client."""

from .client import HOST_CONTEXT_HEADER, MediaSiloClient, MediaSiloError
from .models import Asset, UploadContext, UploadResult, UploadTicket

__all__ = [
    "HOST_CONTEXT_HEADER",
    "MediaSiloClient",
    "MediaSiloError",
    "Asset",
    "UploadContext",
    "UploadResult",
    "UploadTicket",
]
