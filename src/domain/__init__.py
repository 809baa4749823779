"""Domain layer: errors, constants and schemas."""

from .errors import (
    DirectoryUnavailableError,
    ErrorCodes,
    FiledropError,
    InvalidFilenameError,
    MalformedUploadError,
    StorageWriteError,
    TemplateDocumentError,
    UndefinedVariableError,
    UploadTooLargeError,
)
from .schemas import FileEntry, ListenEndpoint, NetworkInterface

__all__ = [
    "FiledropError",
    "ErrorCodes",
    "UndefinedVariableError",
    "TemplateDocumentError",
    "DirectoryUnavailableError",
    "MalformedUploadError",
    "InvalidFilenameError",
    "UploadTooLargeError",
    "StorageWriteError",
    "FileEntry",
    "ListenEndpoint",
    "NetworkInterface",
]
