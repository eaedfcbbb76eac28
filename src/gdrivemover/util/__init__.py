from .mime import (
    DEFAULT_UPLOAD_MIME,
    FOLDER_MIME,
    ROOT_FOLDER_NAME,
    is_folder,
    is_google_app,
)
from .size import format_size
from .time import parse_rfc3339

__all__ = [
    "FOLDER_MIME",
    "ROOT_FOLDER_NAME",
    "DEFAULT_UPLOAD_MIME",
    "is_folder",
    "is_google_app",
    "format_size",
    "parse_rfc3339",
]
