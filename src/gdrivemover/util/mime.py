from __future__ import annotations

FOLDER_MIME: str = "application/vnd.google-apps.folder"

# Name Drive reports for the account root; never mirrored to the destination.
ROOT_FOLDER_NAME: str = "My Drive"

DEFAULT_UPLOAD_MIME: str = "application/octet-stream"


def is_folder(mime_type: str) -> bool:
    return mime_type == FOLDER_MIME


def is_google_app(mime_type: str) -> bool:
    """
    Returns True if the MIME type is a Google 'apps' type.

    Google apps types (Docs, Sheets, ...) have no binary content and no
    md5Checksum, so they cannot be moved by download/upload.
    """
    return mime_type.startswith("application/vnd.google-apps.")
