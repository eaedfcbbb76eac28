"""Data model for Drive items fetched from a remote account."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from gdrivemover.util.mime import ROOT_FOLDER_NAME, is_folder


@dataclass(slots=True, frozen=True)
class Owner:
    """Owner entry of a Drive item."""

    email_address: str
    display_name: Optional[str] = None


@dataclass(slots=True, frozen=True)
class RemoteFile:
    """
    Immutable snapshot of a Drive item.

    Notes:
        - A file may have zero, one or more parents.
        - Not cached: each operation that needs fresh metadata fetches again.
    """

    file_id: str
    name: str
    mime_type: str
    parents: list[str] = field(default_factory=list)
    owners: list[Owner] = field(default_factory=list)

    size: Optional[int] = None
    quota_bytes_used: Optional[int] = None
    md5_checksum: Optional[str] = None
    original_filename: Optional[str] = None
    created_time: Optional[datetime] = None
    modified_time: Optional[datetime] = None

    @property
    def is_folder(self) -> bool:
        return is_folder(self.mime_type)

    @property
    def is_root(self) -> bool:
        """True for the account root folder ("My Drive")."""
        return self.name == ROOT_FOLDER_NAME

    @property
    def owner_email(self) -> Optional[str]:
        """Email address of the first owner, if any."""
        if not self.owners:
            return None
        return self.owners[0].email_address
