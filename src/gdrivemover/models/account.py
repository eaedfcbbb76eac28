"""Account handle: an authorized connection to one Drive account."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from gdrivemover.controller import DriveController


@dataclass(frozen=True)
class AccountHandle:
    """
    Bundles an account name with a live Drive client.

    Handles are never mutated after construction and may be shared across
    transfer threads.
    """

    name: str
    client: "DriveController"
