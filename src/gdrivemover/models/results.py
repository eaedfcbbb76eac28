"""Result models for move requests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

MoveStatus = Literal["success", "failed"]


@dataclass(slots=True)
class MoveOutcome:
    """Result for one requested file identifier."""

    file_id: str
    status: MoveStatus
    file_name: Optional[str] = None

    error_type: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"
