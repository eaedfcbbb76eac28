"""Source -> destination folder mappings discovered while mirroring."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(slots=True)
class FolderChain:
    """
    Ordered (source folder id -> destination folder id) mappings.

    Recomputed per transfer; never persisted.
    """

    mappings: list[tuple[str, str]] = field(default_factory=list)

    def add(self, source_id: str, dest_id: str) -> None:
        self.mappings.append((source_id, dest_id))

    def get(self, source_id: str) -> Optional[str]:
        for src, dst in self.mappings:
            if src == source_id:
                return dst
        return None

    def __len__(self) -> int:
        return len(self.mappings)
