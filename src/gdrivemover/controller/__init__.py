"""Drive controller exports for gdrivemover."""

from __future__ import annotations

from .drive_controller import DriveController, ProgressCallback

__all__ = ["DriveController", "ProgressCallback"]
