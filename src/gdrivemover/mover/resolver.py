"""Mirror source folder ancestry into the destination account."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from gdrivemover.errors import RemoteError
from gdrivemover.models import AccountHandle, FolderChain, RemoteFile

logger = logging.getLogger(__name__)


class ParentMirrorResolver:
    """
    Ensure a destination folder exists for every source folder on a path.

    Each source folder is matched by name under its first mirrored parent. An
    existing match is reused as is; otherwise a folder is created under all
    mirrored parents. The account root is never mirrored.

    Notes:
        - Dedup is best effort: two folders with the same name under the same
          first parent are indistinguishable, and only the first mirrored
          parent takes part in the lookup.
        - Mappings found during one resolver's lifetime are recorded in
          `chain`.
    """

    def __init__(self, source: AccountHandle, target: AccountHandle) -> None:
        self._source = source
        self._target = target
        self.chain = FolderChain()

    def resolve_parents(self, parent_ids: Sequence[str]) -> list[str]:
        """
        Resolve each source parent id, in order.

        Returns:
            Destination folder ids of the non-root parents.
        """
        resolved: list[str] = []
        for parent_id in parent_ids:
            dest_id = self.resolve(parent_id)
            if dest_id is not None:
                resolved.append(dest_id)
        return resolved

    def resolve(self, folder_id: str) -> Optional[str]:
        """
        Return the destination id mirroring `folder_id`, creating it if needed.

        Returns None for the account root.

        Raises:
            RemoteError: when the source folder cannot be fetched or the
                destination folder cannot be created.
        """
        folder = self._source.client.get(folder_id)
        if folder.is_root:
            return None

        dest_parents = self.resolve_parents(folder.parents)
        first_parent = dest_parents[0] if dest_parents else None

        existing = self._probe(folder.name, first_parent)
        if existing is not None:
            logger.debug("Reusing folder %s (%s) in %s", folder.name, existing, self._target.name)
            self.chain.add(folder_id, existing)
            return existing

        created = self._target.client.create_folder(folder.name, dest_parents)
        logger.debug("Created folder %s (%s) in %s", folder.name, created.file_id, self._target.name)
        self.chain.add(folder_id, created.file_id)
        return created.file_id

    def lookup(self, folder_id: str) -> Optional[str]:
        """
        Return the destination id mirroring `folder_id` without creating anything.

        Follows the same first-parent matching as `resolve`. Returns None for
        the account root or when any folder on the path has no mirror.

        Raises:
            RemoteError: when a source folder cannot be fetched or the
                destination lookup fails.
        """
        return self._lookup(self._source.client.get(folder_id))

    def _lookup(self, folder: RemoteFile) -> Optional[str]:
        if folder.is_root:
            return None

        first_parent: Optional[str] = None
        for parent_id in folder.parents:
            parent = self._source.client.get(parent_id)
            if parent.is_root:
                continue
            first_parent = self._lookup(parent)
            if first_parent is None:
                return None
            break

        match = self._target.client.find_folder(folder.name, first_parent)
        if match is None:
            return None
        self.chain.add(folder.file_id, match.file_id)
        return match.file_id

    def _probe(self, name: str, parent_id: Optional[str]) -> Optional[str]:
        # A failed lookup is treated as "not found"; creation then proceeds.
        try:
            match = self._target.client.find_folder(name, parent_id)
        except RemoteError as exc:
            logger.warning("Folder lookup for %s failed, creating a new one: %s", name, exc)
            return None
        return match.file_id if match is not None else None
