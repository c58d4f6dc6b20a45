"""Create-or-update of the leaf file with post-transfer digest verification."""

from __future__ import annotations

import logging
from pathlib import Path

from drive_uploader.exceptions import (
    AmbiguousNameError,
    FileExistsConflictError,
    IntegrityError,
)
from drive_uploader.hashing import DEFAULT_INTEGRITY_ALGORITHM, hash_file
from drive_uploader.models import (
    MultipleMatches,
    NodeKind,
    RemoteNode,
    SingleMatch,
    lookup_from_nodes,
)
from drive_uploader.transport import DriveTransport

logger = logging.getLogger(__name__)


class FileUpserter:
    """Uploads a file under a folder, honoring the overwrite flag.

    Every create or update is followed by a comparison of the digest reported
    by the transport with a local digest of the source file.
    """

    def __init__(
        self,
        transport: DriveTransport,
        *,
        integrity_algorithm: str = DEFAULT_INTEGRITY_ALGORITHM,
    ) -> None:
        self._transport = transport
        self._integrity_algorithm = integrity_algorithm.lower()

    def upsert(
        self,
        parent_id: str,
        file_name: str,
        source_path: str | Path,
        overwrite: bool = False,
    ) -> str:
        """Upload ``source_path`` as ``file_name`` under ``parent_id``.

        Args:
            parent_id: Id of the folder receiving the file
            file_name: Remote name of the file
            source_path: Local file to upload
            overwrite: Replace the content of an existing file instead of failing

        Returns:
            Id of the created or updated file

        Raises:
            AmbiguousNameError: If several files share the name
            FileExistsConflictError: If the file exists and overwrite is False
            IntegrityError: If the reported digest differs from the local one
        """
        source_path = Path(source_path)
        logger.debug(f"Getting file with name '{file_name}' under folder '{parent_id}'")
        lookup = lookup_from_nodes(self._transport.list(parent_id, file_name, NodeKind.FILE))

        if isinstance(lookup, MultipleMatches):
            raise AmbiguousNameError(file_name, parent_id, len(lookup.nodes))

        if isinstance(lookup, SingleMatch):
            existing = lookup.node
            if not overwrite:
                raise FileExistsConflictError(file_name, parent_id, existing.id)
            logger.debug(f"Updating file '{file_name}' ({existing.id})")
            node = self._transport.update(existing.id, source_path)
        else:
            logger.debug(f"Creating file '{file_name}' under folder '{parent_id}'")
            node = self._transport.create(parent_id, file_name, NodeKind.FILE, source_path)

        self._verify(node, source_path)
        logger.debug(f"File id: {node.id}")
        return node.id

    def _verify(self, node: RemoteNode, source_path: Path) -> None:
        """Compare the transport-reported digest with a local one."""
        algorithm = self._integrity_algorithm
        remote_digest = node.checksums.get(algorithm)
        if not remote_digest:
            raise IntegrityError(
                f"No {algorithm} checksum reported for uploaded file '{node.name}' ({node.id})"
            )

        local_digest = hash_file(source_path, algorithm)
        if remote_digest.lower() != local_digest:
            raise IntegrityError(
                f"Upload integrity check failed for '{node.name}' ({node.id}): "
                f"local {algorithm} {local_digest} != remote {remote_digest}"
            )
        logger.debug(f"Verified {algorithm} of '{node.name}': {local_digest}")
