"""Contract between the upload core and the remote storage service."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from drive_uploader.models import NodeKind, RemoteNode


class DriveTransport(Protocol):
    """Authenticated access to a hierarchical file-storage service.

    Implementations report failures as TransportError.
    """

    def list(self, parent_id: str, name: str, kind: NodeKind | None = None) -> list[RemoteNode]:
        """Return non-trashed children of ``parent_id`` named exactly ``name``.

        Searches every drive the credentials can reach. ``kind`` restricts the
        result to folders or to non-folder files.
        """
        ...

    def create(
        self,
        parent_id: str,
        name: str,
        kind: NodeKind,
        source: Path | None = None,
    ) -> RemoteNode:
        """Create a folder, or a file with the content of ``source``."""
        ...

    def update(self, file_id: str, source: Path) -> RemoteNode:
        """Replace the content of an existing file with ``source``."""
        ...
