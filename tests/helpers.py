"""Shared test helpers for drive_uploader tests."""

from __future__ import annotations

import hashlib
import itertools
from pathlib import Path

from drive_uploader.models import NodeKind, RemoteNode

ROOT_ID = "root-folder"


class FakeDriveTransport:
    """In-memory DriveTransport recording every call."""

    def __init__(self, *, corrupt_digests: bool = False) -> None:
        self.nodes: dict[str, RemoteNode] = {}
        self.contents: dict[str, bytes] = {}
        self.calls: list[tuple[str, ...]] = []
        self.corrupt_digests = corrupt_digests
        self._ids = itertools.count(1)

    def add(self, parent_id: str, name: str, kind: NodeKind, content: bytes = b"") -> RemoteNode:
        """Seed a node without recording a call."""
        return self._store(parent_id, name, kind, content)

    def list(self, parent_id: str, name: str, kind: NodeKind | None = None) -> list[RemoteNode]:
        self.calls.append(("list", parent_id, name))
        return [
            node
            for node in self.nodes.values()
            if node.parent_id == parent_id
            and node.name == name
            and (kind is None or node.kind is kind)
        ]

    def create(
        self,
        parent_id: str,
        name: str,
        kind: NodeKind,
        source: Path | None = None,
    ) -> RemoteNode:
        self.calls.append(("create", parent_id, name))
        content = Path(source).read_bytes() if source is not None else b""
        return self._store(parent_id, name, kind, content)

    def update(self, file_id: str, source: Path) -> RemoteNode:
        self.calls.append(("update", file_id))
        existing = self.nodes[file_id]
        return self._store(
            existing.parent_id or "", existing.name, existing.kind, Path(source).read_bytes(), file_id
        )

    def created(self, kind: NodeKind) -> list[RemoteNode]:
        return [n for n in self.nodes.values() if n.kind is kind]

    def count(self, action: str) -> int:
        return sum(1 for call in self.calls if call[0] == action)

    def _store(
        self,
        parent_id: str,
        name: str,
        kind: NodeKind,
        content: bytes,
        node_id: str | None = None,
    ) -> RemoteNode:
        node_id = node_id or f"{kind.value}-{next(self._ids)}"
        checksums: dict[str, str] = {}
        if kind is NodeKind.FILE:
            body = content + b"corrupted" if self.corrupt_digests else content
            checksums = {
                "md5": hashlib.md5(body).hexdigest(),
                "sha256": hashlib.sha256(body).hexdigest(),
            }
        node = RemoteNode(
            id=node_id, name=name, kind=kind, parent_id=parent_id, checksums=checksums
        )
        self.nodes[node_id] = node
        self.contents[node_id] = content
        return node
