"""Data models for the drive_uploader library."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Sequence, Union

PATH_SEPARATOR = "/"


class NodeKind(enum.Enum):
    """Kind of a node in the remote folder graph."""

    FOLDER = "folder"
    FILE = "file"


@dataclass(frozen=True)
class RemoteNode:
    """A file or folder as reported by the remote storage service."""

    id: str
    name: str
    kind: NodeKind
    parent_id: str | None = None
    checksums: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_folder(self) -> bool:
        return self.kind is NodeKind.FOLDER


@dataclass(frozen=True)
class NoMatch:
    """No node matched the lookup."""


@dataclass(frozen=True)
class SingleMatch:
    """Exactly one node matched the lookup."""

    node: RemoteNode


@dataclass(frozen=True)
class MultipleMatches:
    """More than one node matched the lookup."""

    nodes: tuple[RemoteNode, ...]


Lookup = Union[NoMatch, SingleMatch, MultipleMatches]


def lookup_from_nodes(nodes: Sequence[RemoteNode]) -> Lookup:
    """Classify the result of a name lookup under a single parent."""
    if not nodes:
        return NoMatch()
    if len(nodes) == 1:
        return SingleMatch(nodes[0])
    return MultipleMatches(tuple(nodes))


@dataclass(frozen=True)
class TargetPath:
    """A remote path split into folder segments and a leaf file name."""

    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.segments:
            raise ValueError("A target path needs at least one segment")

    @classmethod
    def parse(cls, raw: str | None, default_name: str) -> TargetPath:
        """Split ``raw`` on ``/``, falling back to ``default_name`` when it is empty.

        Empty segments (leading, trailing or doubled separators) are dropped.
        """
        segments = tuple(s for s in (raw or "").split(PATH_SEPARATOR) if s)
        if not segments:
            segments = (default_name,)
        return cls(segments)

    @property
    def folders(self) -> tuple[str, ...]:
        return self.segments[:-1]

    @property
    def leaf(self) -> str:
        return self.segments[-1]

    def with_suffix(self, suffix: str) -> TargetPath:
        """Return the same path with ``suffix`` appended to the leaf name."""
        return TargetPath(self.folders + (self.leaf + suffix,))

    def __str__(self) -> str:
        return PATH_SEPARATOR.join(self.segments)


@dataclass(frozen=True)
class UploadRequest:
    """Everything needed for one upload run."""

    source_path: Path
    parent_folder_id: str
    target_path: str | None = None
    overwrite: bool = False
    checksum: bool = False


@dataclass(frozen=True)
class UploadResult:
    """Result of an upload operation."""

    success: bool
    source_path: Path
    target_path: str
    file_id: str | None = None
    error: str | None = None
