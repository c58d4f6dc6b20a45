"""DriveTransport implementation backed by the Google Drive v3 API."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Sequence

from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaFileUpload

from drive_uploader.exceptions import ConfigurationError, TransportError
from drive_uploader.models import NodeKind, RemoteNode

logger = logging.getLogger(__name__)

# Google authorization scopes
SCOPES = ["https://www.googleapis.com/auth/drive.file"]

# Folders in Google Drive have a special MIME type
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"

# Drive metadata field -> hashlib algorithm name
CHECKSUM_FIELDS = {
    "md5Checksum": "md5",
    "sha1Checksum": "sha1",
    "sha256Checksum": "sha256",
}

# Send the whole body in one streamed request
UPLOAD_CHUNKSIZE = -1

FILE_FIELDS = "id, name, mimeType, parents, " + ", ".join(CHECKSUM_FIELDS)


def escape_query_value(value: str) -> str:
    """Escape a string literal for use inside a Drive search query."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def build_query(parent_id: str, name: str, kind: NodeKind | None = None) -> str:
    """Build the Drive search query for children of ``parent_id`` named ``name``."""
    clauses = [
        f"name = '{escape_query_value(name)}'",
        f"'{escape_query_value(parent_id)}' in parents",
        "trashed = false",
    ]
    if kind is NodeKind.FOLDER:
        clauses.append(f"mimeType = '{FOLDER_MIME_TYPE}'")
    elif kind is NodeKind.FILE:
        clauses.append(f"mimeType != '{FOLDER_MIME_TYPE}'")
    return " and ".join(clauses)


def node_from_metadata(metadata: Mapping[str, Any]) -> RemoteNode:
    """Convert a Drive file resource into a RemoteNode."""
    kind = NodeKind.FOLDER if metadata.get("mimeType") == FOLDER_MIME_TYPE else NodeKind.FILE
    parents = metadata.get("parents") or []
    checksums = {
        algorithm: metadata[field]
        for field, algorithm in CHECKSUM_FIELDS.items()
        if metadata.get(field)
    }
    return RemoteNode(
        id=metadata.get("id") or "",
        name=metadata.get("name") or "",
        kind=kind,
        parent_id=parents[0] if parents else None,
        checksums=checksums,
    )


class GoogleDriveTransport:
    """Google Drive files API exposed as list/create/update.

    Every request includes shared drives.
    """

    def __init__(self, service: Any) -> None:
        """Wrap an already built ``drive`` v3 service resource."""
        self._service = service

    @classmethod
    def from_service_account_info(
        cls,
        info: Mapping[str, Any],
        *,
        scopes: Sequence[str] | None = None,
    ) -> GoogleDriveTransport:
        """Authenticate with a service account and build the Drive service.

        Raises:
            ConfigurationError: If the service account info is not usable
        """
        try:
            credentials = service_account.Credentials.from_service_account_info(
                dict(info), scopes=list(scopes or SCOPES)
            )
        except (ValueError, KeyError) as e:
            raise ConfigurationError(f"Invalid service account credentials: {e}") from e
        service = build("drive", "v3", credentials=credentials, cache_discovery=False)
        return cls(service)

    def list(self, parent_id: str, name: str, kind: NodeKind | None = None) -> list[RemoteNode]:
        query = build_query(parent_id, name, kind)
        logger.debug(f"Drive query: {query}")
        nodes: list[RemoteNode] = []
        page_token: str | None = None
        while True:
            request = self._service.files().list(
                q=query,
                fields=f"nextPageToken, files({FILE_FIELDS})",
                corpora="allDrives",
                includeItemsFromAllDrives=True,
                supportsAllDrives=True,
                pageToken=page_token,
            )
            response = self._execute(request, f"list '{name}' under '{parent_id}'")
            nodes.extend(node_from_metadata(f) for f in response.get("files", []))
            page_token = response.get("nextPageToken")
            if not page_token:
                return nodes

    def create(
        self,
        parent_id: str,
        name: str,
        kind: NodeKind,
        source: Path | None = None,
    ) -> RemoteNode:
        body: dict[str, Any] = {"name": name, "parents": [parent_id]}
        if kind is NodeKind.FOLDER:
            body["mimeType"] = FOLDER_MIME_TYPE
            request = self._service.files().create(
                body=body, fields=FILE_FIELDS, supportsAllDrives=True
            )
            return node_from_metadata(self._execute(request, f"create folder '{name}'"))

        if source is None:
            raise ValueError("A source file is required to create a file")
        media = MediaFileUpload(str(source), resumable=True, chunksize=UPLOAD_CHUNKSIZE)
        try:
            request = self._service.files().create(
                body=body, media_body=media, fields=FILE_FIELDS, supportsAllDrives=True
            )
            return node_from_metadata(self._upload(request, f"create file '{name}'"))
        finally:
            media.stream().close()

    def update(self, file_id: str, source: Path) -> RemoteNode:
        media = MediaFileUpload(str(source), resumable=True, chunksize=UPLOAD_CHUNKSIZE)
        try:
            request = self._service.files().update(
                fileId=file_id, media_body=media, fields=FILE_FIELDS, supportsAllDrives=True
            )
            return node_from_metadata(self._upload(request, f"update file '{file_id}'"))
        finally:
            media.stream().close()

    def close(self) -> None:
        """Close the HTTP connection held by the service."""
        close = getattr(self._service, "close", None)
        if callable(close):
            close()

    @staticmethod
    def _execute(request: Any, action: str) -> dict[str, Any]:
        try:
            return request.execute()  # type: ignore[no-any-return]
        except (HttpError, GoogleAuthError) as e:
            raise TransportError(f"Failed to {action}: {e}") from e

    @staticmethod
    def _upload(request: Any, action: str) -> dict[str, Any]:
        """Drive a media upload request until Drive returns the file resource."""
        try:
            response = None
            while response is None:
                _, response = request.next_chunk()
            return response  # type: ignore[no-any-return]
        except (HttpError, GoogleAuthError) as e:
            raise TransportError(f"Failed to {action}: {e}") from e
