"""DriveUploader: uploads one local file to a folder path on Google Drive."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Sequence

from drive_uploader.exceptions import DriveUploaderError
from drive_uploader.hashing import (
    DEFAULT_INTEGRITY_ALGORITHM,
    DEFAULT_SIDECAR_ALGORITHM,
    new_hasher,
    sidecar_suffix,
    write_checksum,
)
from drive_uploader.models import PATH_SEPARATOR, TargetPath, UploadRequest, UploadResult
from drive_uploader.resolver import FolderResolver
from drive_uploader.transport import DriveTransport
from drive_uploader.upserter import FileUpserter

logger = logging.getLogger(__name__)


class DriveUploader:
    """Client for uploading a file to a folder path on Google Drive.

    The transport is passed in, so any object implementing DriveTransport
    can be used (an in-memory fake in tests).

    Example:
        transport = GoogleDriveTransport.from_service_account_info(info)
        with DriveUploader(transport) as uploader:
            file_id = uploader.upload(
                UploadRequest(Path("report.txt"), "root-folder-id", "docs/report.txt")
            )
    """

    def __init__(
        self,
        transport: DriveTransport,
        *,
        sidecar_algorithm: str = DEFAULT_SIDECAR_ALGORITHM,
        integrity_algorithm: str = DEFAULT_INTEGRITY_ALGORITHM,
    ) -> None:
        """Initialize the uploader.

        Args:
            transport: Authenticated access to the storage service
            sidecar_algorithm: Digest used for the checksum sidecar
            integrity_algorithm: Digest compared with the one reported after upload

        Raises:
            ConfigurationError: If a hash algorithm is not supported
        """
        for algorithm in (sidecar_algorithm, integrity_algorithm):
            new_hasher(algorithm)

        self._transport = transport
        self._sidecar_algorithm = sidecar_algorithm.lower()
        self._resolver = FolderResolver(transport)
        self._upserter = FileUpserter(transport, integrity_algorithm=integrity_algorithm)

    @classmethod
    def from_service_account_info(
        cls,
        info: Mapping[str, Any],
        *,
        scopes: Sequence[str] | None = None,
        **kwargs: Any,
    ) -> DriveUploader:
        """Build an uploader backed by the Google Drive API."""
        from drive_uploader._internal.drive_api import GoogleDriveTransport

        return cls(GoogleDriveTransport.from_service_account_info(info, scopes=scopes), **kwargs)

    def __enter__(self) -> DriveUploader:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Exit context manager."""
        self.close()

    def upload(self, request: UploadRequest) -> str:
        """Upload the request's source file and return the remote file id.

        Folder segments of the target path are created when missing. With
        ``request.checksum`` a sidecar holding the digest of the source file is
        written next to it and uploaded to ``<target>.<algorithm>``, always
        overwriting; its id is not returned.

        Raises:
            DriveUploaderError: On any remote, configuration or integrity failure
            OSError: If a local file cannot be read or written
        """
        source_path = Path(request.source_path)
        target = TargetPath.parse(request.target_path, source_path.name)
        file_id = self._upload_to(source_path, request.parent_folder_id, target, request.overwrite)
        logger.info(f"Uploaded {source_path.name} to '{target}': {file_id}")

        if request.checksum:
            sidecar = write_checksum(source_path, self._sidecar_algorithm)
            sidecar_target = target.with_suffix(sidecar_suffix(self._sidecar_algorithm))
            sidecar_id = self._upload_to(
                sidecar, request.parent_folder_id, sidecar_target, overwrite=True
            )
            logger.info(f"Uploaded checksum {sidecar.name} to '{sidecar_target}': {sidecar_id}")

        return file_id

    def _upload_to(
        self, source_path: Path, parent_id: str, target: TargetPath, overwrite: bool
    ) -> str:
        folder_id = self._resolver.resolve_path(parent_id, target.folders)
        return self._upserter.upsert(folder_id, target.leaf, source_path, overwrite)

    def run(self, request: UploadRequest) -> UploadResult:
        """Upload and report the outcome as a single UploadResult.

        This is the only place where errors are turned into a failure message.
        """
        source_path = Path(request.source_path)
        target = str(TargetPath.parse(request.target_path, source_path.name))
        try:
            file_id = self.upload(request)
        except (DriveUploaderError, OSError) as e:
            error_msg = str(e) or type(e).__name__
            logger.error(f"Upload of {source_path} failed: {error_msg}")
            return UploadResult(
                success=False,
                source_path=source_path,
                target_path=target,
                error=error_msg,
            )
        return UploadResult(
            success=True,
            source_path=source_path,
            target_path=target,
            file_id=file_id,
        )

    def mkdir(self, parent_id: str, folder_path: str) -> str:
        """Resolve a ``/``-separated folder path, creating missing folders.

        Returns:
            Id of the innermost folder (``parent_id`` for an empty path)
        """
        segments = [s for s in folder_path.split(PATH_SEPARATOR) if s]
        return self._resolver.resolve_path(parent_id, segments)

    def close(self) -> None:
        """Close the underlying transport if it holds resources."""
        close = getattr(self._transport, "close", None)
        if callable(close):
            close()
