"""Drive Uploader - A Python library for uploading a file to a folder path on Google Drive.

Example usage:
    from pathlib import Path

    from drive_uploader import DriveUploader, UploadRequest

    with DriveUploader.from_service_account_info(service_account_info) as uploader:
        file_id = uploader.upload(
            UploadRequest(
                source_path=Path("report.txt"),
                parent_folder_id="1AbCdEf",
                target_path="docs/2024/report.txt",
                overwrite=True,
                checksum=True,
            )
        )
        print(f"Uploaded as {file_id}")
"""

from drive_uploader.exceptions import (
    AmbiguousNameError,
    ConfigurationError,
    DriveUploaderError,
    FileExistsConflictError,
    FolderError,
    IntegrityError,
    RemoteStateError,
    TransportError,
)
from drive_uploader.hashing import hash_file, write_checksum
from drive_uploader.models import (
    NodeKind,
    RemoteNode,
    TargetPath,
    UploadRequest,
    UploadResult,
)
from drive_uploader.orchestrator import DriveUploader
from drive_uploader.resolver import FolderResolver
from drive_uploader.transport import DriveTransport
from drive_uploader.upserter import FileUpserter

__version__ = "0.1.0"

__all__ = [
    # Main client
    "DriveUploader",
    "FolderResolver",
    "FileUpserter",
    "DriveTransport",
    # Hashing
    "hash_file",
    "write_checksum",
    # Models
    "NodeKind",
    "RemoteNode",
    "TargetPath",
    "UploadRequest",
    "UploadResult",
    # Exceptions
    "DriveUploaderError",
    "ConfigurationError",
    "RemoteStateError",
    "AmbiguousNameError",
    "FileExistsConflictError",
    "IntegrityError",
    "TransportError",
    "FolderError",
]
