"""Exception hierarchy for the drive_uploader library."""

from __future__ import annotations


class DriveUploaderError(Exception):
    """Base exception for all drive_uploader errors."""

    pass


class ConfigurationError(DriveUploaderError):
    """Raised when a required input is missing or malformed."""

    pass


class RemoteStateError(DriveUploaderError):
    """Raised when the remote folder graph is in a state we refuse to act on."""

    pass


class AmbiguousNameError(RemoteStateError):
    """Raised when more than one node with the same name exists under a parent."""

    def __init__(self, name: str, parent_id: str, count: int) -> None:
        super().__init__(
            f"More than one entry ({count}) match the name '{name}' under folder '{parent_id}'"
        )
        self.name = name
        self.parent_id = parent_id
        self.count = count


class FileExistsConflictError(DriveUploaderError):
    """Raised when the target file exists and overwrite was not requested."""

    def __init__(self, name: str, parent_id: str, file_id: str) -> None:
        super().__init__(
            f"File '{name}' already exists under folder '{parent_id}' "
            "and overwrite is disabled"
        )
        self.name = name
        self.parent_id = parent_id
        self.file_id = file_id


class IntegrityError(DriveUploaderError):
    """Raised when the digest reported after a transfer does not match the local one."""

    pass


class TransportError(DriveUploaderError):
    """Raised when a call to the remote storage service fails."""

    pass


class FolderError(DriveUploaderError):
    """Raised when a folder operation fails."""

    pass
