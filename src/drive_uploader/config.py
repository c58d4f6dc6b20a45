"""Configuration handling: credential decoding, input validation and logging setup."""

from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from drive_uploader.exceptions import ConfigurationError
from drive_uploader.hashing import (
    DEFAULT_INTEGRITY_ALGORITHM,
    DEFAULT_SIDECAR_ALGORITHM,
    new_hasher,
)
from drive_uploader.models import UploadRequest

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Environment variables, each also accepted in the GitHub Actions INPUT_* form
ENV_CREDENTIALS = ("GDRIVE_CREDENTIALS", "INPUT_CREDENTIALS")
ENV_PARENT_FOLDER_ID = ("GDRIVE_PARENT_FOLDER_ID", "INPUT_PARENT_FOLDER_ID")
ENV_SOURCE_FILEPATH = ("GDRIVE_SOURCE_FILEPATH", "INPUT_SOURCE_FILEPATH")
ENV_TARGET_FILEPATH = ("GDRIVE_TARGET_FILEPATH", "INPUT_TARGET_FILEPATH")
ENV_OVERWRITE = ("GDRIVE_OVERWRITE", "INPUT_OVERWRITE")
ENV_CHECKSUM = ("GDRIVE_CHECKSUM", "INPUT_CHECKSUM")


def decode_credentials(encoded: str) -> dict[str, Any]:
    """Decode a base64-encoded service account JSON key.

    Line breaks and other whitespace in the encoded value are ignored.

    Raises:
        ConfigurationError: If the value is not base64 of a JSON object
    """
    if not encoded or not encoded.strip():
        raise ConfigurationError("Credentials are required")
    try:
        raw = base64.b64decode("".join(encoded.split()), validate=True).decode("utf-8")
        info = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Credentials are not valid base64: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Credentials are not valid JSON: {e}") from e
    if not isinstance(info, dict):
        raise ConfigurationError("Credentials must decode to a JSON object")
    return info


@dataclass(frozen=True)
class UploadSettings:
    """Validated inputs of one upload run."""

    credentials: dict[str, Any]
    parent_folder_id: str
    source_path: Path
    target_path: str | None = None
    overwrite: bool = False
    checksum: bool = False
    sidecar_algorithm: str = DEFAULT_SIDECAR_ALGORITHM
    integrity_algorithm: str = DEFAULT_INTEGRITY_ALGORITHM

    @classmethod
    def create(
        cls,
        *,
        credentials: str | None,
        parent_folder_id: str | None,
        source_path: str | Path | None,
        target_path: str | None = None,
        overwrite: bool = False,
        checksum: bool = False,
        sidecar_algorithm: str = DEFAULT_SIDECAR_ALGORITHM,
        integrity_algorithm: str = DEFAULT_INTEGRITY_ALGORITHM,
    ) -> UploadSettings:
        """Validate raw inputs and build the settings.

        Raises:
            ConfigurationError: If a required value is missing or malformed
        """
        missing = [
            label
            for label, value in (
                ("credentials", credentials),
                ("parent folder id", parent_folder_id),
                ("source file path", source_path),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing required inputs: {', '.join(missing)}")

        for algorithm in (sidecar_algorithm, integrity_algorithm):
            new_hasher(algorithm)

        return cls(
            credentials=decode_credentials(credentials),  # type: ignore[arg-type]
            parent_folder_id=parent_folder_id,  # type: ignore[arg-type]
            source_path=Path(source_path),  # type: ignore[arg-type]
            target_path=target_path or None,
            overwrite=overwrite,
            checksum=checksum,
            sidecar_algorithm=sidecar_algorithm.lower(),
            integrity_algorithm=integrity_algorithm.lower(),
        )

    def to_request(self) -> UploadRequest:
        return UploadRequest(
            source_path=self.source_path,
            parent_folder_id=self.parent_folder_id,
            target_path=self.target_path,
            overwrite=self.overwrite,
            checksum=self.checksum,
        )


def configure_logging(verbose: bool = False) -> None:
    """Set up root logging for command-line use."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )
