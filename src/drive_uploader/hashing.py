"""Streaming content hashing for local files."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Any

from drive_uploader.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Digest written next to the source file and uploaded as a sidecar
DEFAULT_SIDECAR_ALGORITHM = "sha256"
# Digest compared against the one reported by Google Drive after a transfer
DEFAULT_INTEGRITY_ALGORITHM = "md5"

CHUNK_SIZE = 1024 * 1024


def new_hasher(algorithm: str) -> Any:
    """Create a hashlib object for ``algorithm``.

    Raises:
        ConfigurationError: If the algorithm is not supported
    """
    try:
        return hashlib.new(algorithm)
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"Unsupported hash algorithm: {algorithm!r}") from e


def hash_file(path: str | Path, algorithm: str, *, chunk_size: int = CHUNK_SIZE) -> str:
    """Compute the hex digest of a file without loading it fully into memory.

    Args:
        path: Local file to hash
        algorithm: Any algorithm name accepted by hashlib.new
        chunk_size: Number of bytes read per iteration

    Returns:
        Lowercase hex digest

    Raises:
        ConfigurationError: If the algorithm is not supported
        OSError: If the file cannot be opened or read
    """
    hasher = new_hasher(algorithm)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            hasher.update(chunk)
    digest = hasher.hexdigest()
    logger.debug(f"{algorithm} of {path}: {digest}")
    return digest


def sidecar_suffix(algorithm: str) -> str:
    """Suffix appended to a file name for its checksum sidecar."""
    return f".{algorithm.lower()}"


def write_checksum(source: str | Path, algorithm: str = DEFAULT_SIDECAR_ALGORITHM) -> Path:
    """Hash ``source`` and write the hex digest to ``<source>.<algorithm>``.

    Returns:
        Path of the written sidecar file
    """
    source = Path(source)
    digest = hash_file(source, algorithm)
    sidecar = source.with_name(source.name + sidecar_suffix(algorithm))
    sidecar.write_text(digest)
    logger.info(f"Wrote {algorithm} checksum of {source.name} to {sidecar}")
    return sidecar
