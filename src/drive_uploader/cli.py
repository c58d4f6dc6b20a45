"""Command-line interface for drive_uploader."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import NoReturn

import click
from dotenv import load_dotenv

from drive_uploader.config import (
    ENV_CHECKSUM,
    ENV_CREDENTIALS,
    ENV_OVERWRITE,
    ENV_PARENT_FOLDER_ID,
    ENV_SOURCE_FILEPATH,
    ENV_TARGET_FILEPATH,
    UploadSettings,
    configure_logging,
    decode_credentials,
)
from drive_uploader.exceptions import ConfigurationError, DriveUploaderError
from drive_uploader.hashing import (
    DEFAULT_INTEGRITY_ALGORITHM,
    DEFAULT_SIDECAR_ALGORITHM,
    hash_file,
    write_checksum,
)
from drive_uploader.orchestrator import DriveUploader

# Name of the output written for GitHub Actions
OUTPUT_FILE_ID = "file-id"


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


def _set_output(name: str, value: str) -> None:
    """Append an output to the GitHub Actions output file, when running in one."""
    output_path = os.environ.get("GITHUB_OUTPUT")
    if not output_path:
        return
    with open(output_path, "a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")


credentials_option = click.option(
    "--credentials",
    "-c",
    envvar=list(ENV_CREDENTIALS),
    help="Base64-encoded service account JSON key",
)
parent_option = click.option(
    "--parent",
    "-p",
    "parent_folder_id",
    envvar=list(ENV_PARENT_FOLDER_ID),
    help="Id of the Drive folder the target path is relative to",
)


@click.group()
@click.version_option(package_name="drive-uploader")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """Google Drive uploader - Upload a file to a folder path on Google Drive."""
    load_dotenv()
    configure_logging(verbose)


@main.command()
@click.argument(
    "source",
    required=False,
    envvar=list(ENV_SOURCE_FILEPATH),
    type=click.Path(path_type=Path),
)
@parent_option
@click.option(
    "--target",
    "-t",
    envvar=list(ENV_TARGET_FILEPATH),
    help="Remote path, folders separated by '/' (default: source file name)",
)
@click.option(
    "--overwrite",
    is_flag=True,
    envvar=list(ENV_OVERWRITE),
    help="Replace the content of an existing file",
)
@click.option(
    "--checksum",
    is_flag=True,
    envvar=list(ENV_CHECKSUM),
    help="Also upload a checksum sidecar of the source file",
)
@credentials_option
@click.option(
    "--sidecar-algorithm",
    default=DEFAULT_SIDECAR_ALGORITHM,
    show_default=True,
    help="Digest used for the checksum sidecar",
)
@click.option(
    "--integrity-algorithm",
    default=DEFAULT_INTEGRITY_ALGORITHM,
    show_default=True,
    help="Digest compared with the one reported by Drive after upload",
)
def upload(
    source: Path | None,
    parent_folder_id: str | None,
    target: str | None,
    overwrite: bool,
    checksum: bool,
    credentials: str | None,
    sidecar_algorithm: str,
    integrity_algorithm: str,
) -> None:
    """Upload a file to Google Drive.

    SOURCE: Local file to upload.

    Examples:

        drive-uploader upload report.txt --parent <folder-id>

        drive-uploader upload report.txt -p <folder-id> -t docs/2024/report.txt --overwrite

        drive-uploader upload data.bin -p <folder-id> --checksum
    """
    try:
        settings = UploadSettings.create(
            credentials=credentials,
            parent_folder_id=parent_folder_id,
            source_path=source,
            target_path=target,
            overwrite=overwrite,
            checksum=checksum,
            sidecar_algorithm=sidecar_algorithm,
            integrity_algorithm=integrity_algorithm,
        )
        uploader = DriveUploader.from_service_account_info(
            settings.credentials,
            sidecar_algorithm=settings.sidecar_algorithm,
            integrity_algorithm=settings.integrity_algorithm,
        )
    except DriveUploaderError as e:
        _fail(str(e))

    with uploader:
        result = uploader.run(settings.to_request())

    if not result.success:
        _fail(result.error or "Upload failed")

    _set_output(OUTPUT_FILE_ID, result.file_id or "")
    click.echo(result.file_id)


@main.command()
@click.argument("path")
@parent_option
@credentials_option
def mkdir(path: str, parent_folder_id: str | None, credentials: str | None) -> None:
    """Create a folder path on Google Drive and print the innermost folder id.

    PATH: Folders separated by '/'; existing ones are reused.

    Examples:

        drive-uploader mkdir docs/2024 --parent <folder-id>
    """
    try:
        if not parent_folder_id:
            raise ConfigurationError("Missing required inputs: parent folder id")
        info = decode_credentials(credentials or "")
        with DriveUploader.from_service_account_info(info) as uploader:
            folder_id = uploader.mkdir(parent_folder_id, path)
    except DriveUploaderError as e:
        _fail(str(e))

    click.echo(folder_id)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--algorithm",
    "-a",
    default=DEFAULT_SIDECAR_ALGORITHM,
    show_default=True,
    help="Digest algorithm",
)
@click.option("--write", "write_sidecar", is_flag=True, help="Write the digest to FILE.<algorithm>")
def checksum(file: Path, algorithm: str, write_sidecar: bool) -> None:
    """Print the digest of a local file.

    FILE: Local file to hash.
    """
    try:
        if write_sidecar:
            sidecar = write_checksum(file, algorithm)
            click.echo(f"{sidecar.read_text()}  {file.name}")
            click.echo(click.style(f"Wrote {sidecar}", fg="green"), err=True)
        else:
            click.echo(f"{hash_file(file, algorithm)}  {file.name}")
    except (DriveUploaderError, OSError) as e:
        _fail(str(e))


if __name__ == "__main__":
    main()
