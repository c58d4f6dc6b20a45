"""Tests for configuration handling."""

from __future__ import annotations

import base64
import json
from pathlib import Path

import pytest

from drive_uploader import ConfigurationError, UploadRequest
from drive_uploader.config import UploadSettings, decode_credentials


class TestDecodeCredentials:
    """Tests for service account credential decoding."""

    def test_decode_valid_credentials(
        self, encoded_credentials: str, service_account_info: dict[str, str]
    ) -> None:
        assert decode_credentials(encoded_credentials) == service_account_info

    def test_decode_line_wrapped_credentials(self, service_account_info: dict[str, str]) -> None:
        """Test that base64 wrapped at 76 columns, as `base64 key.json` prints it, is accepted."""
        encoded = base64.encodebytes(json.dumps(service_account_info).encode()).decode()
        assert "\n" in encoded.strip()

        assert decode_credentials(encoded) == service_account_info

    def test_decode_not_base64(self) -> None:
        with pytest.raises(ConfigurationError, match="not valid base64"):
            decode_credentials("%%% not base64 %%%")

    def test_decode_not_json(self) -> None:
        """Test that base64 of something other than JSON is rejected."""
        encoded = base64.b64encode(b"credentialsMock").decode()

        with pytest.raises(ConfigurationError, match="not valid JSON"):
            decode_credentials(encoded)

    def test_decode_json_array(self) -> None:
        encoded = base64.b64encode(b"[1, 2]").decode()

        with pytest.raises(ConfigurationError, match="JSON object"):
            decode_credentials(encoded)

    @pytest.mark.parametrize("value", ["", "   "])
    def test_decode_empty(self, value: str) -> None:
        with pytest.raises(ConfigurationError, match="Credentials are required"):
            decode_credentials(value)


class TestUploadSettings:
    """Tests for settings validation."""

    def test_create_valid_settings(self, encoded_credentials: str, report_file: Path) -> None:
        settings = UploadSettings.create(
            credentials=encoded_credentials,
            parent_folder_id="parent",
            source_path=str(report_file),
            target_path="docs/report.txt",
            overwrite=True,
            checksum=True,
            sidecar_algorithm="SHA256",
        )

        assert settings.source_path == report_file
        assert settings.sidecar_algorithm == "sha256"
        assert settings.credentials["type"] == "service_account"
        assert settings.to_request() == UploadRequest(
            source_path=report_file,
            parent_folder_id="parent",
            target_path="docs/report.txt",
            overwrite=True,
            checksum=True,
        )

    def test_empty_target_path_becomes_none(self, encoded_credentials: str) -> None:
        settings = UploadSettings.create(
            credentials=encoded_credentials,
            parent_folder_id="parent",
            source_path="data.bin",
            target_path="",
        )

        assert settings.target_path is None

    def test_missing_inputs_are_listed(self) -> None:
        """Test that every missing required input is named."""
        with pytest.raises(ConfigurationError) as exc_info:
            UploadSettings.create(credentials=None, parent_folder_id="", source_path=None)

        message = str(exc_info.value)
        assert "credentials" in message
        assert "parent folder id" in message
        assert "source file path" in message

    def test_unsupported_algorithm(self, encoded_credentials: str) -> None:
        with pytest.raises(ConfigurationError, match="Unsupported hash algorithm"):
            UploadSettings.create(
                credentials=encoded_credentials,
                parent_folder_id="parent",
                source_path="data.bin",
                integrity_algorithm="crc-nope",
            )
