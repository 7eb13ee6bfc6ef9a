"""Tests for ECS JSON logging and masking."""

import json
import logging
import sys

from catalog.core.constants import MASK_PLACEHOLDER
from catalog.core.logging import ECSJsonFormatter, KeyValueFormatter, mask_sensitive_data


def _record(message: str, level: int = logging.INFO, exc_info=None, **extra) -> logging.LogRecord:
    logger = logging.getLogger("catalog.services.upload")
    return logger.makeRecord(
        logger.name, level, __file__, 1, message, (), exc_info, extra=extra
    )


class TestMaskSensitiveData:
    def test_short_secret_fully_redacted(self):
        assert mask_sensitive_data({"password": "hunter2"}) == {"password": MASK_PLACEHOLDER}

    def test_long_token_keeps_edges(self):
        masked = mask_sensitive_data({"access_token": "abcd1234567890wxyz"})
        assert masked == {"access_token": "abcd...wxyz"}

    def test_nested_and_lists(self):
        data = {"request": {"Authorization": "Bearer x"}, "keys": ["products/a.png"]}

        masked = mask_sensitive_data(data)

        assert masked["request"]["Authorization"] == MASK_PLACEHOLDER
        assert masked["keys"] == ["products/a.png"]


class TestECSJsonFormatter:
    """ECS 문서 구조와 마스킹."""

    def test_extras_land_under_labels(self):
        record = _record(
            "Compensating delete failed; object left orphaned",
            level=logging.ERROR,
            key="products/abc.png",
            namespace="products",
        )

        doc = json.loads(ECSJsonFormatter(environment="test").format(record))

        assert doc["message"] == "Compensating delete failed; object left orphaned"
        assert doc["log.level"] == "error"
        assert doc["service.name"] == "catalog-api"
        assert doc["service.environment"] == "test"
        assert doc["labels"] == {"key": "products/abc.png", "namespace": "products"}

    def test_password_extra_is_redacted(self):
        record = _record("Password reset", password="correct horse battery", account_id="42")

        output = ECSJsonFormatter().format(record)
        doc = json.loads(output)

        assert "correct horse battery" not in output
        assert doc["labels"]["password"] == "corr...tery"
        assert doc["user.id"] == "42"

    def test_file_fields_promoted_to_ecs(self):
        record = _record(
            "Image rejected", file_name="huge.png", content_type="image/png", size_bytes=11
        )

        doc = json.loads(ECSJsonFormatter().format(record))

        assert doc["file.name"] == "huge.png"
        assert doc["file.mime_type"] == "image/png"
        assert doc["file.size"] == 11
        assert "labels" not in doc

    def test_exception_fields(self):
        try:
            raise RuntimeError("bucket unreachable")
        except RuntimeError:
            record = _record("Upload failed", level=logging.ERROR, exc_info=sys.exc_info())

        doc = json.loads(ECSJsonFormatter().format(record))

        assert doc["error.type"] == "RuntimeError"
        assert doc["error.message"] == "bucket unreachable"
        assert "Traceback" in doc["error.stack_trace"]


class TestKeyValueFormatter:
    def test_appends_masked_extras(self):
        record = _record("Login failed", token="tok", namespace="auth")

        line = KeyValueFormatter().format(record)

        assert line.endswith(f"Login failed | namespace=auth token={MASK_PLACEHOLDER}")
