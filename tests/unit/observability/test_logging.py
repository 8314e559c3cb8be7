"""Unit tests for observability logging – redaction and JSON output."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from admin_search.observability.logging import (
    DEFAULT_SENSITIVE_FIELDS,
    JsonLoggerFactory,
    SensitiveFieldsFilter,
    get_logger,
    mask_url_credentials,
)


@pytest.fixture()
def restore_logging():
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = [
        h for h in root.handlers if not isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
    ]
    root.setLevel(level)



# ---------------------------------------------------------------------------
# mask_url_credentials
# ---------------------------------------------------------------------------


class TestMaskUrlCredentials:
    def test_masks_password(self) -> None:
        assert mask_url_credentials("mongodb://app:s3cret@db:27017/admin") == "mongodb://app:***@db:27017/admin"

    def test_url_without_credentials_untouched(self) -> None:
        assert mask_url_credentials("http://localhost:9200") == "http://localhost:9200"

    def test_plain_text_untouched(self) -> None:
        assert mask_url_credentials("nothing to see") == "nothing to see"


# ---------------------------------------------------------------------------
# SensitiveFieldsFilter
# ---------------------------------------------------------------------------


class TestSensitiveFieldsFilter:
    def test_redacts_known_key(self) -> None:
        result = SensitiveFieldsFilter().redact({"password": "hunter2", "user": "ops"})
        assert result == {"password": SensitiveFieldsFilter.REDACTED, "user": "ops"}

    def test_all_default_fields(self) -> None:
        result = SensitiveFieldsFilter().redact({f: "x" for f in DEFAULT_SENSITIVE_FIELDS})
        assert set(result.values()) == {SensitiveFieldsFilter.REDACTED}

    def test_case_insensitive(self) -> None:
        assert SensitiveFieldsFilter().redact({"Authorization": "Bearer x"})["Authorization"] == "[REDACTED]"

    def test_nested_mappings_and_lists(self) -> None:
        result = SensitiveFieldsFilter().redact(
            {"settings": {"token": "t", "hosts": ["mongodb://a:b@h", "http://es:9200"]}}
        )
        assert result == {"settings": {"token": "[REDACTED]", "hosts": ["mongodb://a:***@h", "http://es:9200"]}}

    def test_custom_fields(self) -> None:
        result = SensitiveFieldsFilter(frozenset({"pin"})).redact({"PIN": "1234", "password": "p"})
        assert result == {"PIN": "[REDACTED]", "password": "p"}

    def test_original_not_modified(self) -> None:
        event = {"password": "p"}
        SensitiveFieldsFilter().redact(event)
        assert event == {"password": "p"}

    def test_usable_as_processor(self) -> None:
        assert SensitiveFieldsFilter()(None, "info", {"secret": "s"}) == {"secret": "[REDACTED]"}


# ---------------------------------------------------------------------------
# JsonLoggerFactory / get_logger
# ---------------------------------------------------------------------------


class TestJsonLoggerFactory:
    @pytest.mark.usefixtures("restore_logging")
    def test_emits_redacted_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure(level=logging.INFO)
        get_logger("tests.search", entity="events").info("search_executed", password="p", total=3)
        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "search_executed"
        assert payload["entity"] == "events"
        assert payload["password"] == "[REDACTED]"
        assert payload["total"] == 3
        assert payload["level"] == "info"

    @pytest.mark.usefixtures("restore_logging")
    def test_root_level_and_transport_quieted(self) -> None:
        JsonLoggerFactory.configure(level=logging.DEBUG)
        assert logging.getLogger().level == logging.DEBUG
        assert len(logging.getLogger().handlers) == 1
        assert logging.getLogger("elastic_transport").level == logging.WARNING

    @pytest.mark.usefixtures("restore_logging")
    def test_below_level_is_dropped(self, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure(level=logging.WARNING)
        get_logger("tests.search").info("quiet")
        assert "quiet" not in capsys.readouterr().err
