from __future__ import annotations

import json
import logging

from ens_tracker.utils.logging import JsonFormatter, _json_formatter, configure_logging

EXPECTED_ADDED = 10
EXPECTED_FAILED = 2


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = _record()
    record.added = EXPECTED_ADDED
    record.ens_name = "vitalik.eth"

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["added"] == EXPECTED_ADDED
    assert payload["ens_name"] == "vitalik.eth"
    assert "lineno" not in payload


def test_json_formatter_supports_legacy_nested_extra_field() -> None:
    record = _record()
    record.extra = {"failed": EXPECTED_FAILED}

    payload = json.loads(_json_formatter(record))

    assert payload["failed"] == EXPECTED_FAILED


def test_json_formatter_stringifies_unserializable_values() -> None:
    record = _record()
    record.path = object()

    payload = json.loads(JsonFormatter().format(record))

    assert payload["path"].startswith("<object")


def test_configure_logging_sets_root_level() -> None:
    configure_logging(level="warning")

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("web3").level == logging.WARNING

    configure_logging(level="INFO")


def test_ens_name_extra_reaches_json_output() -> None:
    logger = logging.getLogger("ens_tracker.test")
    records: list = []
    handler = logging.Handler()
    handler.emit = records.append  # type: ignore[method-assign]
    logger.addHandler(handler)
    try:
        logger.warning("message", extra={"ens_name": "example.eth"})
    finally:
        logger.removeHandler(handler)

    assert json.loads(_json_formatter(records[0]))["ens_name"] == "example.eth"
