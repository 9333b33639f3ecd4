from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from vetogov.core.errors import MalformedParameters, NotAContract, Severity, VetoGovError, WrongHelperCount
from vetogov.core.events import SetupAuditLogger, redact
from vetogov.core.logger import setup_logging
from vetogov.core.trace import current_trace_id, resolve_trace_id, trace_context

from .helpers.log_assertions import assert_no_secret_leak, read_jsonl


def test_error_to_dict_shape():
    e = NotAContract("0x" + "ee" * 20)
    d = e.to_dict()
    assert d["code"] == "not_a_contract"
    assert d["severity"] == Severity.ERROR.value
    assert d["recoverable"] is False
    assert d["context"] == {"address": "0x" + "ee" * 20}
    assert isinstance(e, VetoGovError)
    assert "not_a_contract" in str(e)


def test_error_context_is_redacted():
    e = MalformedParameters("bad", private_key="SECRET", position=3)
    d = e.to_dict()
    assert d["context"]["private_key"] == "***REDACTED***"
    assert d["context"]["position"] == 3


def test_wrong_helper_count_names_length():
    e = WrongHelperCount(2)
    assert e.length == 2
    assert e.context["length"] == 2


def test_redact_nested():
    out = redact({"a": [{"mnemonic": "x y z"}], "b": 1})
    assert out == {"a": [{"mnemonic": "***REDACTED***"}], "b": 1}


def test_audit_logger_writes_redacted_jsonl(tmp_path):
    a = SetupAuditLogger(path=str(tmp_path / "a" / "audit.jsonl"), keep_last=10)
    a.log(trace_id="t1", event="setup.install_prepared", outcome="ok", details={"plugin": "p", "api_key": "SECRET"})
    rows = read_jsonl(a.path)
    assert rows[0]["trace_id"] == "t1"
    assert rows[0]["details"]["plugin"] == "p"
    assert_no_secret_leak(rows, "SECRET")
    assert_no_secret_leak(a.recent(), "SECRET")


def test_audit_tail_is_bounded(tmp_path):
    a = SetupAuditLogger(path=str(tmp_path / "audit.jsonl"), keep_last=10)
    for i in range(25):
        a.log(trace_id=f"t{i}", event="e", outcome="ok")
    recent = a.recent(100)
    assert len(recent) == 10
    assert recent[0]["trace_id"] == "t24"


def test_trace_context_scopes_trace_id():
    assert current_trace_id() is None
    with trace_context("abc"):
        assert resolve_trace_id() == "abc"
        assert resolve_trace_id("explicit") == "explicit"
    assert current_trace_id() is None
    assert len(resolve_trace_id()) == 32


def test_setup_logging_adds_handlers_once(tmp_path):
    logger = setup_logging(str(tmp_path / "logs"))
    setup_logging(str(tmp_path / "logs"))
    try:
        assert logger is logging.getLogger("vetogov")
        assert sum(isinstance(h, RotatingFileHandler) for h in logger.handlers) == 1
        logger.info("hello")
    finally:
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)
    assert (tmp_path / "logs" / "vetogov.log").exists()
