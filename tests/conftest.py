from __future__ import annotations

import logging

import pytest

from vetogov.core.chain.memory import InMemoryAuthority, InMemoryChain
from vetogov.core.events import SetupAuditLogger
from vetogov.core.setup.plugin_setup import VetoPluginSetup
from .helpers.builders import AUTHORITY


class _L:
    def __init__(self):
        self.lines = []

    def info(self, msg, *_a, **_k):
        self.lines.append(("info", msg))

    def warning(self, msg, *_a, **_k):
        self.lines.append(("warning", msg))

    def error(self, msg, *_a, **_k):
        self.lines.append(("error", msg))


@pytest.fixture(autouse=True)
def _release_vetogov_handlers():
    yield
    lg = logging.getLogger("vetogov")
    for h in list(lg.handlers):
        h.close()
        lg.removeHandler(h)


@pytest.fixture
def logger():
    return _L()


@pytest.fixture
def chain(logger):
    return InMemoryChain(seed="tests", logger=logger)


@pytest.fixture
def authority():
    return InMemoryAuthority(AUTHORITY)


@pytest.fixture
def audit(tmp_path):
    return SetupAuditLogger(path=str(tmp_path / "logs" / "setup_audit.jsonl"), keep_last=50)


@pytest.fixture
def plugin_setup(chain, audit, logger):
    return VetoPluginSetup(host=chain, audit=audit, logger=logger)
