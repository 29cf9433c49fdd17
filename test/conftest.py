from __future__ import annotations

import logging
import typing

import pytest

from reqcontext import RequestContext

from . import EXAMPLE_URI


@pytest.fixture
def context() -> RequestContext:
    return RequestContext(EXAMPLE_URI)


@pytest.fixture
def debug_logs(caplog: pytest.LogCaptureFixture) -> typing.Iterator[pytest.LogCaptureFixture]:
    caplog.set_level(logging.DEBUG, logger="reqcontext")
    yield caplog
