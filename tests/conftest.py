import logging
import os
from collections.abc import Iterator

import pytest

# Subprocess coverage for CI runs that export COVERAGE_PROCESS_START.
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()


@pytest.fixture  # type: ignore[misc]
def parser_debug_log(caplog: pytest.LogCaptureFixture) -> Iterator[pytest.LogCaptureFixture]:
    """Captures the parser's DEBUG records (backtracking, skipped tokens)."""
    with caplog.at_level(logging.DEBUG, logger="oong.oong_parser"):
        yield caplog
