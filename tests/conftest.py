import logging
import os
from typing import Any

import pytest

from lox.lox_errors import Diagnostics

# Start coverage in subprocesses spawned by the CLI tests
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    # The collector teardown assertion fails under containerized runners
    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop


@pytest.fixture  # type: ignore[misc]
def diagnostics() -> Diagnostics:
    return Diagnostics()


@pytest.fixture(autouse=True)  # type: ignore[misc]
def quiet_root_logger() -> Any:
    """Keep `lox --verbose` runs in one test from changing log levels for the next."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
