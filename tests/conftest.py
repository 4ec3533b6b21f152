import os
from typing import Any

from hypothesis import settings

# Monkeypatch coverage to bypass teardown crash in act/docker
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop

settings.register_profile("ci", max_examples=50, deadline=None)
settings.register_profile("dev", max_examples=200)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
