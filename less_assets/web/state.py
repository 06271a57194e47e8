"""In-memory state for the web panel, no database required."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime

from less_assets.models import CompileConfig, PassResult
from less_assets.pipeline import CompileOrchestrator


@dataclass
class PassSnapshot:
    result: PassResult
    forced: bool = False
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> dict:
        data = self.result.to_dict()
        data["forced"] = self.forced
        data["timestamp"] = self.timestamp
        return data


class AppState:
    """Holds the configured orchestrator and the last pass it ran."""

    def __init__(self, config: CompileConfig, orchestrator: CompileOrchestrator | None = None):
        self.config = config
        self.orchestrator = orchestrator or CompileOrchestrator(config)
        self.last_pass: PassSnapshot | None = None
        # Passes are sequential; concurrent requests wait their turn
        self._lock = threading.Lock()

    def run_pass(self, force: bool = False) -> PassSnapshot:
        with self._lock:
            result = self.orchestrator.run_pass(force=force)
            self.last_pass = PassSnapshot(result=result, forced=force)
            return self.last_pass
