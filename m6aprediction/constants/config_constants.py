# config_constants.py
import threading
from dataclasses import dataclass
from pathlib import Path

_LOCK = threading.RLock()


@dataclass
class CachePaths:
    """
    Directory layout owned by m6aprediction under a cache root.
    Only the log directory is written to; predictions are never persisted.
    """
    cache_root: Path
    tool_name: str = "m6aprediction"

    def base(self) -> Path:
        return Path(self.cache_root) / self.tool_name

    def logs(self) -> Path:
        return self.base() / "logs"

    def ensure_all(self) -> None:
        with _LOCK:
            for p in (self.base(), self.logs()):
                p.mkdir(parents=True, exist_ok=True)
