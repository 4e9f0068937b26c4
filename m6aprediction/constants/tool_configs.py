# tool_configs.py
import os
import platform
from dataclasses import dataclass, field
from pathlib import Path

from .config_constants import CachePaths
from .feature_constants import VocabularyPolicy
from .logging_constants import env_log_level
from .tool_constants import _ENV_PREFIX, DEFAULT_KMER_LENGTH


def _default_cache_root() -> Path:
    """
    Determine the default cache root honoring M6A_CACHE_ROOT if set
    and following OS-specific conventions otherwise.
    """
    env = os.getenv(f"{_ENV_PREFIX}CACHE_ROOT")
    if env:
        return Path(env).expanduser()

    system = platform.system().lower()
    if system == "darwin":
        return Path.home() / "Library" / "Caches"
    if system == "windows":
        return Path(os.getenv("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
    return Path(os.getenv("XDG_CACHE_HOME", Path.home() / ".cache"))


def _default_vocabulary_policy() -> str:
    raw = os.getenv(f"{_ENV_PREFIX}VOCABULARY_POLICY", VocabularyPolicy.error.value)
    return normalize_policy(raw)


def _default_kmer_length() -> int:
    raw = os.getenv(f"{_ENV_PREFIX}KMER_LENGTH")
    if raw is None:
        return DEFAULT_KMER_LENGTH
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_KMER_LENGTH
    return value if value > 0 else DEFAULT_KMER_LENGTH


def _default_debug() -> bool:
    return os.getenv(f"{_ENV_PREFIX}DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def normalize_policy(policy: str | VocabularyPolicy) -> str:
    """
    Return the canonical name of a vocabulary policy.

    Raises
    ------
    ValueError
        If `policy` is not one of the supported names.
    """
    if isinstance(policy, VocabularyPolicy):
        return policy.value
    key = str(policy).strip().lower()
    allowed = [p.value for p in VocabularyPolicy]
    if key not in allowed:
        raise ValueError(f"Unknown vocabulary policy '{policy}'. Allowed: {allowed}")
    return key


@dataclass
class ToolConfig:
    """
    Global configuration container for m6aprediction runtime.
    """

    cache_paths: CachePaths = field(default_factory=lambda: CachePaths(_default_cache_root()))
    debug: bool = field(default_factory=_default_debug)
    log_level: int = field(default_factory=env_log_level)
    vocabulary_policy: str = field(default_factory=_default_vocabulary_policy)
    kmer_length: int = field(default_factory=_default_kmer_length)

    def __post_init__(self) -> None:
        self.vocabulary_policy = normalize_policy(self.vocabulary_policy)
        if int(self.kmer_length) <= 0:
            raise ValueError(f"kmer_length must be a positive integer; got {self.kmer_length}")
        self.kmer_length = int(self.kmer_length)


_GLOBAL: ToolConfig | None = None


def get_config() -> ToolConfig:
    """
    Return the global ToolConfig, creating it on first use.
    Ensures cache directories exist.
    """
    global _GLOBAL
    if _GLOBAL is None:
        _GLOBAL = ToolConfig()
        _GLOBAL.cache_paths.ensure_all()
    return _GLOBAL


def set_config(cfg: ToolConfig) -> None:
    """
    Replace the global ToolConfig with a custom instance.
    Ensures cache directories exist.
    """
    global _GLOBAL
    _GLOBAL = cfg
    _GLOBAL.cache_paths.ensure_all()
