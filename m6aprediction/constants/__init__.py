# __init__.py
"""
Public constants API for m6aprediction.constants.

This module re-exports selected names to provide a clean and stable surface.
"""

# config_constants
from .config_constants import CachePaths

# feature_constants
from .feature_constants import VocabularyPolicy

# logging_constants
from .logging_constants import (
    LOG_DEFAULT_BACKUPS,
    LOG_DEFAULT_FILE,
    LOG_DEFAULT_JSON,
    LOG_DEFAULT_LEVEL,
    LOG_DEFAULT_MAX_BYTES,
    LOG_DEFAULT_NAME,
    LOG_DEFAULT_STDERR,
    LOG_ENV_PREFIX,
    LOG_LEVEL_MAP,
    env_log_json,
    env_log_level,
    env_log_stderr,
    env_log_utc,
)

# tool_configs
from .tool_configs import ToolConfig, get_config, normalize_policy, set_config

# tool_constants
from .tool_constants import _ENV_PREFIX as M6A_ENV_PREFIX
from .tool_constants import (
    CATEGORICAL_VOCABULARIES,
    DEFAULT_KMER_LENGTH,
    DEFAULT_THRESHOLD,
    LIST_NUCLEOTIDES,
    LIST_RNA_REGIONS,
    LIST_RNA_TYPES,
    NEGATIVE_LABEL,
    NUMERIC_COLUMNS,
    POSITION_PREFIX,
    POSITIVE_LABEL,
    PROBABILITY_COLUMN,
    PROBABILITY_DECIMALS,
    REQUIRED_COLUMNS,
    STATUS_COLUMN,
    UNIT_INTERVAL_COLUMNS,
    nucleotides,
    position_columns,
)

__all__ = [
    # tool_constants
    "M6A_ENV_PREFIX",
    "LIST_NUCLEOTIDES",
    "LIST_RNA_TYPES",
    "LIST_RNA_REGIONS",
    "REQUIRED_COLUMNS",
    "NUMERIC_COLUMNS",
    "UNIT_INTERVAL_COLUMNS",
    "CATEGORICAL_VOCABULARIES",
    "POSITION_PREFIX",
    "PROBABILITY_COLUMN",
    "STATUS_COLUMN",
    "POSITIVE_LABEL",
    "NEGATIVE_LABEL",
    "DEFAULT_THRESHOLD",
    "DEFAULT_KMER_LENGTH",
    "PROBABILITY_DECIMALS",
    "nucleotides",
    "position_columns",
    # feature_constants
    "VocabularyPolicy",
    # config_constants
    "CachePaths",
    # tool_configs
    "ToolConfig",
    "get_config",
    "set_config",
    "normalize_policy",
    # logging_constants
    "LOG_ENV_PREFIX",
    "LOG_DEFAULT_NAME",
    "LOG_DEFAULT_FILE",
    "LOG_DEFAULT_LEVEL",
    "LOG_DEFAULT_JSON",
    "LOG_DEFAULT_STDERR",
    "LOG_DEFAULT_MAX_BYTES",
    "LOG_DEFAULT_BACKUPS",
    "LOG_LEVEL_MAP",
    "env_log_level",
    "env_log_json",
    "env_log_stderr",
    "env_log_utc",
]
