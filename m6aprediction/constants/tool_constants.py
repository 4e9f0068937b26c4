# tool_constants.py
from __future__ import annotations

# Environment variable prefix used across the project (e.g., M6A_CACHE_ROOT)
_ENV_PREFIX: str = "M6A_"

# DNA alphabet; the order is the category order of every positional column.
LIST_NUCLEOTIDES: tuple[str, ...] = ("A", "T", "C", "G")

# Fixed factor vocabularies for the two categorical features
LIST_RNA_TYPES: tuple[str, ...] = ("mRNA", "lincRNA", "lncRNA", "pseudogene")
LIST_RNA_REGIONS: tuple[str, ...] = ("CDS", "intron", "3'UTR", "5'UTR")

# Feature table schema
COLUMN_GC_CONTENT: str = "gc_content"
COLUMN_RNA_TYPE: str = "RNA_type"
COLUMN_RNA_REGION: str = "RNA_region"
COLUMN_EXON_LENGTH: str = "exon_length"
COLUMN_DISTANCE_TO_JUNCTION: str = "distance_to_junction"
COLUMN_CONSERVATION: str = "evolutionary_conservation"
COLUMN_DNA_5MER: str = "DNA_5mer"

REQUIRED_COLUMNS: tuple[str, ...] = (
    COLUMN_GC_CONTENT,
    COLUMN_RNA_TYPE,
    COLUMN_RNA_REGION,
    COLUMN_EXON_LENGTH,
    COLUMN_DISTANCE_TO_JUNCTION,
    COLUMN_CONSERVATION,
    COLUMN_DNA_5MER,
)

NUMERIC_COLUMNS: tuple[str, ...] = (
    COLUMN_GC_CONTENT,
    COLUMN_EXON_LENGTH,
    COLUMN_DISTANCE_TO_JUNCTION,
    COLUMN_CONSERVATION,
)

# Numeric features whose values are fractions
UNIT_INTERVAL_COLUMNS: tuple[str, ...] = (COLUMN_GC_CONTENT, COLUMN_CONSERVATION)

CATEGORICAL_VOCABULARIES: dict[str, tuple[str, ...]] = {
    COLUMN_RNA_TYPE: LIST_RNA_TYPES,
    COLUMN_RNA_REGION: LIST_RNA_REGIONS,
}

# Encoded and predicted columns
POSITION_PREFIX: str = "nt_pos"
PROBABILITY_COLUMN: str = "predicted_m6A_prob"
STATUS_COLUMN: str = "predicted_m6A_status"

POSITIVE_LABEL: str = "Positive"
NEGATIVE_LABEL: str = "Negative"

DEFAULT_THRESHOLD: float = 0.5
DEFAULT_KMER_LENGTH: int = 5
PROBABILITY_DECIMALS: int = 3


def nucleotides() -> tuple[str, ...]:
    """Return the nucleotide alphabet in category order."""
    return LIST_NUCLEOTIDES


def position_columns(length: int) -> list[str]:
    """Column names for a sequence of `length` positions: nt_pos1..nt_posN."""
    return [f"{POSITION_PREFIX}{i}" for i in range(1, length + 1)]
