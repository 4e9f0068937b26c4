from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

import pandas as pd

from m6aprediction.constants import normalize_policy, nucleotides
from m6aprediction.constants.feature_constants import VocabularyPolicy
from m6aprediction.core.config import get_config
from m6aprediction.core.errors import (
    EmptyInputError,
    FeatureTypeError,
    MissingColumnsError,
    SequenceShapeError,
    VocabularyError,
)
from m6aprediction.logging import add_context, get_logger


class Encoders:
    """
    Common pre-processing and validation for nucleotide sequence encoders.

    Sequences are stripped and upper-cased, then checked for a uniform length
    and for membership in the DNA alphabet {A, T, C, G}. Any failure raises
    before an encoder produces features; nothing is filtered silently.

    Parameters
    ----------
    dataset : pd.DataFrame
        Input table containing sequences in `sequence_column`.
    sequence_column : str, default="DNA_5mer"
        Column that holds the sequence strings.
    sequence_length : int, optional
        Declared length every sequence must have. If None, the length of the
        first sequence is used and every other sequence is checked against it.
    on_unknown : {"error", "missing"}, optional
        Policy for symbols outside the alphabet. "error" raises
        `VocabularyError`; "missing" logs a warning and lets the encoder emit
        a missing category. None uses `get_config().vocabulary_policy`.
    debug : bool, default=False
        If True, the child logger is set to `debug_mode`.
    debug_mode : int, default=logging.INFO
        Logging level for this encoder's child logger.
    name_logging : str, default="encoder"
        Child logger suffix; emitted as
        ``m6aprediction.sequence_encoder.<name_logging>``.

    Attributes
    ----------
    sequences : list[str]
        Normalized sequences, in input order.
    sequence_length : int
        Validated common length.
    unknown_positions : dict[int, list[int]]
        Row -> 0-based positions holding out-of-alphabet symbols.
    coded_dataset : pd.DataFrame
        Output feature table (filled by concrete encoders).
    """

    def __init__(
        self,
        dataset: Optional[pd.DataFrame],
        sequence_column: str = "DNA_5mer",
        sequence_length: Optional[int] = None,
        on_unknown: Optional[str] = None,
        debug: bool = False,
        debug_mode: int = logging.INFO,
        name_logging: str = "encoder",
    ) -> None:
        _ = get_logger("m6aprediction")
        self.__logger__ = logging.getLogger(f"m6aprediction.sequence_encoder.{name_logging}")
        self.__logger__.setLevel(debug_mode if debug else logging.NOTSET)
        add_context(self.__logger__, component="sequence_encoder", encoder=name_logging)

        if dataset is None:
            self.__logger__.error("No dataset provided to encoder.")
            raise EmptyInputError("No dataset provided to encoder.")

        self.dataset = dataset
        self.sequence_column = sequence_column
        self.declared_length = sequence_length
        self.on_unknown = normalize_policy(on_unknown if on_unknown is not None else get_config().vocabulary_policy)

        self.sequences: list[str] = []
        self.sequence_length = 0
        self.unknown_positions: dict[int, list[int]] = {}
        self.coded_dataset = pd.DataFrame()

        self.make_revisions()

    # ----------------------------
    # Validation steps
    # ----------------------------

    def make_revisions(self) -> None:
        """Run column, emptiness, length and alphabet validation."""
        if self.sequence_column not in self.dataset.columns:
            err = MissingColumnsError([self.sequence_column])
            self.__logger__.error(str(err))
            raise err

        if len(self.dataset) == 0:
            self.__logger__.error("Cannot encode an empty collection of sequences.")
            raise EmptyInputError("Cannot encode an empty collection of sequences.")

        self.sequences = self.normalize_sequences(self.dataset[self.sequence_column])
        self.__logger__.debug("Validating lengths of %d sequences.", len(self.sequences))
        self.check_sequence_lengths()
        self.__logger__.debug("Validating alphabet %s (policy=%s).", nucleotides(), self.on_unknown)
        self.check_allowed_alphabet()

    def normalize_sequences(self, values: Iterable[object]) -> list[str]:
        """Strip and upper-case every sequence; reject non-string entries."""
        out: list[str] = []
        bad: list[int] = []
        for i, v in enumerate(values):
            if not isinstance(v, str):
                bad.append(i)
                continue
            out.append(v.strip().upper())
        if bad:
            msg = f"Column '{self.sequence_column}' holds non-string values at rows {bad[:10]}."
            self.__logger__.error(msg)
            raise FeatureTypeError(msg)
        return out

    def check_sequence_lengths(self) -> None:
        """All sequences must share the declared (or first) length."""
        expected = self.declared_length if self.declared_length is not None else len(self.sequences[0])
        if expected <= 0:
            self.__logger__.error("Sequences must have at least one position; got length %d.", expected)
            raise EmptyInputError(f"Sequences must have at least one position; got length {expected}.")

        mismatches = [(i, len(s)) for i, s in enumerate(self.sequences) if len(s) != expected]
        if mismatches:
            err = SequenceShapeError(expected, mismatches)
            self.__logger__.error(str(err))
            raise err
        self.sequence_length = expected

    def check_allowed_alphabet(self) -> None:
        """Locate symbols outside {A, T, C, G} and apply the vocabulary policy."""
        alpha = set(nucleotides())
        unknown_symbols: set[str] = set()
        for i, seq in enumerate(self.sequences):
            positions = [p for p, nt in enumerate(seq) if nt not in alpha]
            if positions:
                self.unknown_positions[i] = positions
                unknown_symbols.update(seq[p] for p in positions)

        if not self.unknown_positions:
            return

        rows = sorted(self.unknown_positions)
        if self.on_unknown == VocabularyPolicy.error.value:
            err = VocabularyError(self.sequence_column, unknown_symbols, nucleotides())
            self.__logger__.error("%s Rows: %s", err, rows[:10])
            raise err

        self.__logger__.warning(
            "Symbols %s in '%s' are outside %s and will be encoded as missing (%d rows affected, first: %s).",
            sorted(unknown_symbols), self.sequence_column, list(nucleotides()), len(rows), rows[:10],
        )
