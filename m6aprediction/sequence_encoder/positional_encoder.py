from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

import pandas as pd

from m6aprediction.constants import nucleotides, position_columns

from .base_encoder import Encoders


class PositionalEncoder(Encoders):
    """
    Encode each sequence position as a categorical feature over {A, T, C, G}.

    A sequence of length n yields columns ``nt_pos1 .. nt_posN``; every column
    is a pandas Categorical with the fixed category order A, T, C, G, so
    symbols outside the alphabet (tolerated only under the "missing" policy)
    become NaN.
    """

    def __init__(
        self,
        dataset: pd.DataFrame | None,
        sequence_column: str = "DNA_5mer",
        sequence_length: int | None = None,
        on_unknown: str | None = None,
        debug: bool = False,
        debug_mode: int = logging.INFO,
    ) -> None:
        super().__init__(
            dataset=dataset,
            sequence_column=sequence_column,
            sequence_length=sequence_length,
            on_unknown=on_unknown,
            debug=debug,
            debug_mode=debug_mode,
            name_logging=PositionalEncoder.__name__,
        )

    def run_process(self) -> pd.DataFrame:
        self.__logger__.info(
            "Starting positional encoding for %d sequences of length %d.",
            len(self.sequences), self.sequence_length,
        )
        header = position_columns(self.sequence_length)
        grid = [list(seq) for seq in self.sequences]
        frame = pd.DataFrame(grid, columns=header)
        categories = list(nucleotides())
        self.coded_dataset = pd.DataFrame(
            {col: pd.Categorical(frame[col], categories=categories) for col in header}
        )
        self.__logger__.info("Positional encoding completed with %d features.", self.coded_dataset.shape[1])
        return self.coded_dataset


def encode_sequences(
    sequences: Iterable[str] | str,
    *,
    sequence_length: Optional[int] = None,
    on_unknown: Optional[str] = None,
) -> pd.DataFrame:
    """
    Encode fixed-length DNA strings into positional categorical features.

    Parameters
    ----------
    sequences : iterable of str
        One or more sequences of equal length. A single string is treated as
        a one-element collection.
    sequence_length : int, optional
        Length every sequence must have. Inferred from the first sequence if None.
    on_unknown : {"error", "missing"}, optional
        Policy for symbols outside {A, T, C, G}; defaults to the configured policy.

    Returns
    -------
    pd.DataFrame
        One row per sequence, columns ``nt_pos1 .. nt_posN``.

    Raises
    ------
    EmptyInputError
        If no sequences are given.
    SequenceShapeError
        If the sequences do not all share the expected length.
    VocabularyError
        If a symbol falls outside the alphabet under the "error" policy.

    Examples
    --------
    >>> encode_sequences(["GGACA", "ACGTT"]).iloc[0].tolist()
    ['G', 'G', 'A', 'C', 'A']
    """
    if isinstance(sequences, str):
        sequences = [sequences]
    values = list(sequences.tolist() if isinstance(sequences, pd.Series) else sequences)
    encoder = PositionalEncoder(
        dataset=pd.DataFrame({"sequence": values}, dtype=object),
        sequence_column="sequence",
        sequence_length=sequence_length,
        on_unknown=on_unknown,
    )
    return encoder.run_process()
