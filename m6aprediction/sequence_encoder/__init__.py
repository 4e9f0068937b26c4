# m6aprediction/sequence_encoder/__init__.py
"""
Sequence Encoding
=================

Positional categorical encoding of fixed-length DNA sequences (k-mers) into
``nt_pos1 .. nt_posN`` feature columns over the alphabet {A, T, C, G}.
"""

from .base_encoder import Encoders
from .positional_encoder import PositionalEncoder, encode_sequences

__all__ = [
    "Encoders",
    "PositionalEncoder",
    "encode_sequences",
]
