from __future__ import annotations

import m6aprediction as m6a


def test_version_string():
    assert isinstance(m6a.__version__, str) and m6a.__version__


def test_all_names_resolve():
    for name in m6a.__all__:
        assert hasattr(m6a, name), name


def test_top_level_pipeline(constant_scorer):
    X = m6a.encode_sequences(["GGACA"])
    assert list(X.columns) == ["nt_pos1", "nt_pos2", "nt_pos3", "nt_pos4", "nt_pos5"]
    result = m6a.predict_single(constant_scorer, 0.5, "mRNA", "CDS", 10, 8, 0.5, "GGACA", 0.5)
    assert result == {"probability": "0.7", "status": "Positive"}


def test_constants_surface():
    from m6aprediction.constants import LIST_NUCLEOTIDES, REQUIRED_COLUMNS, nucleotides, position_columns

    assert LIST_NUCLEOTIDES == ("A", "T", "C", "G")
    assert len(REQUIRED_COLUMNS) == 7
    assert nucleotides() == LIST_NUCLEOTIDES
    assert position_columns(2) == ["nt_pos1", "nt_pos2"]
