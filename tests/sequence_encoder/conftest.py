from __future__ import annotations

import pandas as pd
import pytest


@pytest.fixture
def kmers_df() -> pd.DataFrame:
    """Five canonical 5-mers, DRACH-like motifs included."""
    return pd.DataFrame({"DNA_5mer": ["GGACA", "AGACT", "TGACC", "GAACT", "AAACA"]})
