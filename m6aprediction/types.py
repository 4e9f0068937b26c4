from __future__ import annotations

from typing import Literal, TypedDict

StatusLabel = Literal["Positive", "Negative"]


class SinglePrediction(TypedDict):
    probability: str
    status: StatusLabel
