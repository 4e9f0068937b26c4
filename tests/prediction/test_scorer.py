from __future__ import annotations

import numpy as np
import pandas as pd
import pytest
from sklearn.compose import ColumnTransformer
from sklearn.exceptions import NotFittedError
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder

from m6aprediction.core.errors import ScorerOutputError
from m6aprediction.prediction import (
    EstimatorScorer,
    Scorer,
    as_scorer,
    model_columns,
    predict_batch,
    predict_single,
    prepare_features,
)

CATEGORICAL = ["RNA_type", "RNA_region"] + [f"nt_pos{i}" for i in range(1, 6)]
NUMERIC = ["gc_content", "exon_length", "distance_to_junction", "evolutionary_conservation"]


def _training_table(n: int = 60) -> tuple[pd.DataFrame, np.ndarray]:
    rng = np.random.default_rng(7)
    gc = rng.uniform(0, 1, size=n)
    df = pd.DataFrame(
        {
            "gc_content": gc,
            "RNA_type": rng.choice(["mRNA", "lincRNA", "lncRNA", "pseudogene"], size=n),
            "RNA_region": rng.choice(["CDS", "intron", "3'UTR", "5'UTR"], size=n),
            "exon_length": rng.integers(10, 500, size=n),
            "distance_to_junction": rng.integers(0, 300, size=n),
            "evolutionary_conservation": rng.uniform(0, 1, size=n),
            "DNA_5mer": rng.choice(["GGACA", "AGACT", "TGACC", "GAACT"], size=n),
        }
    )
    labels = np.where(gc > 0.5, "Positive", "Negative")
    return df, labels


@pytest.fixture(scope="module")
def fitted_pipeline() -> Pipeline:
    df, y = _training_table()
    X = prepare_features(df)
    X = X.loc[:, model_columns(X)]
    pipe = Pipeline(
        [
            (
                "features",
                ColumnTransformer(
                    [
                        ("cat", OneHotEncoder(handle_unknown="ignore"), CATEGORICAL),
                        ("num", "passthrough", NUMERIC),
                    ]
                ),
            ),
            ("clf", LogisticRegression(max_iter=1000)),
        ]
    )
    return pipe.fit(X, y)


def test_stub_scorer_satisfies_protocol(constant_scorer):
    assert isinstance(constant_scorer, Scorer)
    assert as_scorer(constant_scorer) is constant_scorer


def test_estimators_are_wrapped(fitted_pipeline):
    scorer = as_scorer(fitted_pipeline)
    assert isinstance(scorer, EstimatorScorer)
    assert as_scorer(scorer) is scorer
    assert "Pipeline" in repr(scorer)


def test_fitted_pipeline_end_to_end(fitted_pipeline, feature_df):
    out = predict_batch(fitted_pipeline, feature_df)
    probs = out["predicted_m6A_prob"]
    assert probs.between(0, 1).all()
    assert (probs.round(3) == probs).all()
    assert set(out["predicted_m6A_status"]) <= {"Positive", "Negative"}


def test_fitted_pipeline_matches_direct_predict_proba(fitted_pipeline, feature_df):
    out = predict_batch(fitted_pipeline, feature_df)
    X = prepare_features(feature_df)
    direct = fitted_pipeline.predict_proba(X.loc[:, model_columns(X)])
    pos = list(fitted_pipeline.classes_).index("Positive")
    np.testing.assert_allclose(out["predicted_m6A_prob"], [round(float(p), 3) for p in direct[:, pos]])


def test_fitted_pipeline_single_record(fitted_pipeline):
    result = predict_single(fitted_pipeline, 0.9, "mRNA", "CDS", 120, 30, 0.4, "GGACA")
    assert set(result) == {"probability", "status"}
    assert 0.0 <= float(result["probability"]) <= 1.0


def test_numeric_labels_with_explicit_positive_label(feature_df):
    X = prepare_features(feature_df)
    X = X.loc[:, ["gc_content", "exon_length"]]
    clf = LogisticRegression().fit(X, [1, 0, 1])
    scorer = EstimatorScorer(clf, positive_label=1)
    proba = scorer.predict_proba(prepare_features(feature_df))
    assert list(proba.columns) == ["0", "Positive"]
    np.testing.assert_allclose(proba.sum(axis=1), 1.0)


def test_explicit_feature_columns(feature_df):
    X = prepare_features(feature_df)
    clf = LogisticRegression().fit(X[["gc_content"]].to_numpy(), ["Negative", "Negative", "Positive"])
    scorer = EstimatorScorer(clf, feature_columns=["gc_content"])
    out = predict_batch(scorer, feature_df)
    assert len(out) == 3


def test_positive_label_missing_from_classes(feature_df):
    X = prepare_features(feature_df)[["gc_content"]]
    clf = LogisticRegression().fit(X, ["no", "yes", "no"])
    with pytest.raises(ScorerOutputError):
        predict_batch(EstimatorScorer(clf), feature_df)


def test_unfitted_estimator_raises_not_fitted(feature_df):
    with pytest.raises(NotFittedError):
        EstimatorScorer(LogisticRegression()).predict_proba(prepare_features(feature_df))


def test_estimator_without_predict_proba_is_rejected():
    class NoProba:
        classes_ = ["Negative", "Positive"]

    with pytest.raises(TypeError):
        EstimatorScorer(NoProba())
