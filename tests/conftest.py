import numpy as np
import pandas as pd
import pytest

from m6a_prediction.models import Classifier, ClassifierFactory
from m6a_prediction.preprocessing import FeatureAssembler


class ConstantClassifier(Classifier):
    """Returns the same Positive probability for every row and records calls."""

    def __init__(self, prob):
        self.prob = prob
        self.calls = 0
        self.seen = None

    def classify(self, X):
        self.calls += 1
        self.seen = X
        return pd.DataFrame(
            {"Negative": 1 - self.prob, "Positive": self.prob},
            index=X.index
        )


class FixedProbaEstimator:
    """Minimal estimator exposing predict_proba and classes_."""

    classes_ = np.array(["Negative", "Positive"])

    def __init__(self, probs):
        self.probs = np.asarray(probs, dtype=float)

    def predict_proba(self, X):
        p = self.probs[:len(X)]
        return np.column_stack([1 - p, p])


@pytest.fixture
def feature_df():
    """Three valid sites with an extra pass-through column."""
    return pd.DataFrame({
        "site_id": ["s1", "s2", "s3"],
        "gc_content": [0.52, 0.37, 0.61],
        "RNA_type": ["mRNA", "lincRNA", "pseudogene"],
        "RNA_region": ["CDS", "3'UTR", "intron"],
        "exon_length": [12.8, 13.4, 10.1],
        "distance_to_junction": [8.2, 6.0, 4.4],
        "evolutionary_conservation": [0.75, 0.40, 0.12],
        "DNA_5mer": ["GGACT", "AGACA", "TGACC"],
    })


@pytest.fixture
def single_site():
    return {
        "gc_content": 0.6,
        "RNA_type": "mRNA",
        "RNA_region": "CDS",
        "exon_length": 12,
        "distance_to_junction": 5,
        "evolutionary_conservation": 0.8,
        "DNA_5mer": "ATCGA",
    }


@pytest.fixture
def training_df():
    """Synthetic sites where a central A marks modified sites."""
    rng = np.random.default_rng(0)
    n = 60
    bases = np.array(list("ATCG"))
    kmers = ["".join(rng.choice(bases, 5)) for _ in range(n)]
    df = pd.DataFrame({
        "gc_content": rng.uniform(0, 1, n),
        "RNA_type": rng.choice(["mRNA", "lincRNA", "lncRNA", "pseudogene"], n),
        "RNA_region": rng.choice(["CDS", "intron", "3'UTR", "5'UTR"], n),
        "exon_length": rng.uniform(5, 15, n),
        "distance_to_junction": rng.uniform(0, 10, n),
        "evolutionary_conservation": rng.uniform(0, 1, n),
        "DNA_5mer": kmers,
    })
    labels = np.where(df["DNA_5mer"].str[2] == "A", "Positive", "Negative")
    return df, labels


@pytest.fixture
def fitted_pipeline(training_df):
    """Small random forest backend fitted on the synthetic sites."""
    df, labels = training_df
    assembler = FeatureAssembler()
    X = assembler.model_matrix(assembler.assemble(df))
    model = ClassifierFactory().create("random_forest", sequence_length=5, n_estimators=20)
    model.fit(X, labels)
    return model
