import pandas as pd
import pytest

from conftest import ConstantClassifier, FixedProbaEstimator
from m6a_prediction.exceptions import (
    ClassifierOutputError,
    MissingColumnError,
    UnrecognizedCategoryError,
)
from m6a_prediction.models import (
    M6APredictor,
    predict_batch,
    prediction_multiple,
    prediction_single,
)
from m6a_prediction.schema import REQUIRED_COLUMNS, FeatureSchema


class TestPredictionMultiple:
    """Tests for batch prediction."""

    def test_constant_classifier_above_threshold(self, feature_df):
        """Test that 0.7 with threshold 0.6 calls every row Positive."""
        result = prediction_multiple(ConstantClassifier(0.7), feature_df, positive_threshold=0.6)
        assert (result["predicted_m6A_prob"] == 0.7).all()
        assert (result["predicted_m6A_status"] == "Positive").all()

    def test_only_two_columns_added(self, feature_df):
        result = prediction_multiple(ConstantClassifier(0.3), feature_df)
        assert list(result.columns) == list(feature_df.columns) + [
            "predicted_m6A_prob", "predicted_m6A_status"
        ]
        assert (result["predicted_m6A_status"] == "Negative").all()

    def test_row_order_and_count_preserved(self, feature_df):
        feature_df.index = [20, 5, 11]
        estimator = FixedProbaEstimator([0.9, 0.1, 0.55])
        result = prediction_multiple(estimator, feature_df)
        assert list(result.index) == [20, 5, 11]
        assert list(result["site_id"]) == ["s1", "s2", "s3"]
        assert list(result["predicted_m6A_prob"]) == pytest.approx([0.9, 0.1, 0.55])
        assert list(result["predicted_m6A_status"]) == ["Positive", "Negative", "Positive"]

    def test_threshold_is_strict(self, feature_df):
        """Test that a probability equal to the threshold stays Negative."""
        estimator = FixedProbaEstimator([0.5, 0.500001, 0.499999])
        result = prediction_multiple(estimator, feature_df, positive_threshold=0.5)
        assert list(result["predicted_m6A_status"]) == ["Negative", "Positive", "Negative"]

    def test_input_table_untouched(self, feature_df):
        before = feature_df.copy()
        prediction_multiple(ConstantClassifier(0.7), feature_df)
        pd.testing.assert_frame_equal(feature_df, before)

    def test_classifier_sees_schema_columns(self, feature_df):
        classifier = ConstantClassifier(0.7)
        prediction_multiple(classifier, feature_df)
        assert classifier.calls == 1
        assert list(classifier.seen.columns)[-5:] == [f"position_{i}" for i in range(1, 6)]
        assert "site_id" not in classifier.seen.columns

    def test_missing_column_fails_before_classifier(self, feature_df):
        classifier = ConstantClassifier(0.7)
        with pytest.raises(MissingColumnError):
            prediction_multiple(classifier, feature_df.drop(columns=["exon_length"]))
        assert classifier.calls == 0

    def test_unknown_category_fails_before_classifier(self, feature_df):
        feature_df.loc[0, "RNA_type"] = "miRNA"
        classifier = ConstantClassifier(0.7)
        with pytest.raises(UnrecognizedCategoryError):
            prediction_multiple(classifier, feature_df)
        assert classifier.calls == 0

    def test_permissive_mode_still_scores(self, feature_df):
        feature_df.loc[0, "RNA_type"] = "miRNA"
        classifier = ConstantClassifier(0.7)
        result = prediction_multiple(classifier, feature_df, strict=False)
        assert classifier.calls == 1
        assert pd.isna(classifier.seen["RNA_type"].iloc[0])
        assert result.loc[0, "RNA_type"] == "miRNA"

    def test_missing_sequence_rejected_in_strict_mode(self, feature_df):
        feature_df.loc[1, "DNA_5mer"] = None
        classifier = ConstantClassifier(0.7)
        with pytest.raises(UnrecognizedCategoryError):
            prediction_multiple(classifier, feature_df)
        assert classifier.calls == 0

    def test_missing_sequence_scored_as_missing_positions(self, feature_df):
        feature_df.loc[1, "DNA_5mer"] = None
        classifier = ConstantClassifier(0.7)
        result = prediction_multiple(classifier, feature_df, strict=False)
        positions = [f"position_{i}" for i in range(1, 6)]
        assert classifier.seen.loc[1, positions].isna().all()
        assert classifier.seen.loc[0, "position_1"] == "G"
        assert len(result) == 3

    def test_position_named_column_passes_through(self, feature_df):
        """Test that a caller column named position_1 neither duplicates nor leaks."""
        feature_df["position_1"] = "x"
        classifier = ConstantClassifier(0.7)
        result = prediction_multiple(classifier, feature_df)
        assert list(classifier.seen.columns) == FeatureSchema().model_columns(5)
        assert classifier.seen.loc[0, "position_1"] == "G"
        assert (result["position_1"] == "x").all()

    def test_empty_table_skips_classifier(self):
        classifier = ConstantClassifier(0.7)
        result = prediction_multiple(classifier, pd.DataFrame(columns=REQUIRED_COLUMNS))
        assert len(result) == 0
        assert "predicted_m6A_prob" in result.columns
        assert "predicted_m6A_status" in result.columns
        assert classifier.calls == 0

    def test_classifier_errors_propagate(self, feature_df):
        class Broken(ConstantClassifier):
            def classify(self, X):
                raise RuntimeError("model exploded")

        with pytest.raises(RuntimeError, match="model exploded"):
            prediction_multiple(Broken(0.5), feature_df)

    def test_missing_positive_column(self, feature_df):
        class Unlabelled(ConstantClassifier):
            def classify(self, X):
                return pd.DataFrame({"0": [0.5] * len(X), "1": [0.5] * len(X)})

        with pytest.raises(ClassifierOutputError):
            prediction_multiple(Unlabelled(0.5), feature_df)

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_out_of_range(self, feature_df, threshold):
        with pytest.raises(ValueError):
            prediction_multiple(ConstantClassifier(0.7), feature_df, positive_threshold=threshold)

    def test_alias(self):
        assert predict_batch is prediction_multiple


class TestPredictionSingle:
    """Tests for single-site prediction."""

    def test_returns_prob_and_status(self, single_site):
        result = prediction_single(ConstantClassifier(0.7), **single_site)
        assert result == {"predicted_m6A_prob": 0.7, "predicted_m6A_status": "Positive"}

    def test_threshold_passed_through(self, single_site):
        result = prediction_single(ConstantClassifier(0.7), **single_site, positive_threshold=0.7)
        assert result["predicted_m6A_status"] == "Negative"

    def test_matches_batch(self, single_site, fitted_pipeline):
        """Test that single and one-row batch predictions agree."""
        single = prediction_single(fitted_pipeline, **single_site, positive_threshold=0.4)
        batch = prediction_multiple(
            fitted_pipeline, pd.DataFrame([single_site]), positive_threshold=0.4
        )
        assert single["predicted_m6A_prob"] == pytest.approx(batch["predicted_m6A_prob"].iloc[0])
        assert single["predicted_m6A_status"] == batch["predicted_m6A_status"].iloc[0]

    def test_unknown_region_rejected(self, single_site):
        single_site["RNA_region"] = "exon"
        with pytest.raises(UnrecognizedCategoryError):
            prediction_single(ConstantClassifier(0.7), **single_site)


class TestM6APredictor:
    """Tests for the reusable predictor object."""

    def test_default_threshold_and_override(self, feature_df):
        predictor = M6APredictor(ConstantClassifier(0.7), positive_threshold=0.8)
        assert (predictor.predict(feature_df)["predicted_m6A_status"] == "Negative").all()
        result = predictor.predict(feature_df, positive_threshold=0.6)
        assert (result["predicted_m6A_status"] == "Positive").all()

    def test_custom_labels(self, feature_df):
        predictor = M6APredictor(
            ConstantClassifier(0.7), positive_label="Positive", negative_label="Unmodified",
            positive_threshold=0.9
        )
        result = predictor.predict(feature_df)
        assert (result["predicted_m6A_status"] == "Unmodified").all()

    def test_fitted_backend_end_to_end(self, feature_df, fitted_pipeline):
        result = M6APredictor(fitted_pipeline).predict(feature_df)
        probs = result["predicted_m6A_prob"]
        assert ((probs >= 0) & (probs <= 1)).all()
        assert set(result["predicted_m6A_status"]) <= {"Positive", "Negative"}

    def test_rejects_non_model(self):
        with pytest.raises(TypeError):
            M6APredictor(object())
