"""
Unit tests for QualityEvaluator.
"""
from quatreg.modules.registration.quality import QualityEvaluator, QualityMetrics


class TestQualityEvaluator:
    """Tests for QualityEvaluator class"""

    def test_excellent(self):
        metrics = QualityEvaluator().evaluate(1e-9)
        assert isinstance(metrics, QualityMetrics)
        assert metrics.quality == "excellent"
        assert metrics.mean_error == 1e-9

    def test_good(self):
        assert QualityEvaluator().evaluate(0.01).quality == "good"

    def test_poor(self):
        assert QualityEvaluator().evaluate(0.5).quality == "poor"

    def test_custom_thresholds(self):
        evaluator = QualityEvaluator(excellent_error=0.1, max_error=1.0)
        assert evaluator.evaluate(0.05).quality == "excellent"
        assert evaluator.evaluate(0.5).quality == "good"
        assert evaluator.evaluate(2.0).quality == "poor"

    def test_boundaries_inclusive(self):
        evaluator = QualityEvaluator(excellent_error=0.1, max_error=1.0)
        assert evaluator.evaluate(0.1).quality == "excellent"
        assert evaluator.evaluate(1.0).quality == "good"

    def test_is_acceptable(self):
        evaluator = QualityEvaluator()
        assert evaluator.is_acceptable(0.0)
        assert evaluator.is_acceptable(0.05)
        assert not evaluator.is_acceptable(0.06)
