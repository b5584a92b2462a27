"""Tests for the confidence scorer."""

import pytest

from ingest.validation.confidence_scorer import score_confidence


def test_clean_record_scores_one():
    assert score_confidence(10, 0) == 1.0


def test_valid_field_ratio():
    assert score_confidence(10, 2) == pytest.approx(0.8)


def test_more_violations_than_fields_clamps_to_zero():
    assert score_confidence(2, 5) == 0.0


def test_format_certainty_scales_score():
    assert score_confidence(10, 0, format_certainty=0.7) == pytest.approx(0.7)
    assert score_confidence(4, 1, format_certainty=0.95) == pytest.approx(0.7125)


def test_certainty_out_of_range_is_clamped():
    assert score_confidence(5, 0, format_certainty=1.5) == 1.0
    assert score_confidence(5, 0, format_certainty=-1) == 0.0


@pytest.mark.parametrize("total", [0, -3])
def test_non_positive_field_count_rejected(total):
    with pytest.raises(ValueError):
        score_confidence(total, 0)
