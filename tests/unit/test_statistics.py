"""Unit tests for the statistics aggregator."""

import pytest

from herald.contexts.learning import Feedback, StatisticsAggregator


@pytest.mark.unit
def test_empty_store_stats(repository):
    """Test that an empty store reports zeros rather than dividing by zero."""
    stats = StatisticsAggregator(repository).stats()

    assert stats.to_dict() == {
        "totalGenerated": 0,
        "withFeedback": 0,
        "averageRating": 0,
        "successRate": 0,
    }


@pytest.mark.unit
def test_stats_without_any_feedback(repository, letter_factory):
    """Test that average rating is 0 when nothing has been rated."""
    letter_factory(repository)
    letter_factory(repository)

    stats = StatisticsAggregator(repository).stats()

    assert stats.total_generated == 2
    assert stats.with_feedback == 0
    assert stats.average_rating == 0.0
    assert stats.success_rate == 0.0


@pytest.mark.unit
def test_stats_mixed(repository, letter_factory):
    """Test counts, mean rating over rated letters, and used fraction over all letters."""
    letter_factory(repository, Feedback(rating=5, was_used=True, got_interview=True))
    letter_factory(repository, Feedback(rating=2, was_used=False))
    letter_factory(repository, Feedback(rating=4, was_used=True))
    letter_factory(repository)

    stats = StatisticsAggregator(repository).stats()

    assert stats.total_generated == 4
    assert stats.with_feedback == 3
    assert stats.average_rating == pytest.approx(11 / 3)
    assert stats.success_rate == pytest.approx(0.5)
