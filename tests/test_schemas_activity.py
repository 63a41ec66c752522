"""
Unit tests for app.schemas.activity module.
"""
import pytest
from pydantic import ValidationError
from app.schemas.activity import ALLOWED_MINUTES, Activity, Category, Mood, check_minutes


def _payload(**overrides):
    data = {
        "id": "mind-test",
        "title": "Test",
        "prompt": "Breathe.",
        "category": "mind",
        "durations": [10, 5],
        "moods": ["calm", "happy"],
    }
    data.update(overrides)
    return data


class TestActivity:
    """Test Activity validation and normalisation."""

    def test_valid_activity_coerces_enums(self):
        """Test string inputs become enum members."""
        a = Activity(**_payload())

        assert a.category is Category.MIND
        assert a.moods == (Mood.CALM, Mood.HAPPY)

    def test_durations_sorted_and_deduplicated(self):
        """Test durations are normalised to a sorted unique tuple."""
        a = Activity(**_payload(durations=[30, 5, 30]))

        assert a.durations == (5, 30)

    def test_moods_deduplicated_keeping_order(self):
        """Test repeated moods collapse without reordering."""
        a = Activity(**_payload(moods=["sad", "calm", "sad"]))

        assert a.moods == (Mood.SAD, Mood.CALM)

    def test_empty_durations_rejected(self):
        with pytest.raises(ValidationError):
            Activity(**_payload(durations=[]))

    def test_duration_outside_allowed_set_rejected(self):
        with pytest.raises(ValidationError, match="minutes must be one of"):
            Activity(**_payload(durations=[5, 15]))

    def test_empty_moods_rejected(self):
        with pytest.raises(ValidationError):
            Activity(**_payload(moods=[]))

    def test_surprise_mood_rejected(self):
        """Test 'surprise' cannot be stored on an activity."""
        with pytest.raises(ValidationError, match="wildcard"):
            Activity(**_payload(moods=["happy", "surprise"]))

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            Activity(**_payload(category="sleep"))

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            Activity(**_payload(title="  "))

    def test_activity_is_frozen(self):
        """Test catalog entries cannot be mutated."""
        a = Activity(**_payload())

        with pytest.raises(ValidationError):
            a.title = "Changed"

    def test_supports_and_fits_within(self):
        a = Activity(**_payload(durations=[10, 30]))

        assert a.supports(10)
        assert not a.supports(5)
        assert a.fits_within(60)
        assert a.fits_within(10)
        assert not a.fits_within(5)

    def test_serialises_plain_values(self):
        """Test JSON output uses enum values and lists."""
        data = Activity(**_payload()).model_dump(mode="json")

        assert data["category"] == "mind"
        assert data["durations"] == [5, 10]
        assert data["moods"] == ["calm", "happy"]


class TestCheckMinutes:
    """Test check_minutes function."""

    @pytest.mark.parametrize("minutes", ALLOWED_MINUTES)
    def test_allowed_values_pass(self, minutes):
        assert check_minutes(minutes) == minutes

    @pytest.mark.parametrize("minutes", [0, 1, 15, 45, 120, -5])
    def test_other_values_raise(self, minutes):
        with pytest.raises(ValueError):
            check_minutes(minutes)
