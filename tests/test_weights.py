"""Tests für Validierung und Umverteilung von Gewichtungsprofilen."""

import pytest

from config.defaults import preset_profiles
from engine.errors import InvalidWeightSum, WeightOutOfRange
from engine.weights import WeightProfileValidator, rebalance
from models.weight_profile import WeightField, WeightProfile


def _profile(equality: int, continuity: int, loyalty: int, name: str = "Test") -> WeightProfile:
    return WeightProfile(name=name, equality=equality, continuity=continuity, loyalty=loyalty)


# ─── VALIDIERUNG ──────────────────────────────────────────────────────────────

class TestWeightProfileValidator:
    def test_valid_profile(self):
        """33/33/34 ist gültig und liefert keine Probleme."""
        result = WeightProfileValidator().validate(_profile(33, 33, 34))
        assert result.is_valid
        assert result.issues == []

    def test_invalid_sum_reported(self):
        """Summe ≠ 100 wird als invalid_weight_sum gemeldet, nicht korrigiert."""
        result = WeightProfileValidator().validate(_profile(33, 33, 33))
        assert not result.is_valid
        assert [i.code for i in result.issues] == ["invalid_weight_sum"]
        assert result.issues[0].value == 99

    def test_out_of_range_reported(self):
        """Werte außerhalb [0, 100] werden pro Feld gemeldet, auch wenn die Summe stimmt."""
        result = WeightProfileValidator().validate(_profile(120, -20, 0))
        codes = [(i.code, i.field) for i in result.issues]
        assert ("weight_out_of_range", WeightField.EQUALITY) in codes
        assert ("weight_out_of_range", WeightField.CONTINUITY) in codes
        assert all(i.code != "invalid_weight_sum" for i in result.issues)

    def test_validate_never_raises(self):
        """validate() sammelt nur, wirft nie."""
        result = WeightProfileValidator().validate(_profile(200, 200, 200))
        assert len(result.issues) == 4

    def test_ensure_valid_raises_sum(self):
        with pytest.raises(InvalidWeightSum) as exc:
            WeightProfileValidator().ensure_valid(_profile(50, 50, 10))
        assert exc.value.total == 110

    def test_range_takes_precedence_over_sum(self):
        """Bei beiden Problemen wird WeightOutOfRange geworfen."""
        with pytest.raises(WeightOutOfRange) as exc:
            WeightProfileValidator().ensure_valid(_profile(10, 10, 101))
        assert exc.value.field == "loyalty"
        assert exc.value.value == 101

    def test_ensure_valid_returns_profile(self):
        p = _profile(60, 40, 0)
        assert WeightProfileValidator().ensure_valid(p) is p

    def test_all_presets_valid(self):
        """Alle eingebauten Profile erfüllen die Invariante."""
        validator = WeightProfileValidator()
        for p in preset_profiles():
            assert validator.validate(p).is_valid, p.name


# ─── UMVERTEILUNG ─────────────────────────────────────────────────────────────

class TestRebalance:
    def test_balanced_equality_to_50(self):
        """33/33/34, equality → 50 ergibt 50/25/25."""
        result = rebalance(_profile(33, 33, 34, "Balanced"), WeightField.EQUALITY, 50)
        assert result.as_tuple() == (50, 25, 25)
        assert result.name == "Balanced"

    def test_accepts_field_name_string(self):
        result = rebalance(_profile(33, 33, 34), "equality", 50)
        assert result.as_tuple() == (50, 25, 25)

    def test_rounding_remainder_goes_to_first_other_field(self):
        """0/50/50, equality → 1: 49.5 + 49.5 rundet auf 101, continuity gibt 1 ab."""
        result = rebalance(_profile(0, 50, 50), WeightField.EQUALITY, 1)
        assert result.as_tuple() == (1, 49, 50)

    def test_remainder_to_equality_when_continuity_changed(self):
        """Wird continuity geändert, ist equality das erste unveränderte Feld."""
        result = rebalance(_profile(50, 0, 50), WeightField.CONTINUITY, 1)
        assert result.as_tuple() == (49, 1, 50)

    def test_proportional_split(self):
        """Der Rest wird im Verhältnis der bisherigen Werte verteilt."""
        result = rebalance(_profile(20, 20, 60), WeightField.EQUALITY, 60)
        assert result.as_tuple() == (60, 10, 30)

    def test_both_others_zero_split_evenly(self):
        result = rebalance(_profile(100, 0, 0), WeightField.EQUALITY, 40)
        assert result.as_tuple() == (40, 30, 30)

    def test_both_others_zero_odd_remainder(self):
        """100/0/0, equality → 99: 0.5 + 0.5 runden auf 2, continuity gibt 1 ab."""
        result = rebalance(_profile(100, 0, 0), WeightField.EQUALITY, 99)
        assert result.as_tuple() == (99, 0, 1)

    def test_set_to_100(self):
        result = rebalance(_profile(33, 33, 34), WeightField.LOYALTY, 100)
        assert result.as_tuple() == (0, 0, 100)

    def test_set_to_0(self):
        result = rebalance(_profile(60, 40, 0), WeightField.EQUALITY, 0)
        assert result.as_tuple() == (0, 100, 0)

    def test_original_profile_unchanged(self):
        original = _profile(33, 33, 34)
        rebalance(original, WeightField.EQUALITY, 80)
        assert original.as_tuple() == (33, 33, 34)

    def test_result_always_valid(self):
        """Für jedes Feld und jeden Wert 0..100 entsteht ein gültiges Profil."""
        validator = WeightProfileValidator()
        for profile in preset_profiles():
            for field in WeightField:
                for value in range(0, 101):
                    result = rebalance(profile, field, value)
                    assert validator.validate(result).is_valid, (profile.name, field, value)
                    assert result.weight(field) == value

    @pytest.mark.parametrize("value", [-1, 101])
    def test_new_value_out_of_range(self, value):
        with pytest.raises(WeightOutOfRange):
            rebalance(_profile(33, 33, 34), WeightField.CONTINUITY, value)

    def test_unknown_field(self):
        with pytest.raises(ValueError, match="Unbekanntes Gewicht"):
            rebalance(_profile(33, 33, 34), "fairness", 10)
