"""Unit tests for safety ratings and sampling strategies."""

import pytest

from openai_engines import Safety, Sampling


class TestSafety:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            (0, Safety.SAFE),
            (1, Safety.SENSITIVE),
            (2, Safety.UNSAFE),
            (3, Safety.UNCERTAIN),
            ("2", Safety.UNSAFE),
        ],
    )
    def test_from_code(self, code, expected):
        assert Safety.from_code(code) is expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "code", [-1, 4, 9, "x", "", "-1", " 1", -0.5, 0.9, 2.7, 1.0, True, False, None]
    )
    def test_out_of_range_codes_are_rejected(self, code):
        with pytest.raises(ValueError):
            Safety.from_code(code)

    @pytest.mark.unit
    def test_safe_is_the_unique_minimum(self):
        others = [Safety.SENSITIVE, Safety.UNSAFE, Safety.UNCERTAIN]
        assert all(Safety.SAFE < other for other in others)
        assert min(Safety) is Safety.SAFE
        assert sorted(reversed(list(Safety))) == list(Safety)
        assert not any(rating < rating for rating in Safety)

    @pytest.mark.unit
    def test_description(self):
        assert str(Safety.SAFE) == "Safe"
        assert str(Safety.UNCERTAIN) == "Uncertain"


class TestSampling:
    @pytest.mark.unit
    def test_temperature_parameters(self):
        assert Sampling.temperature(0.9).to_parameters() == {"temperature": 0.9}

    @pytest.mark.unit
    def test_nucleus_parameters(self):
        assert Sampling.nucleus(0.1).to_parameters() == {"top_p": 0.1}

    @pytest.mark.unit
    def test_unknown_kind_is_rejected(self):
        with pytest.raises(ValueError):
            Sampling("beam", 1.0)  # type: ignore[arg-type]

    @pytest.mark.unit
    def test_sampling_is_a_value(self):
        assert Sampling.temperature(0.5) == Sampling("temperature", 0.5)
        with pytest.raises(AttributeError):
            Sampling.nucleus(0.2).amount = 0.3  # type: ignore[misc]
