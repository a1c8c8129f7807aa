"""
Invalid input tests for LCG Lab.

Tests specifically for rejection scenarios:
- Invalid requests never produce a sequence
- Arithmetic guard against zero modulus
- Degenerate but valid inputs
"""

import pytest

from lcglab.analysis.orchestrator import analyze, try_analyze
from lcglab.api.lab_one import handle_lab_one
from lcglab.core_random.lcg import generate
from lcglab.core_random.models import GenerationRequest
from lcglab.core_random.modular import step, has_full_period
from lcglab.errors import InvalidModulus, InvalidRequest, LabError


class TestInvalidRequests:
    """Requests that must be rejected before any computation."""

    @pytest.mark.parametrize("params", [
        {'m': 0, 'a': 1, 'c': 1, 'x0': 0, 'n': 5},
        {'m': -3, 'a': 1, 'c': 1, 'x0': 0, 'n': 5},
        {'m': 10, 'a': -1, 'c': 1, 'x0': 0, 'n': 5},
        {'m': 10, 'a': 1, 'c': -1, 'x0': 0, 'n': 5},
        {'m': 10, 'a': 1, 'c': 1, 'x0': 0, 'n': 1},
        {'m': 10, 'a': 1, 'c': 1, 'x0': 0, 'n': -4},
    ])
    def test_rejected_without_sequence(self, params):
        status, body = handle_lab_one(params)
        assert status == 400
        assert set(body) == {'error', 'type'}

    def test_zero_modulus_outcome(self):
        outcome = try_analyze(GenerationRequest(0, 1, 1, 0, 5))
        assert not outcome.ok
        assert outcome.result is None

    def test_generator_not_invoked_on_invalid(self, monkeypatch):
        """Validation happens before generation."""
        calls = []
        import lcglab.analysis.orchestrator as orchestrator
        monkeypatch.setattr(orchestrator, "generate", lambda request: calls.append(request))
        with pytest.raises(InvalidRequest):
            analyze(GenerationRequest(10, 1, 1, 0, 1))
        assert calls == []

    def test_errors_share_base(self):
        assert issubclass(InvalidRequest, LabError)
        assert issubclass(InvalidModulus, LabError)


class TestModulusGuard:
    """The arithmetic core refuses a zero modulus on its own."""

    def test_generate_bypassing_validation(self):
        with pytest.raises(InvalidModulus):
            generate(GenerationRequest(0, 1, 1, 0, 5))

    def test_step(self):
        with pytest.raises(InvalidModulus):
            step(0, 0, 0, 0)

    def test_full_period_check(self):
        with pytest.raises(InvalidModulus):
            has_full_period(0, 1, 1)


class TestDegenerateInputs:
    """Valid but uninformative inputs are data, not errors."""

    def test_zero_multiplier_and_increment(self):
        result = analyze(GenerationRequest(10, 0, 0, 7, 6))
        assert result.sequence == (7, 0, 0, 0, 0, 0)
        assert result.period.period == 1
        assert result.period.cycle_start == 1

    def test_all_even_sequence_undefined(self):
        # 2, 4, 8, 16, ... mod 1024 never yields a coprime pair
        result = analyze(GenerationRequest(1024, 2, 0, 2, 12))
        assert result.cesaro.pi_estimate is None
        assert result.cesaro.coprime_pair_count == 0

    def test_huge_seed_reduced(self):
        result = analyze(GenerationRequest(97, 23, 7, 97 * 10**30 + 5, 20))
        assert result.sequence[:2] == (5, 25)
