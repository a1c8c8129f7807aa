"""
Tests for the LabOne request/response codec.
"""

import json
import math

import pytest
from lcglab.api.lab_one import (
    handle_lab_one, parse_params, to_response, STATUS_OK, STATUS_BAD_REQUEST
)
from lcglab.analysis.orchestrator import analyze
from lcglab.core_random.models import GenerationRequest
from lcglab.core_random.reference import SeededRandomSource
from lcglab.errors import InvalidRequest


class TestParseParams:
    """Query parameter parsing."""

    def test_integer_values(self):
        request = parse_params({'m': 97, 'a': 23, 'c': 7, 'x0': 5, 'n': 20})
        assert request == GenerationRequest(97, 23, 7, 5, 20)

    def test_string_values(self):
        request = parse_params({'m': '97', 'a': '23', 'c': '7', 'x0': ' 5 ', 'n': '20'})
        assert request == GenerationRequest(97, 23, 7, 5, 20)

    def test_integral_float_accepted(self):
        request = parse_params({'m': 97.0, 'a': 23, 'c': 7, 'x0': 5, 'n': 20})
        assert request.modulus == 97

    def test_fractional_float_rejected(self):
        with pytest.raises(InvalidRequest):
            parse_params({'m': 97.5, 'a': 23, 'c': 7, 'x0': 5, 'n': 20})

    def test_missing_field_rejected(self):
        with pytest.raises(InvalidRequest) as exc_info:
            parse_params({'m': 97, 'a': 23, 'c': 7, 'x0': 5})
        assert exc_info.value.violations == ["missing parameter n"]

    def test_non_numeric_rejected(self):
        with pytest.raises(InvalidRequest):
            parse_params({'m': 'abc', 'a': 23, 'c': 7, 'x0': 5, 'n': 20})

    def test_bool_rejected(self):
        with pytest.raises(InvalidRequest):
            parse_params({'m': True, 'a': 23, 'c': 7, 'x0': 5, 'n': 20})


class TestResponse:
    """Response body shape."""

    def test_response_fields(self):
        result = analyze(GenerationRequest(97, 23, 7, 5, 20), SeededRandomSource(3))
        body = to_response(result)
        assert set(body) == {'seq', 'period', 'cesaroRatio', 'periodRandom', 'cesaroRandomRatio'}
        assert body['seq'] == list(result.sequence)
        assert body['period'] == result.period.period
        assert body['periodRandom'] == result.reference_period.period

    def test_undefined_estimate_is_null(self):
        result = analyze(GenerationRequest(1, 0, 0, 0, 4))
        body = to_response(result)
        assert body['cesaroRatio'] is None
        assert '"cesaroRatio": null' in json.dumps(body)

    def test_full_period_response(self):
        result = analyze(GenerationRequest(4, 1, 1, 0, 10))
        body = to_response(result)
        assert body['seq'] == [0, 1, 2, 3, 0, 1, 2, 3, 0, 1]
        assert body['period'] == 4


class TestHandleLabOne:
    """Request handling end to end."""

    def test_ok(self):
        status, body = handle_lab_one({'m': '97', 'a': '23', 'c': '7', 'x0': '5', 'n': '20'})
        assert status == STATUS_OK
        assert body['seq'][:2] == [5, 25]
        assert len(body['seq']) == 20

    def test_partial_coprime_estimate(self):
        status, body = handle_lab_one({'m': 4, 'a': 1, 'c': 1, 'x0': 1, 'n': 4})
        # 1, 2, 3, 0 -> (1,2) (2,3) coprime, (3,0) not
        assert status == STATUS_OK
        assert body['cesaroRatio'] == pytest.approx(math.sqrt(6 / (2 / 3)))

    def test_zero_modulus(self):
        status, body = handle_lab_one({'m': 0, 'a': 1, 'c': 1, 'x0': 0, 'n': 5})
        assert status == STATUS_BAD_REQUEST
        assert body['type'] == 'InvalidRequest'
        assert 'seq' not in body

    def test_unparseable(self):
        status, body = handle_lab_one({'m': 'x'})
        assert status == STATUS_BAD_REQUEST
        assert 'error' in body
        assert 'seq' not in body
