"""
LabOne request/response codec.

Maps the query parameters of the LabOne endpoint onto a GenerationRequest
and an AnalysisResult onto its JSON response body:

    request:  m, a, c, x0, n
    response: seq, period, cesaroRatio, periodRandom, cesaroRandomRatio

An undefined π estimate is sent as null. Transport is left to the caller;
handle_lab_one() returns a (status, body) pair any HTTP layer can send.
"""

from typing import Any, Dict, Mapping, Optional, Tuple

from ..analysis.orchestrator import AnalysisResult, try_analyze
from ..core_random.models import GenerationRequest
from ..core_random.reference import RandomSource
from ..errors import InvalidRequest
from ..integration.event_logger import EventLogger


# ============================================================================
# Constants
# ============================================================================

REQUEST_FIELDS = ('m', 'a', 'c', 'x0', 'n')

STATUS_OK = 200
STATUS_BAD_REQUEST = 400


def _parse_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{name} must be an integer, got {value}")
        return int(value)
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def parse_params(params: Mapping[str, Any]) -> GenerationRequest:
    """
    Build a GenerationRequest from LabOne query parameters.

    Values may arrive as ints or as strings (query strings). Invariants
    beyond "is an integer" are checked later by the orchestrator.

    Args:
        params: Mapping with keys m, a, c, x0, n

    Returns:
        GenerationRequest

    Raises:
        InvalidRequest: If a field is missing or not an integer
    """
    violations = []
    values: Dict[str, int] = {}

    for name in REQUEST_FIELDS:
        if name not in params or params[name] in (None, ""):
            violations.append(f"missing parameter {name}")
            continue
        try:
            values[name] = _parse_int(name, params[name])
        except ValueError as exc:
            violations.append(str(exc))

    if violations:
        raise InvalidRequest("Invalid request: " + "; ".join(violations), violations)

    return GenerationRequest(
        modulus=values['m'],
        multiplier=values['a'],
        increment=values['c'],
        seed=values['x0'],
        length=values['n'],
    )


def to_response(result: AnalysisResult) -> Dict[str, Any]:
    """Serialize an AnalysisResult to the LabOne response body."""
    return {
        'seq': list(result.sequence),
        'period': result.period.period,
        'cesaroRatio': result.cesaro.pi_estimate,
        'periodRandom': result.reference_period.period,
        'cesaroRandomRatio': result.reference_cesaro.pi_estimate,
    }


def handle_lab_one(
    params: Mapping[str, Any],
    source: Optional[RandomSource] = None,
    event_logger: Optional[EventLogger] = None
) -> Tuple[int, Dict[str, Any]]:
    """
    Serve one LabOne request.

    Args:
        params: Query parameters
        source: Random source for the reference sequence
        event_logger: Optional journal

    Returns:
        (status, body). On failure body is {'error': ..., 'type': ...} and
        carries no sequence or statistics.
    """
    try:
        request = parse_params(params)
    except InvalidRequest as exc:
        if event_logger is not None:
            event_logger.log_rejection(dict(params), str(exc))
        return STATUS_BAD_REQUEST, {'error': str(exc), 'type': type(exc).__name__}

    outcome = try_analyze(request, source, event_logger)
    if not outcome.ok:
        return STATUS_BAD_REQUEST, {'error': outcome.error, 'type': outcome.error_type}

    return STATUS_OK, to_response(outcome.result)
