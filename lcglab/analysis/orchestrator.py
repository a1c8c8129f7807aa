"""
Sequence Analysis Orchestrator

Validates a GenerationRequest, then runs the full pipeline:

    LCG sequence       -> period detection, Cesàro π estimate
    reference sequence -> period detection, Cesàro π estimate

Validation is all-or-nothing and happens before any generator runs. A
failure at any stage aborts the request; no partial result is returned.

Two calling styles:
- analyze(): returns AnalysisResult, raises InvalidRequest / InvalidModulus
- try_analyze(): never raises lcglab errors, returns an AnalysisOutcome
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..core_random.cesaro import estimate_pi
from ..core_random.lcg import generate
from ..core_random.models import CesaroReport, GenerationRequest, PeriodReport, Sequence
from ..core_random.modular import has_full_period
from ..core_random.period import detect_period
from ..core_random.reference import RandomSource, generate_reference
from ..errors import InvalidRequest, LabError
from ..integration.event_logger import EventLogger


# ============================================================================
# Constants
# ============================================================================

MIN_LENGTH = 2
DEFAULT_MAX_WORKERS = 4

# Hull-Dobell needs the prime factors of m; beyond this bound trial
# division is too slow and the flag is left as None.
FULL_PERIOD_CHECK_LIMIT = 2**40


# ============================================================================
# Result Types
# ============================================================================

@dataclass(frozen=True)
class AnalysisResult:
    """Everything one analysis run produced."""
    request: GenerationRequest
    sequence: Sequence
    period: PeriodReport
    cesaro: CesaroReport
    reference_sequence: Sequence
    reference_period: PeriodReport
    reference_cesaro: CesaroReport
    full_period_expected: Optional[bool] = None


@dataclass(frozen=True)
class AnalysisOutcome:
    """
    Tagged result of an analysis: success with data or failure with reason.

    Exactly one of result / error is set; ok tells which.
    """
    ok: bool
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def success(cls, result: AnalysisResult) -> 'AnalysisOutcome':
        return cls(ok=True, result=result)

    @classmethod
    def failure(cls, exc: LabError) -> 'AnalysisOutcome':
        return cls(ok=False, error=str(exc), error_type=type(exc).__name__)


# ============================================================================
# Validation
# ============================================================================

def validate_request(request: GenerationRequest) -> None:
    """
    Check every request invariant, collecting all violations.

    Every field must be a plain int (bool is refused). The seed is not
    range-checked: any integer is reduced modulo m.

    Raises:
        InvalidRequest: If any invariant is violated
    """
    violations = []

    fields = [
        ("modulus m", request.modulus),
        ("multiplier a", request.multiplier),
        ("increment c", request.increment),
        ("seed x0", request.seed),
        ("length n", request.length),
    ]
    mistyped = set()
    for name, value in fields:
        if isinstance(value, bool) or not isinstance(value, int):
            violations.append(f"{name} must be an integer, got {value!r}")
            mistyped.add(name)

    if "modulus m" not in mistyped and request.modulus < 1:
        violations.append(f"modulus m must be >= 1, got {request.modulus}")
    if "multiplier a" not in mistyped and request.multiplier < 0:
        violations.append(f"multiplier a must be >= 0, got {request.multiplier}")
    if "increment c" not in mistyped and request.increment < 0:
        violations.append(f"increment c must be >= 0, got {request.increment}")
    if "length n" not in mistyped and request.length < MIN_LENGTH:
        violations.append(f"length n must be >= {MIN_LENGTH}, got {request.length}")

    if violations:
        raise InvalidRequest("Invalid request: " + "; ".join(violations), violations)


def _full_period_expected(request: GenerationRequest) -> Optional[bool]:
    if request.modulus > FULL_PERIOD_CHECK_LIMIT:
        return None
    return has_full_period(request.modulus, request.multiplier, request.increment)


# ============================================================================
# Pipeline
# ============================================================================

def analyze(
    request: GenerationRequest,
    source: Optional[RandomSource] = None,
    event_logger: Optional[EventLogger] = None
) -> AnalysisResult:
    """
    Run the full analysis for one request.

    Args:
        request: Generation parameters
        source: Random source for the reference sequence (OS entropy if None)
        event_logger: Optional journal; receives a completed or rejected event

    Returns:
        The assembled AnalysisResult

    Raises:
        InvalidRequest: If the request violates an invariant
        InvalidModulus: If a zero modulus reaches the arithmetic core
    """
    try:
        validate_request(request)

        sequence = generate(request)
        reference_sequence = generate_reference(request.modulus, request.length, source)

        result = AnalysisResult(
            request=request,
            sequence=sequence,
            period=detect_period(sequence),
            cesaro=estimate_pi(sequence),
            reference_sequence=reference_sequence,
            reference_period=detect_period(reference_sequence),
            reference_cesaro=estimate_pi(reference_sequence),
            full_period_expected=_full_period_expected(request),
        )
    except LabError as exc:
        if event_logger is not None:
            event_logger.log_rejection(request.to_params(), str(exc))
        raise

    if event_logger is not None:
        event_logger.log_analysis(
            request,
            period=result.period.period,
            cycle_confirmed=result.period.cycle_confirmed,
            pi_estimate=result.cesaro.pi_estimate,
            reference_pi_estimate=result.reference_cesaro.pi_estimate,
        )

    return result


def try_analyze(
    request: GenerationRequest,
    source: Optional[RandomSource] = None,
    event_logger: Optional[EventLogger] = None
) -> AnalysisOutcome:
    """Like analyze(), but reports lcglab errors as a failed outcome."""
    try:
        return AnalysisOutcome.success(analyze(request, source, event_logger))
    except LabError as exc:
        return AnalysisOutcome.failure(exc)


def analyze_many(
    requests: Iterable[GenerationRequest],
    max_workers: int = DEFAULT_MAX_WORKERS
) -> List[AnalysisOutcome]:
    """
    Analyse independent requests concurrently.

    Each request draws its reference sequence from OS entropy, so the
    workers share no mutable state.

    Returns:
        Outcomes in the same order as requests
    """
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(try_analyze, requests))
