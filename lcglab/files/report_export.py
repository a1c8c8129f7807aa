"""
Sequence Report Export Module

Writes analysis results to disk in two forms:
- Plain text "generated sequence" file (parameters, blank line, sequence)
- JSON report with an integrity digest, verified again on load

Integrity:
- Without a password: SHA-256 over the canonical JSON payload
- With a password: HMAC-SHA256, key derived with PBKDF2 and a random salt

Report Format:
    {
      "format": "lcglab-report",
      "version": 1,
      "payload": {request, response, reference_seq, statistics},
      "integrity": {"algorithm", "salt", "digest"}
    }

Pagination helpers window an already generated sequence for display
without regenerating it.
"""

import json
import math
import secrets
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes, hmac
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..analysis.orchestrator import AnalysisResult
from ..api.lab_one import to_response
from ..core_random.models import CesaroReport, GenerationRequest, PeriodReport, Sequence
from ..errors import IntegrityError
from ..integration.event_logger import EventLogger


# ============================================================================
# Constants
# ============================================================================

REPORT_FORMAT = "lcglab-report"
REPORT_VERSION = 1
DEFAULT_SEQUENCE_FILENAME = "generated-sequence.txt"

SALT_SIZE = 16
KEY_SIZE = 32
PBKDF2_ITERATIONS = 100_000

ALGORITHM_SHA256 = "sha256"
ALGORITHM_HMAC = "hmac-sha256"

DEFAULT_PAGE_SIZE = 50

PathLike = Union[str, Path]


# ============================================================================
# Plain Text Sequence File
# ============================================================================

def format_sequence_text(request: GenerationRequest, sequence: Sequence) -> str:
    """
    Render the parameters and sequence as the lab's text download.

    Example:
        m: 4
        a: 1
        c: 1
        x0: 0
        n: 4

        Sequence:
        0, 1, 2, 3
    """
    metrics = "\n".join(f"{name}: {value}" for name, value in request.to_params().items())
    values = ", ".join(str(x) for x in sequence)
    return f"{metrics}\n\nSequence:\n{values}"


def save_sequence_text(
    path: PathLike,
    request: GenerationRequest,
    sequence: Sequence
) -> Path:
    """
    Write the text form of a sequence.

    If path is a directory, DEFAULT_SEQUENCE_FILENAME is created inside it.

    Returns:
        Path of the written file
    """
    target = Path(path)
    if target.is_dir():
        target = target / DEFAULT_SEQUENCE_FILENAME
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(format_sequence_text(request, sequence), encoding="utf-8")
    return target


# ============================================================================
# Integrity
# ============================================================================

def derive_key_pbkdf2(password: str, salt: bytes,
                      iterations: int = PBKDF2_ITERATIONS) -> bytes:
    """
    Derive an HMAC key from a password using PBKDF2-SHA256.

    Args:
        password: Report password
        salt: Random salt
        iterations: Number of iterations

    Returns:
        32-byte derived key
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=salt,
        iterations=iterations,
        backend=default_backend()
    )
    return kdf.derive(password.encode('utf-8'))


def _canonical(payload: Dict[str, Any]) -> bytes:
    return json.dumps(payload, sort_keys=True, separators=(',', ':')).encode('utf-8')


def compute_digest(data: bytes) -> bytes:
    """SHA-256 of data."""
    digest = hashes.Hash(hashes.SHA256(), backend=default_backend())
    digest.update(data)
    return digest.finalize()


def compute_hmac(key: bytes, data: bytes) -> bytes:
    """HMAC-SHA256 of data."""
    h = hmac.HMAC(key, hashes.SHA256(), backend=default_backend())
    h.update(data)
    return h.finalize()


def verify_hmac(key: bytes, data: bytes, expected: bytes) -> bool:
    """Constant-time HMAC-SHA256 check."""
    h = hmac.HMAC(key, hashes.SHA256(), backend=default_backend())
    h.update(data)
    try:
        h.verify(expected)
    except InvalidSignature:
        return False
    return True


# ============================================================================
# JSON Report
# ============================================================================

def _period_dict(report: PeriodReport) -> Dict[str, Any]:
    return {
        'period': report.period,
        'cycle_confirmed': report.cycle_confirmed,
        'cycle_start': report.cycle_start,
        'first_repeat_index': report.first_repeat_index,
    }


def _cesaro_dict(report: CesaroReport) -> Dict[str, Any]:
    return {
        'pi_estimate': report.pi_estimate,
        'coprime_pairs': report.coprime_pair_count,
        'total_pairs': report.total_pair_count,
        'absolute_error': report.absolute_error,
    }


def build_report_payload(result: AnalysisResult) -> Dict[str, Any]:
    """Everything the report commits to, before the integrity block."""
    return {
        'request': result.request.to_params(),
        'response': to_response(result),
        'reference_seq': list(result.reference_sequence),
        'statistics': {
            'lcg': {
                'period': _period_dict(result.period),
                'cesaro': _cesaro_dict(result.cesaro),
                'full_period_expected': result.full_period_expected,
            },
            'reference': {
                'period': _period_dict(result.reference_period),
                'cesaro': _cesaro_dict(result.reference_cesaro),
            },
        },
    }


def export_report(
    path: PathLike,
    result: AnalysisResult,
    password: Optional[str] = None,
    event_logger: Optional[EventLogger] = None
) -> Path:
    """
    Write a JSON report with an integrity digest.

    Args:
        path: Output file
        result: Analysis to export
        password: If given, the digest is an HMAC keyed from this password
        event_logger: Optional journal

    Returns:
        Path of the written file
    """
    payload = build_report_payload(result)
    data = _canonical(payload)

    if password is None:
        integrity = {
            'algorithm': ALGORITHM_SHA256,
            'salt': None,
            'digest': compute_digest(data).hex(),
        }
    else:
        salt = secrets.token_bytes(SALT_SIZE)
        key = derive_key_pbkdf2(password, salt)
        integrity = {
            'algorithm': ALGORITHM_HMAC,
            'salt': salt.hex(),
            'digest': compute_hmac(key, data).hex(),
        }

    document = {
        'format': REPORT_FORMAT,
        'version': REPORT_VERSION,
        'payload': payload,
        'integrity': integrity,
    }

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(document, indent=2), encoding="utf-8")

    if event_logger is not None:
        event_logger.log_report_export(result.request, str(target), integrity['digest'])

    return target


def _check_integrity(document: Dict[str, Any], password: Optional[str]) -> None:
    if document.get('format') != REPORT_FORMAT or document.get('version') != REPORT_VERSION:
        raise IntegrityError("Invalid report format or version")

    integrity = document.get('integrity') or {}
    data = _canonical(document.get('payload', {}))
    algorithm = integrity.get('algorithm')

    try:
        expected = bytes.fromhex(integrity.get('digest') or '')
        salt = bytes.fromhex(integrity.get('salt') or '')
    except (TypeError, ValueError):
        raise IntegrityError("Malformed report digest") from None

    if algorithm == ALGORITHM_SHA256:
        if not secrets.compare_digest(compute_digest(data), expected):
            raise IntegrityError("Integrity check failed - report may be corrupted or tampered")
    elif algorithm == ALGORITHM_HMAC:
        if password is None:
            raise IntegrityError("Report is password protected")
        key = derive_key_pbkdf2(password, salt)
        if not verify_hmac(key, data, expected):
            raise IntegrityError("Integrity check failed - wrong password or tampered report")
    else:
        raise IntegrityError(f"Unknown integrity algorithm: {algorithm}")


def load_report(
    path: PathLike,
    password: Optional[str] = None,
    event_logger: Optional[EventLogger] = None
) -> Dict[str, Any]:
    """
    Read a report and verify it BEFORE returning anything.

    Args:
        path: Report file
        password: Needed for HMAC-protected reports
        event_logger: Optional journal

    Returns:
        The verified payload dict

    Raises:
        IntegrityError: On format, digest or password mismatch
    """
    target = Path(path)
    try:
        document = json.loads(target.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        if event_logger is not None:
            event_logger.log_report_check(str(target), valid=False)
        raise IntegrityError("Report is not valid JSON") from None

    try:
        _check_integrity(document, password)
    except IntegrityError:
        if event_logger is not None:
            event_logger.log_report_check(str(target), valid=False)
        raise

    if event_logger is not None:
        event_logger.log_report_check(str(target), valid=True)
    return document['payload']


# ============================================================================
# Pagination
# ============================================================================

def page_count(sequence: Sequence, per_page: int = DEFAULT_PAGE_SIZE) -> int:
    """Number of pages needed to show the whole sequence."""
    if per_page < 1:
        raise ValueError("per_page must be positive")
    return math.ceil(len(sequence) / per_page)


def page_of(sequence: Sequence, page: int, per_page: int = DEFAULT_PAGE_SIZE) -> List[int]:
    """
    One page of a sequence, pages numbered from 1.

    Pages past the end are empty.
    """
    if per_page < 1:
        raise ValueError("per_page must be positive")
    if page < 1:
        raise ValueError("page numbers start at 1")
    start = (page - 1) * per_page
    return list(sequence[start:start + per_page])
