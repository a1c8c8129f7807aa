"""
Event Logger Module

Records every analysis run and report export to a hash-chained journal.

Features:
- Analysis completed / rejected events
- Report export and verification events
- Request fingerprints (SHA-256 of the canonical parameters)
- Tamper-evident journal: each entry commits to the previous one

Author: LCG Lab Project
"""

import hashlib
import json
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ..core_random.models import GenerationRequest
from ..errors import IntegrityError


# ============================================================================
# Constants
# ============================================================================

EVENT_VERSION = "1.0"
GENESIS_PREV_HASH = "0" * 64


# ============================================================================
# Fingerprints
# ============================================================================

def get_request_fingerprint(request: GenerationRequest) -> str:
    """
    SHA-256 fingerprint of a request's parameters.

    Two runs with the same (m, a, c, x0, n) share a fingerprint, so their
    events can be correlated without storing the parameters themselves.

    Args:
        request: The generation request

    Returns:
        Hex-encoded SHA-256 of the canonical JSON parameters
    """
    canonical = json.dumps(request.to_params(), sort_keys=True, separators=(',', ':'))
    return hashlib.sha256(canonical.encode()).hexdigest()


# ============================================================================
# Event Types
# ============================================================================

class EventType(Enum):
    """Types of events that can be journaled."""

    # Analysis events
    ANALYSIS_COMPLETED = "analysis_completed"
    ANALYSIS_REJECTED = "analysis_rejected"

    # Report events
    REPORT_EXPORTED = "report_exported"
    REPORT_VERIFIED = "report_verified"
    REPORT_INTEGRITY_FAILED = "report_integrity_failed"

    # System events
    SYSTEM_START = "system_start"


# ============================================================================
# Event Structure
# ============================================================================

@dataclass
class AnalysisEvent:
    """A single journal entry."""
    event_type: EventType
    fingerprint: str
    timestamp: int
    details: Dict[str, Any] = field(default_factory=dict)
    prev_hash: str = GENESIS_PREV_HASH

    def to_record(self) -> str:
        """Compact JSON form; also the input of entry_hash."""
        return json.dumps({
            'version': EVENT_VERSION,
            'type': self.event_type.value,
            'request': self.fingerprint[:16],
            'time': self.timestamp,
            'iso_time': datetime.fromtimestamp(self.timestamp).isoformat(),
            'details': self.details,
            'prev': self.prev_hash,
        }, separators=(',', ':'), sort_keys=True)

    @property
    def entry_hash(self) -> str:
        return hashlib.sha256(self.to_record().encode()).hexdigest()

    @classmethod
    def from_record(cls, record: str) -> 'AnalysisEvent':
        data = json.loads(record)
        return cls(
            event_type=EventType(data['type']),
            fingerprint=data['request'],
            timestamp=data['time'],
            details=data.get('details', {}),
            prev_hash=data['prev'],
        )

    def __str__(self) -> str:
        dt = datetime.fromtimestamp(self.timestamp)
        return (
            f"[{dt.strftime('%Y-%m-%d %H:%M:%S')}] "
            f"{self.event_type.value} | "
            f"request:{self.fingerprint[:8]}..."
        )


# ============================================================================
# Event Logger
# ============================================================================

class EventLogger:
    """
    Hash-chained journal of analysis activity.

    Entries are append-only. Editing any recorded entry breaks the chain
    at that point, which verify_chain() reports.
    """

    def __init__(self, entries: Optional[List[AnalysisEvent]] = None, log_start: bool = True):
        """
        Initialize the event logger.

        Args:
            entries: Optional existing journal to continue
            log_start: If True, record a SYSTEM_START event
        """
        self._entries: List[AnalysisEvent] = list(entries or [])
        self._callbacks: List[Callable[[AnalysisEvent], None]] = []

        if log_start:
            self._log_system_event(EventType.SYSTEM_START)

    def _log_system_event(self, event_type: EventType) -> AnalysisEvent:
        return self._add_event(event_type, "system", {'node': 'lcglab'})

    def _add_event(
        self,
        event_type: EventType,
        fingerprint: str,
        details: Dict[str, Any]
    ) -> AnalysisEvent:
        prev_hash = self._entries[-1].entry_hash if self._entries else GENESIS_PREV_HASH
        event = AnalysisEvent(
            event_type=event_type,
            fingerprint=fingerprint,
            timestamp=int(time.time()),
            details=details,
            prev_hash=prev_hash,
        )
        self._entries.append(event)

        for callback in self._callbacks:
            callback(event)

        return event

    def add_callback(self, callback: Callable[[AnalysisEvent], None]) -> None:
        """Add a callback to be notified of new events."""
        self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[AnalysisEvent], None]) -> None:
        """Remove a callback."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    # ========================================================================
    # Analysis Events
    # ========================================================================

    def log_analysis(
        self,
        request: GenerationRequest,
        period: int,
        cycle_confirmed: bool,
        pi_estimate: Optional[float],
        reference_pi_estimate: Optional[float]
    ) -> AnalysisEvent:
        """
        Log a completed analysis.

        Args:
            request: The analysed request (fingerprinted, not stored)
            period: LCG period reported
            cycle_confirmed: Whether the LCG cycle was confirmed
            pi_estimate: LCG π estimate (None if undefined)
            reference_pi_estimate: Reference π estimate (None if undefined)

        Returns:
            The logged event
        """
        return self._add_event(
            EventType.ANALYSIS_COMPLETED,
            get_request_fingerprint(request),
            {
                'length': request.length,
                'period': period,
                'cycle_confirmed': cycle_confirmed,
                'pi_estimate': pi_estimate,
                'reference_pi_estimate': reference_pi_estimate,
            },
        )

    def log_rejection(self, params: Dict[str, Any], reason: str) -> AnalysisEvent:
        """
        Log a request that failed validation.

        Rejected requests may not form a valid GenerationRequest, so the
        fingerprint is taken over the raw parameters.
        """
        canonical = json.dumps(params, sort_keys=True, default=str, separators=(',', ':'))
        return self._add_event(
            EventType.ANALYSIS_REJECTED,
            hashlib.sha256(canonical.encode()).hexdigest(),
            {'reason': reason},
        )

    # ========================================================================
    # Report Events
    # ========================================================================

    def log_report_export(self, request: GenerationRequest, path: str, digest: str) -> AnalysisEvent:
        """Log a report written to disk."""
        return self._add_event(
            EventType.REPORT_EXPORTED,
            get_request_fingerprint(request),
            {'path': path, 'digest': digest[:16]},
        )

    def log_report_check(self, path: str, valid: bool) -> AnalysisEvent:
        """Log the outcome of a report integrity check."""
        event_type = EventType.REPORT_VERIFIED if valid else EventType.REPORT_INTEGRITY_FAILED
        return self._add_event(
            event_type,
            hashlib.sha256(path.encode()).hexdigest(),
            {'path': path},
        )

    # ========================================================================
    # Queries
    # ========================================================================

    def get_all_events(self) -> List[AnalysisEvent]:
        return list(self._entries)

    def get_request_events(self, request: GenerationRequest) -> List[AnalysisEvent]:
        """Get all events recorded for a request."""
        fingerprint = get_request_fingerprint(request)
        return [e for e in self._entries if e.fingerprint[:16] == fingerprint[:16]]

    def get_events_by_type(self, event_type: EventType) -> List[AnalysisEvent]:
        """Get all events of a specific type."""
        return [e for e in self._entries if e.event_type == event_type]

    def get_recent_events(self, count: int = 10) -> List[AnalysisEvent]:
        """Get the most recent events."""
        return self._entries[-count:]

    def print_audit_log(self, last_n: Optional[int] = None) -> None:
        """Print the journal in a readable format."""
        events = self.get_recent_events(last_n) if last_n else self._entries

        print("\n" + "=" * 70)
        print("ANALYSIS JOURNAL")
        print("=" * 70)

        for event in events:
            print(event)
            for k, v in event.details.items():
                print(f"    {k}: {v}")

        print("=" * 70)
        print(f"Total events: {len(self._entries)}")
        print("=" * 70)

    def verify_chain(self) -> bool:
        """
        Validate the hash chain.

        Returns:
            True if chain is valid

        Raises:
            IntegrityError: If any entry does not commit to its predecessor
        """
        prev_hash = GENESIS_PREV_HASH
        for index, event in enumerate(self._entries):
            if event.prev_hash != prev_hash:
                raise IntegrityError(f"Journal chain broken at entry {index}")
            prev_hash = event.entry_hash
        return True

    def export_log(self) -> str:
        """Export the journal as JSON lines."""
        return "\n".join(event.to_record() for event in self._entries)

    @classmethod
    def import_log(cls, text: str) -> 'EventLogger':
        """Import a journal exported with export_log() and validate it."""
        entries = [AnalysisEvent.from_record(line) for line in text.splitlines() if line.strip()]
        logger = cls(entries=entries, log_start=False)
        logger.verify_chain()
        return logger


# ============================================================================
# Convenience Functions
# ============================================================================

def create_event_logger() -> EventLogger:
    """Create a new event logger with a SYSTEM_START entry."""
    return EventLogger()
