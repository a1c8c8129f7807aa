# Integration Module
"""
Journal of analysis runs and report exports.

Requests are identified by SHA-256 fingerprints of their parameters.
"""

# Lazy imports to avoid RuntimeWarning when running module directly
def __getattr__(name):
    """Lazy import to avoid circular import issues."""
    from . import event_logger
    return getattr(event_logger, name)

__all__ = [
    'EventType',
    'AnalysisEvent',
    'EventLogger',
    'get_request_fingerprint',
    'create_event_logger',
]
