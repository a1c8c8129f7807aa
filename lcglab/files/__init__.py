# Files Module
"""
Report export implementations including:
- Plain text sequence download
- JSON reports with SHA-256 or PBKDF2-keyed HMAC-SHA256 integrity
- Verification BEFORE the payload is returned
- Pagination over generated sequences
"""

# Lazy imports to avoid RuntimeWarning when running module directly
def __getattr__(name):
    """Lazy import to avoid circular import issues when running module directly."""
    from . import report_export
    return getattr(report_export, name)

__all__ = [
    'format_sequence_text',
    'save_sequence_text',
    'export_report',
    'load_report',
    'build_report_payload',
    'derive_key_pbkdf2',
    'compute_digest',
    'compute_hmac',
    'verify_hmac',
    'page_of',
    'page_count',
    'DEFAULT_SEQUENCE_FILENAME',
]
