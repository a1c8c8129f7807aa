# Analysis Module
"""
Sequence analysis pipeline:
- Request validation
- LCG and reference sequence generation
- Period detection and Cesàro π estimation on both
"""

from .orchestrator import (
    AnalysisResult,
    AnalysisOutcome,
    validate_request,
    analyze,
    try_analyze,
    analyze_many,
)

__all__ = [
    'AnalysisResult',
    'AnalysisOutcome',
    'validate_request',
    'analyze',
    'try_analyze',
    'analyze_many',
]
