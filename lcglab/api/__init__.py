# API Module
"""
LabOne endpoint codec: query parameters in, JSON body out.
"""

from .lab_one import (
    parse_params,
    to_response,
    handle_lab_one,
)

__all__ = [
    'parse_params',
    'to_response',
    'handle_lab_one',
]
