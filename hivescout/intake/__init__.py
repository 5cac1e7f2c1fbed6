"""
HiveScout Intake - Triple Tables to Windows

Usage:
    from hivescout.intake import read_window

    window = read_window("window.csv")
"""

from hivescout.intake.reader import (
    REQUIRED_COLUMNS,
    frame_to_triples,
    read_frame,
    read_window,
    validate_frame,
)

__all__ = [
    'REQUIRED_COLUMNS',
    'frame_to_triples',
    'read_frame',
    'read_window',
    'validate_frame',
]
