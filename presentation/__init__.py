"""
gentr Presentation Package.

Spinner contract and implementations.
Requires Python 3.11+.
"""

from presentation.spinner import (
    NullSpinner,
    SnakeSpinner,
    Spinner,
    SpinnerState,
    SpinnerStateMachine,
)

__all__ = [
    "NullSpinner",
    "SnakeSpinner",
    "Spinner",
    "SpinnerState",
    "SpinnerStateMachine",
]
