"""Per-game analyzers fed by the move replayer."""

from .comeback_eligibility import (
    ComebackEligibilityAnalyzer,
    EligibilityFlags,
    detect_eligibility,
)

__all__ = [
    'ComebackEligibilityAnalyzer',
    'EligibilityFlags',
    'detect_eligibility',
]
