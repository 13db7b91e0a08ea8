"""cookielens - cookie consent classification and site risk scoring.

This package classifies browser cookies into consent categories using a
known-tracker knowledge base with a heuristic fallback, and folds the
per-site category counts into a 0-100 risk score.
"""

__version__ = "1.0.0"
