"""DAO committee dashboard: seats, stakes and challenge eligibility."""

__version__ = "0.1.0"
