"""SchemeMatch — welfare scheme eligibility scoring and recommendations."""

__version__ = "0.1.0"
