"""Post-session coach analysis."""

from protocol_engine.analysis.coach_report import generate_analysis

__all__ = ["generate_analysis"]
