"""Phase routines — one PhaseRule per slice of plan generation."""
