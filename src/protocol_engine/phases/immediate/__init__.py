"""Immediate responses for compromised gut states (red/black zone)."""
