"""Time-offset and dosing arithmetic."""
