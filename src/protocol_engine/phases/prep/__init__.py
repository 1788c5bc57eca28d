"""Multi-day preparation phases (extended taper, T-72h, T-48h, T-24h)."""
