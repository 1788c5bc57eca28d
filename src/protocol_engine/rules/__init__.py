"""Gut-state classification and per-event risk."""
