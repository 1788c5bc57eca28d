"""Nightly prep scheduler."""
