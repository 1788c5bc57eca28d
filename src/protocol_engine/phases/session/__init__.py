"""Event-day phases from pre-session fueling through the re-feed."""
