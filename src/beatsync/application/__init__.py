"""Application layer for beatsync."""
