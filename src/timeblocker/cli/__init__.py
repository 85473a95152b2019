"""Command line interface for timeblocker."""
