"""Reporter implementations for terminal output."""
