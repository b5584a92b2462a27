"""Format detection and readers."""
