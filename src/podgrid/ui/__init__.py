"""Terminal rendering and interaction."""
