"""Physical processes."""
