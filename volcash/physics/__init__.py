"""Physical constants, unit conversions, and geometry."""
