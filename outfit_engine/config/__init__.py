"""Engine configuration."""
