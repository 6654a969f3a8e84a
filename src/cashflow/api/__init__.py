"""HTTP boundary layer."""
