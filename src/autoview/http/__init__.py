"""HTTP primitives — immutable request and response types."""
