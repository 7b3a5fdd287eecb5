"""HTTP transport adapter."""
