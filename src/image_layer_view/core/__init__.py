"""Analysis backend client."""
