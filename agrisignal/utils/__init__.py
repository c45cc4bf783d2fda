"""Time and image helpers."""
