"""Image metadata extraction for photo sorting."""
