"""Application – email use cases and ports."""
