"""Infrastructure layer: file formats and text parsing, no shared state."""
