"""Canvas 2D drawing state on top of the transform stack."""
