"""Layer 1: separating dominant strokes from curve candidates."""
