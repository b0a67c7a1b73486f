"""GlyphSight: stroke skeletonization, curve tracing and trace training."""
