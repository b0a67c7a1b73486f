"""Grid, direction, geometry, erosion and contour primitives."""
