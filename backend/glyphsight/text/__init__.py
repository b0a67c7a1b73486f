"""Text formats for grids, definitions and database snapshots."""
