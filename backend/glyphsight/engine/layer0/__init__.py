"""Layer 0: erosion of the binary input."""
