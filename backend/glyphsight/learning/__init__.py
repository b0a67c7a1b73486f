"""Trace reconstruction, compatibility, training, storage and prediction."""
