"""Shared thresholds for the raster and training algorithms.

All values are fixed heuristics tuned on 64x64 glyph samples.
"""

# Cosine similarity a trace must exceed to count as "the same direction".
COS_ERROR = 0.86

# Width of the band above COS_ERROR that maps to a [0, 1] similarity share.
COS_MARGIN = 1.0 - COS_ERROR  # = 0.14

# Fraction of the resolution tolerated between two time stamps.
TIMING_ERROR_FRACTION = 0.2

# Erosion rounds are counted from 1, so at most MAXIMUM_REDUCTIONS - 1 run.
MAXIMUM_REDUCTIONS = 10

# Curve walks give up after grid_length * MAX_CHECKS_FACTOR checks.
# 8 was the best speed/accuracy compromise on the glyph samples.
MAX_CHECKS_FACTOR = 8

# Two ballot maxima closer than this count as a tie.
BALLOT_TIE_MARGIN = 0.01

# Net ballot scores at or below this are treated as zero.
BALLOT_EPSILON = 1e-9

# Predictions kept after each search step.
PREDICTION_LIMIT = 10

DEFAULT_DEFINITION_ID = "unlabeled"
