"""
Numeric thresholds for weight normalization and diagnostics.

Used by fix_prob, the resampling design and the backend warnings.
"""

# Normalized weights must sum to 1 within this absolute tolerance; negative
# entries no larger than this are rounding noise
WEIGHT_SUM_ATOL = 1e-9

# Warn when the effective sample size falls below this fraction of N
ESS_WARN_FRACTION = 0.01
