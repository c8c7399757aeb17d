"""
utils/ - Shared Helpers
========================
Logging, error types and date normalization used by every layer.
"""
