"""
models/ - Domain Models
========================
Plain dataclasses for the rows the API stores and returns.
"""
