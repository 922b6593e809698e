"""Plaintext helpers for two-party secure joins: join keys, projections, joins, shares, bitonic sorting and regression steps."""

__version__ = "0.1.0"