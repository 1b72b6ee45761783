"""State/store layer.

This package is the single source of truth for the tracked position: how
poll results are accepted, ordered and announced to readers.
"""
