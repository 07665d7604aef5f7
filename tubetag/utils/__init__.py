"""
Utility helpers for paths, file listings and human-readable formatting.
"""
