"""
Games Zone engines
Self-contained state machines for the dashboard's mini games, with no web framework or database
"""

# Star ratings are always within this range
MIN_STARS = 1
MAX_STARS = 5
