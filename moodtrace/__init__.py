"""
MoodTrace - listening-mood baseline tracker.

Classifies track audio features into mood categories, learns a personal
valence/energy baseline and flags samples that drift away from it.
"""

__version__ = "0.1.0"
