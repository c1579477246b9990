"""
Lab Grader: automated grading of programming-lab submissions

Locates a student's project, strips comments from the relevant source
files, checks each task's requirement patterns, scores them proportionally
and applies a deadline-based timing score.
"""

__version__ = "0.1.0"
