"""
CareerPrep - Adaptive MCQ Testing and Resume Review

Serves adaptive multiple choice tests that follow the candidate's
ability level, and recommends job titles for resumes.
"""

__version__ = "0.1.0"
__author__ = "CareerPrep Team"
