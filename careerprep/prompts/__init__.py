"""
Prompt templates for CareerPrep AI operations.
"""

from careerprep.prompts.mcq import MCQPrompts

__all__ = [
    "MCQPrompts",
]
