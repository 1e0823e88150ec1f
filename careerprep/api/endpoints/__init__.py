"""
API endpoint modules for CareerPrep
"""

from careerprep.api.endpoints import mcq, resume, metadata

__all__ = ["mcq", "resume", "metadata"]
