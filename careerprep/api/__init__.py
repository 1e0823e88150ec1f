"""
API layer for CareerPrep

Contains FastAPI routers for:
- Adaptive MCQ tests
- Resume review
- Reference metadata
"""

from careerprep.api.router import api_router

__all__ = ["api_router"]
