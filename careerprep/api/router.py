"""
Main API router for CareerPrep

Aggregates all API routes and provides the main application router.
"""

from fastapi import APIRouter

from careerprep.api.endpoints import mcq, resume, metadata

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    mcq.router,
    prefix="/mcq",
    tags=["MCQ Tests"]
)

api_router.include_router(
    resume.router,
    prefix="/resume",
    tags=["Resume Review"]
)

api_router.include_router(
    metadata.router,
    prefix="/metadata",
    tags=["Metadata"]
)
