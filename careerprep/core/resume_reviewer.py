"""
Resume Reviewer for CareerPrep

Turns plain resume text into job-title recommendations using the
keyword relevance scorer. Text extraction from PDF/DOC uploads happens
upstream; this component only sees plain text.
"""

import logging
from collections.abc import Mapping

from careerprep.config.settings import get_settings
from careerprep.core.keyword_scorer import calculate_job_matches
from careerprep.models.jobs import JOB_CATALOG_VERSION, JOB_PROFILE_CATALOG, JobProfile
from careerprep.models.resume import AlgorithmInfo, JobRecommendation, ResumeAnalysis

logger = logging.getLogger(__name__)


JOB_MATCHING_ALGORITHM = AlgorithmInfo(
    name="TF-IDF (Term Frequency-Inverse Document Frequency)",
    description=(
        "Keyword frequency analysis with logarithmic scaling and "
        "weighted importance factors"
    ),
)


class ResumeReviewer:
    """Produces job-title recommendations for a resume."""

    def __init__(
        self,
        catalog: Mapping[str, JobProfile] | None = None,
        catalog_version: str = JOB_CATALOG_VERSION,
    ):
        self.settings = get_settings()
        self.catalog = catalog if catalog is not None else JOB_PROFILE_CATALOG
        self.catalog_version = catalog_version

    def analyze(self, resume_text: str) -> ResumeAnalysis:
        """
        Analyze a resume.

        Args:
            resume_text: Plain resume text

        Returns:
            ResumeAnalysis with up to max_job_recommendations titles
        """
        matches = calculate_job_matches(
            resume_text,
            catalog=self.catalog,
            limit=self.settings.max_job_recommendations,
        )
        logger.info(
            f"Job matching found {len(matches)} recommendations: "
            f"{[m.job_title for m in matches]}"
        )

        keyword_limit = self.settings.max_matched_keywords_shown
        recommendations = [
            JobRecommendation(
                title=match.job_title,
                match_score=match.display_score,
                matched_keywords=match.matched_keywords[:keyword_limit],
            )
            for match in matches
        ]

        return ResumeAnalysis(
            recommended_job_titles=recommendations,
            catalog_version=self.catalog_version,
            algorithms_used={"job_matching": JOB_MATCHING_ALGORITHM},
            word_count=len(resume_text.split()),
        )
