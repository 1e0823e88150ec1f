"""
Keyword Relevance Scorer - TF-IDF inspired job-title matching.

Each catalog keyword contributes weight * (1 + ln(tf)) to its profile,
where tf is the number of times the keyword occurs in the resume and
weight is the keyword group's fixed importance (standing in for IDF).
The log keeps repeated mentions from scaling the score linearly.
"""

import logging
import math
import re
from collections.abc import Mapping
from functools import lru_cache

from careerprep.models.jobs import JOB_PROFILE_CATALOG, JobMatch, JobProfile

logger = logging.getLogger(__name__)

DEFAULT_MATCH_LIMIT = 5


@lru_cache(maxsize=512)
def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    # Catalog keywords such as "c++" contain regex metacharacters
    return re.compile(re.escape(keyword.lower()), re.IGNORECASE)


def term_frequency(keyword: str, text: str) -> int:
    """Count case-insensitive, non-overlapping occurrences of a keyword."""
    if not keyword:
        return 0
    return len(_keyword_pattern(keyword).findall(text))


def tf_score(frequency: int) -> float:
    """Logarithmically dampened term frequency. Zero for absent keywords."""
    if frequency <= 0:
        return 0.0
    return 1.0 + math.log(frequency)


def score_profile(normalized_text: str, profile: JobProfile) -> JobMatch:
    """
    Score one job profile against lower-cased resume text.

    Args:
        normalized_text: Resume text, already lower-cased
        profile: Job profile to score

    Returns:
        JobMatch with the raw score and the keywords that matched
    """
    total_score = 0.0
    matched_keywords: list[str] = []

    for group in profile.keyword_groups:
        for keyword in group.keywords:
            frequency = term_frequency(keyword, normalized_text)
            if frequency > 0:
                total_score += group.weight * tf_score(frequency)
                if keyword not in matched_keywords:
                    matched_keywords.append(keyword)

    return JobMatch(
        job_title=profile.job_title,
        relevance_score=total_score,
        matched_keywords=matched_keywords,
    )


def calculate_job_matches(
    resume_text: str,
    catalog: Mapping[str, JobProfile] | None = None,
    limit: int = DEFAULT_MATCH_LIMIT,
) -> list[JobMatch]:
    """
    Rank catalog job titles by relevance to a resume.

    Profiles with no matching keyword are dropped. Ties keep catalog order.

    Args:
        resume_text: Plain resume text (may be empty)
        catalog: Job profiles keyed by title, defaults to the built-in catalog
        limit: Maximum number of matches to return

    Returns:
        Up to `limit` matches, best first
    """
    if catalog is None:
        catalog = JOB_PROFILE_CATALOG

    if not resume_text or not resume_text.strip():
        return []

    normalized_text = resume_text.lower()

    matches = [
        match for match in (
            score_profile(normalized_text, profile) for profile in catalog.values()
        )
        if match.relevance_score > 0
    ]
    matches.sort(key=lambda match: match.relevance_score, reverse=True)

    logger.debug(
        f"Scored {len(catalog)} job profiles, {len(matches)} with keyword matches"
    )
    return matches[:max(limit, 0)]
