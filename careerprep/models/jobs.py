"""
Job-title keyword profiles for CareerPrep

Defines the reference catalog used by resume review:
- Keyword groups with importance weights
- Job profiles built from those groups
- Computed job matches
"""

import math

from pydantic import BaseModel, ConfigDict, Field, computed_field


JOB_CATALOG_VERSION = "2024.1"


class KeywordGroup(BaseModel):
    """Keywords sharing one importance weight."""

    model_config = ConfigDict(frozen=True)

    keywords: tuple[str, ...] = Field(..., min_length=1)
    weight: float = Field(..., gt=0, description="Importance weight (IDF stand-in)")


class JobProfile(BaseModel):
    """A job title and the weighted keyword groups that signal it."""

    model_config = ConfigDict(frozen=True)

    job_title: str
    keyword_groups: tuple[KeywordGroup, ...]


class JobMatch(BaseModel):
    """A job profile scored against one resume."""

    job_title: str
    relevance_score: float = Field(..., ge=0)
    matched_keywords: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def display_score(self) -> int:
        """Score rescaled to 0-100 for display. Ranking uses relevance_score."""
        return display_score(self.relevance_score)


def display_score(relevance_score: float) -> int:
    """Linear rescale with a hard ceiling at 100, rounding halves up."""
    return max(0, min(math.floor(relevance_score * 10 + 0.5), 100))


# =============================================================================
# JOB PROFILE CATALOG
# =============================================================================

_JOB_KEYWORD_TABLE: dict[str, list[tuple[list[str], float]]] = {
    "Software Engineer": [
        (["software", "developer", "programming", "code", "engineering"], 1.0),
        (["python", "java", "javascript", "c++", "golang", "rust"], 0.8),
        (["algorithms", "data structures", "system design"], 0.7),
        (["git", "agile", "scrum", "ci/cd"], 0.5),
    ],
    "Frontend Developer": [
        (["frontend", "front-end", "ui", "ux", "user interface"], 1.0),
        (["react", "angular", "vue", "typescript", "javascript"], 0.9),
        (["html", "css", "sass", "tailwind", "bootstrap"], 0.8),
        (["responsive", "accessibility", "web"], 0.6),
    ],
    "Backend Developer": [
        (["backend", "back-end", "server", "api", "microservices"], 1.0),
        (["node", "python", "java", "golang", "rust", "php"], 0.9),
        (["database", "sql", "nosql", "mongodb", "postgresql"], 0.8),
        (["rest", "graphql", "authentication", "security"], 0.7),
    ],
    "Full Stack Developer": [
        (["full stack", "fullstack", "full-stack"], 1.0),
        (["frontend", "backend", "react", "node", "database"], 0.8),
        (["api", "deployment", "devops"], 0.6),
    ],
    "Data Scientist": [
        (["data science", "machine learning", "ml", "ai", "artificial intelligence"], 1.0),
        (["python", "r", "pandas", "numpy", "scikit-learn", "tensorflow", "pytorch"], 0.9),
        (["statistics", "modeling", "visualization", "jupyter"], 0.7),
        (["deep learning", "neural network", "nlp"], 0.8),
    ],
    "Data Analyst": [
        (["data analyst", "analytics", "business intelligence", "bi"], 1.0),
        (["sql", "excel", "tableau", "power bi", "looker"], 0.9),
        (["python", "r", "statistics", "visualization"], 0.7),
        (["reporting", "dashboard", "insights"], 0.6),
    ],
    "DevOps Engineer": [
        (["devops", "sre", "site reliability", "infrastructure"], 1.0),
        (["docker", "kubernetes", "k8s", "terraform", "ansible"], 0.9),
        (["aws", "azure", "gcp", "cloud"], 0.8),
        (["ci/cd", "jenkins", "github actions", "monitoring"], 0.7),
    ],
    "Product Manager": [
        (["product manager", "product management", "pm"], 1.0),
        (["roadmap", "strategy", "stakeholder", "requirements"], 0.8),
        (["agile", "scrum", "user stories", "backlog"], 0.7),
        (["analytics", "metrics", "kpi", "okr"], 0.6),
    ],
    "UI/UX Designer": [
        (["ui", "ux", "user experience", "user interface", "design"], 1.0),
        (["figma", "sketch", "adobe xd", "prototype"], 0.9),
        (["wireframe", "mockup", "user research", "usability"], 0.8),
        (["accessibility", "interaction design"], 0.6),
    ],
    "Machine Learning Engineer": [
        (["machine learning", "ml engineer", "deep learning"], 1.0),
        (["tensorflow", "pytorch", "keras", "mlops"], 0.9),
        (["python", "model deployment", "feature engineering"], 0.8),
        (["computer vision", "nlp", "recommendation systems"], 0.7),
    ],
    "Cloud Architect": [
        (["cloud architect", "solutions architect", "cloud"], 1.0),
        (["aws", "azure", "gcp", "multi-cloud"], 0.9),
        (["architecture", "scalability", "security", "networking"], 0.8),
        (["serverless", "microservices", "containers"], 0.7),
    ],
    "Cybersecurity Analyst": [
        (["security", "cybersecurity", "infosec", "information security"], 1.0),
        (["penetration testing", "vulnerability", "siem", "soc"], 0.9),
        (["compliance", "risk assessment", "encryption"], 0.7),
        (["firewall", "incident response", "threat"], 0.6),
    ],
}


def build_catalog(
    table: dict[str, list[tuple[list[str], float]]]
) -> dict[str, JobProfile]:
    """Build a job profile catalog from a title -> [(keywords, weight)] table."""
    return {
        title: JobProfile(
            job_title=title,
            keyword_groups=tuple(
                KeywordGroup(keywords=tuple(keywords), weight=weight)
                for keywords, weight in groups
            ),
        )
        for title, groups in table.items()
    }


JOB_PROFILE_CATALOG: dict[str, JobProfile] = build_catalog(_JOB_KEYWORD_TABLE)


def get_job_profile(job_title: str) -> JobProfile | None:
    """Look up a catalog profile by its title."""
    return JOB_PROFILE_CATALOG.get(job_title)
