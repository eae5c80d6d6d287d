"""
Dashboard models and data structures.
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict


MAX_JOB_DESCRIPTION_CHARS = 2000


@dataclass
class DashboardEntry:
    """A saved match result."""
    id: int
    owner: str
    role_title: str
    company_name: str
    job_description: str
    score: int
    recommendation: str
    suggestions_available: bool
    improve_score_available: bool
    cv_upgrade_available: bool
    interview_prep_available: bool
    created_at: str  # "YYYY-MM-DD HH:MM"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DashboardEntry":
        return cls(
            id=data["id"],
            owner=data["owner"],
            role_title=data.get("role_title", ""),
            company_name=data.get("company_name", ""),
            job_description=data.get("job_description", ""),
            score=data["score"],
            recommendation=data.get("recommendation", ""),
            suggestions_available=data.get("suggestions_available", False),
            improve_score_available=data.get("improve_score_available", False),
            cv_upgrade_available=data.get("cv_upgrade_available", False),
            interview_prep_available=data.get("interview_prep_available", False),
            created_at=data.get("created_at", "")
        )


@dataclass
class DashboardSummary:
    """Headline numbers shown above the saved results."""
    total_analyses: int
    best_score_label: str
    last_activity_label: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
