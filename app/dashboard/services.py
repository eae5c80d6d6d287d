"""
Dashboard service storing saved match results per owner.
"""

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Dict, List, Optional

from app.match_presentation import ScoreClassifier

from .models import DashboardEntry, DashboardSummary, MAX_JOB_DESCRIPTION_CHARS

logger = logging.getLogger(__name__)


class DashboardService:
    """Saves, lists and deletes match results, capped per owner."""

    def __init__(
        self,
        entries_file: Path,
        classifier: ScoreClassifier,
        max_entries: int = 20,
    ):
        """
        Initialize DashboardService.

        Args:
            entries_file: Path to the dashboard_entries.json file
            classifier: ScoreClassifier used to derive the stored flags
            max_entries: Maximum saved results per owner
        """
        self.entries_file = entries_file
        self.classifier = classifier
        self.max_entries = max_entries
        self._lock = Lock()

    # =====================
    # Persistence
    # =====================

    def _load_data(self) -> Dict:
        """Load dashboard data from file."""
        try:
            if self.entries_file.exists():
                with open(self.entries_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                    data.setdefault("next_id", 1)
                    data.setdefault("entries", [])
                    return data
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Error loading dashboard data: {e}")
        return {"next_id": 1, "entries": []}

    def _save_data(self, data: Dict) -> None:
        """Save dashboard data to file.

        Written to a temp file in the same directory and swapped in with
        ``os.replace``, so unlocked readers see the old or the new file, never
        a truncated one.
        """
        self.entries_file.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.entries_file.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.entries_file)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def _owner_entries(self, data: Dict, owner: str) -> List[DashboardEntry]:
        return [
            DashboardEntry.from_dict(item)
            for item in data["entries"]
            if item.get("owner") == owner
        ]

    # =====================
    # Public API
    # =====================

    def get_all_entries(self, owner: str) -> List[DashboardEntry]:
        """Entries for ``owner``, newest first."""
        entries = self._owner_entries(self._load_data(), owner)
        return sorted(entries, key=lambda e: e.id, reverse=True)

    def get_entry(self, owner: str, entry_id: int) -> Optional[DashboardEntry]:
        for entry in self._owner_entries(self._load_data(), owner):
            if entry.id == entry_id:
                return entry
        return None

    def can_add_new_entry(self, owner: str) -> bool:
        return len(self._owner_entries(self._load_data(), owner)) < self.max_entries

    def save_entry(
        self,
        owner: str,
        role: str,
        company: str,
        job_description: str,
        score: int,
    ) -> Optional[DashboardEntry]:
        """
        Classify and persist a match result.

        Returns:
            The saved entry, or None if the owner already has max_entries
        """
        flags = self.classifier.availability_flags(score)

        with self._lock:
            data = self._load_data()
            if len(self._owner_entries(data, owner)) >= self.max_entries:
                logger.info(f"Dashboard full for {owner} ({self.max_entries} entries)")
                return None

            entry = DashboardEntry(
                id=data["next_id"],
                owner=owner,
                role_title=role,
                company_name=company,
                job_description=(job_description or "")[:MAX_JOB_DESCRIPTION_CHARS],
                score=score,
                recommendation=self.classifier.recommendation_text(score),
                suggestions_available=flags.suggestions,
                improve_score_available=flags.improve,
                cv_upgrade_available=flags.upgrade,
                interview_prep_available=flags.interview_prep,
                created_at=datetime.now().strftime("%Y-%m-%d %H:%M")
            )
            data["next_id"] += 1
            data["entries"].append(entry.to_dict())
            self._save_data(data)

        logger.info(f"Saved dashboard entry {entry.id} for {owner}: {role} @ {company} ({score}%)")
        return entry

    def delete_entry(self, owner: str, entry_id: int) -> bool:
        """Remove one of the owner's entries; False if it does not exist."""
        with self._lock:
            data = self._load_data()
            kept = [
                item for item in data["entries"]
                if not (item.get("owner") == owner and item.get("id") == entry_id)
            ]
            if len(kept) == len(data["entries"]):
                return False
            data["entries"] = kept
            self._save_data(data)

        logger.info(f"Deleted dashboard entry {entry_id} for {owner}")
        return True

    def get_summary(self, entries: List[DashboardEntry]) -> DashboardSummary:
        """Totals for an already loaded list of entries (newest first)."""
        if not entries:
            return DashboardSummary(
                total_analyses=0,
                best_score_label="-",
                last_activity_label="No activity yet"
            )

        best = max(entry.score for entry in entries)
        latest = max(entries, key=lambda e: e.id)
        return DashboardSummary(
            total_analyses=len(entries),
            best_score_label=f"{best}% - {self.classifier.label(best)}",
            last_activity_label=latest.created_at
        )
