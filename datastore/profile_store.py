from __future__ import annotations

import json
import logging
from dataclasses import replace
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Optional

from pydantic import ValidationError

from models.records import ActivityLevel, ProtectantApplication, SensitivityProfile
from models.schemas import ApplicationRecord, ProfileRecord, StoreSnapshot
from settings import get_settings

logger = logging.getLogger(__name__)


class ProfileStore:
    """Holds at most one sensitivity profile and one active sunscreen application."""

    def __init__(self, persistence_path: Optional[Path] = None) -> None:
        self._snapshot = StoreSnapshot()
        self.persistence_path = persistence_path
        self._lock = Lock()
        if persistence_path:
            persistence_path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def get_profile(self) -> Optional[SensitivityProfile]:
        with self._lock:
            record = self._snapshot.profile
            return record.to_domain() if record is not None else None

    def put_profile(self, profile: SensitivityProfile, updated_at: Optional[datetime] = None) -> None:
        """Replace the stored profile wholesale."""
        record = ProfileRecord.from_domain(profile, updated_at=updated_at)
        with self._lock:
            self._snapshot.profile = record
            self._persist()
        logger.info("Stored sensitivity profile", extra={"skin_type": profile.skin_type})

    def get_application(self) -> Optional[ProtectantApplication]:
        with self._lock:
            record = self._snapshot.application
            return record.to_domain() if record is not None else None

    def put_application(self, application: ProtectantApplication) -> None:
        """Log a new application, superseding any previous one."""
        record = ApplicationRecord.from_domain(application)
        with self._lock:
            self._snapshot.application = record
            self._persist()
        logger.info("Stored sunscreen application")

    def clear_application(self) -> bool:
        with self._lock:
            existed = self._snapshot.application is not None
            self._snapshot.application = None
            self._persist()
        return existed

    def record_water_exposure(self, at: datetime) -> ProtectantApplication:
        """Mark the current application as water-exposed at ``at``."""
        with self._lock:
            record = self._snapshot.application
            if record is None:
                raise KeyError("No sunscreen application recorded.")
            updated = replace(record.to_domain(), activity=ActivityLevel.water, last_water_exposure=at)
            self._snapshot.application = ApplicationRecord.from_domain(updated)
            self._persist()
        logger.info("Recorded water exposure")
        return updated

    def _persist(self) -> None:
        if not self.persistence_path:
            return
        payload = self._snapshot.model_dump(mode="json")
        self.persistence_path.write_text(json.dumps(payload, indent=2, sort_keys=True))

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "{}"
            self._snapshot = StoreSnapshot.model_validate(json.loads(raw))
        except (OSError, json.JSONDecodeError, ValidationError):
            logger.warning(
                "Ignoring unreadable store file",
                extra={"path": str(self.persistence_path)},
            )
            self._snapshot = StoreSnapshot()


@lru_cache
def build_default_store(path: Optional[str] = None) -> ProfileStore:
    settings = get_settings()
    store_path = settings.store_path if path is None else path
    persistence = Path(store_path) if store_path else None
    return ProfileStore(persistence_path=persistence)
