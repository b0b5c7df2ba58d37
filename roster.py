# roster.py
"""
Durable roster of wheel entrants.

Entrants keep their insertion order (that order decides where each wedge
sits on the wheel). Every mutation is written straight back to disk when
the store has a path; a store without one lives purely in memory.
"""

import json
import logging
import os
import uuid
from dataclasses import asdict, replace
from enum import Enum
from typing import List, Optional

from wheel import Entrant

logger = logging.getLogger(__name__)


class RosterStatus(Enum):
    OK = "ok"
    EMPTY_NAME = "empty_name"
    DUPLICATE_NAME = "duplicate_name"
    NOT_FOUND = "not_found"
    SPIN_IN_PROGRESS = "spin_in_progress"


class RosterStore:
    """Ordered entrants with win counters, persisted as a JSON list."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self._entrants: List[Entrant] = []
        self.load()

    # ---- Queries ----
    def get_all(self) -> List[Entrant]:
        return list(self._entrants)

    def get(self, entrant_id: str) -> Optional[Entrant]:
        for e in self._entrants:
            if e.id == entrant_id:
                return e
        return None

    def __len__(self) -> int:
        return len(self._entrants)

    def has_name(self, name: str) -> bool:
        key = name.strip().lower()
        return any(e.name.lower() == key for e in self._entrants)

    # ---- Mutations ----
    def add(self, name: str) -> RosterStatus:
        name = name.strip()
        if not name:
            return RosterStatus.EMPTY_NAME
        if self.has_name(name):
            logger.info(f"[ROSTER] Rejected duplicate name: {name}")
            return RosterStatus.DUPLICATE_NAME

        self._entrants.append(Entrant(id=uuid.uuid4().hex, name=name, wins=0))
        logger.info(f"[ROSTER] Added {name} ({len(self._entrants)} entrants)")
        self.save()
        return RosterStatus.OK

    def remove(self, entrant_id: str) -> RosterStatus:
        entrant = self.get(entrant_id)
        if entrant is None:
            return RosterStatus.NOT_FOUND
        self._entrants = [e for e in self._entrants if e.id != entrant_id]
        logger.info(f"[ROSTER] Removed {entrant.name}")
        self.save()
        return RosterStatus.OK

    def increment_wins(self, entrant_id: str) -> RosterStatus:
        return self._adjust_wins(entrant_id, +1)

    def decrement_wins(self, entrant_id: str) -> RosterStatus:
        return self._adjust_wins(entrant_id, -1)

    def reset_all(self) -> RosterStatus:
        self._entrants = [replace(e, wins=0) for e in self._entrants]
        logger.info("[ROSTER] Reset all win counts")
        self.save()
        return RosterStatus.OK

    def _adjust_wins(self, entrant_id: str, step: int) -> RosterStatus:
        for i, e in enumerate(self._entrants):
            if e.id == entrant_id:
                self._entrants[i] = replace(e, wins=max(0, e.wins + step))
                logger.debug(f"[ROSTER] {e.name} wins {e.wins} -> {self._entrants[i].wins}")
                self.save()
                return RosterStatus.OK
        return RosterStatus.NOT_FOUND

    # ---- Persistence ----
    def save(self) -> None:
        """Write the roster to disk. Failures are logged and the roster stays in memory."""
        if not self.path:
            return

        try:
            temp_file = self.path + ".tmp"
            with open(temp_file, "w") as f:
                json.dump([asdict(e) for e in self._entrants], f, indent=2)
            os.replace(temp_file, self.path)
            logger.debug(f"[ROSTER] Saved {len(self._entrants)} entrants to {self.path}")
        except OSError as e:
            logger.warning(f"[ROSTER] Failed to save roster: {e}")

    def load(self) -> bool:
        """
        Load the roster from disk.

        Returns:
            True if a roster file was read, False otherwise
        """
        if not self.path or not os.path.exists(self.path):
            return False

        try:
            with open(self.path, "r") as f:
                records = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"[ROSTER] Failed to load roster: {e}")
            return False

        if not isinstance(records, list):
            logger.warning(f"[ROSTER] Ignoring {self.path}: expected a list of entrants")
            return False

        entrants: List[Entrant] = []
        seen = set()
        seen_ids = set()
        for item in records:
            try:
                entrant_id, name = item["id"], item["name"]
                if not isinstance(entrant_id, str) or not isinstance(name, str):
                    raise TypeError("id and name must be strings")
                name = name.strip()
                entrant = Entrant(id=entrant_id, name=name, wins=max(0, int(item.get("wins", 0))))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"[ROSTER] Skipping malformed entry {item!r}: {e}")
                continue
            if not name or name.lower() in seen:
                logger.warning(f"[ROSTER] Skipping blank or duplicate name {name!r}")
                continue
            if entrant_id in seen_ids:
                logger.warning(f"[ROSTER] Skipping duplicate id {entrant_id!r} ({name})")
                continue
            seen.add(name.lower())
            seen_ids.add(entrant_id)
            entrants.append(entrant)

        self._entrants = entrants
        logger.info(f"[ROSTER] Loaded {len(entrants)} entrants from {self.path}")
        return True
