from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import RLock
from typing import Optional

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


DEFAULT_DB_NAME = "babycare"


@dataclass(frozen=True)
class MongoCollections:
    """Convenience wrapper for app collections."""

    babies: Collection
    feedings: Collection
    sleeps: Collection
    growth_records: Collection
    diapers: Collection
    milestones: Collection

    # Per-user notification feed (health alerts land here).
    notifications: Collection

    # Role lookup chain: user_roles first, then profiles.
    user_roles: Collection
    profiles: Collection


class MongoManager:
    """
    MongoDB connection manager.

    Maintains one MongoClient for the app's storage DB. Datetimes come back
    timezone-aware (UTC) so they compare cleanly with utc_now().
    """

    def __init__(self, mongo_uri: str, db_name: str = DEFAULT_DB_NAME):
        self._mongo_uri = mongo_uri
        self._db_name = db_name
        self._client: Optional[MongoClient] = None
        self._lock = RLock()

    def connect(self) -> None:
        """Initialize the Mongo client if needed."""
        with self._lock:
            if self._client is not None:
                return
            # MongoClient is thread-safe and manages internal pooling.
            self._client = MongoClient(self._mongo_uri, connect=True, tz_aware=True)

    # PUBLIC_INTERFACE
    def ping(self, timeout_ms: int = 1500) -> bool:
        """
        Ping the configured MongoDB to validate connectivity.

        This is used by startup validation and the connectivity-check endpoint.
        """
        try:
            if self._client is None:
                self.connect()
            assert self._client is not None
            self._client.admin.command("ping", maxTimeMS=int(max(250, timeout_ms)))
            return True
        except PyMongoError:
            logger.exception("Mongo ping failed (PyMongoError)")
            return False
        except Exception:
            logger.exception("Mongo ping failed (unexpected)")
            return False

    def close(self) -> None:
        """Close the Mongo client."""
        with self._lock:
            if self._client is not None:
                try:
                    self._client.close()
                except Exception:
                    logger.exception("Error closing MongoClient")
                self._client = None

    def db(self) -> Database:
        """Return the app database handle."""
        if self._client is None:
            self.connect()
        assert self._client is not None
        return self._client[self._db_name]

    def collections(self) -> MongoCollections:
        """Return app collections."""
        db = self.db()
        return MongoCollections(
            babies=db["babies"],
            feedings=db["feedings"],
            sleeps=db["sleeps"],
            growth_records=db["growth_records"],
            diapers=db["diapers"],
            milestones=db["milestones"],
            notifications=db["real_time_notifications"],
            user_roles=db["user_roles"],
            profiles=db["profiles"],
        )

    def init_indexes(self) -> None:
        """Create required indexes (idempotent)."""
        cols = self.collections()

        # ---- Babies ----
        cols.babies.create_index([("id", ASCENDING)], unique=True, name="idx_babies_id")
        cols.babies.create_index([("user_id", ASCENDING), ("created_at", ASCENDING)], name="idx_babies_user_created")

        # ---- Care records ----
        # Common query: baby + trailing time window, newest first.
        cols.feedings.create_index([("id", ASCENDING)], unique=True, name="idx_feedings_id")
        cols.feedings.create_index([("baby_id", ASCENDING), ("start_time", DESCENDING)], name="idx_feedings_baby_start")
        cols.sleeps.create_index([("id", ASCENDING)], unique=True, name="idx_sleeps_id")
        cols.sleeps.create_index([("baby_id", ASCENDING), ("start_time", DESCENDING)], name="idx_sleeps_baby_start")
        cols.growth_records.create_index([("id", ASCENDING)], unique=True, name="idx_growth_id")
        cols.growth_records.create_index([("baby_id", ASCENDING), ("date", DESCENDING)], name="idx_growth_baby_date")
        cols.diapers.create_index([("id", ASCENDING)], unique=True, name="idx_diapers_id")
        cols.diapers.create_index([("baby_id", ASCENDING), ("time", DESCENDING)], name="idx_diapers_baby_time")
        cols.milestones.create_index([("id", ASCENDING)], unique=True, name="idx_milestones_id")
        cols.milestones.create_index([("baby_id", ASCENDING), ("date", DESCENDING)], name="idx_milestones_baby_date")

        # ---- Notifications ----
        cols.notifications.create_index([("id", ASCENDING)], unique=True, name="idx_notifications_id")
        cols.notifications.create_index(
            [("user_id", ASCENDING), ("read", ASCENDING), ("created_at", DESCENDING)],
            name="idx_notifications_user_read_created",
        )

        # ---- Roles ----
        cols.user_roles.create_index([("user_id", ASCENDING)], name="idx_user_roles_user")
        cols.profiles.create_index([("id", ASCENDING)], unique=True, name="idx_profiles_id")
