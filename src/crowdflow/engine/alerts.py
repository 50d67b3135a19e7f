"""
Alert Store
===========

Append-only store for alerts with the none -> active -> resolved lifecycle.

Rules:
    - A congestion alert is raised for a location only if no unresolved
      congestion alert exists for it (key: location_id, type, unresolved)
    - Resolution happens only through resolve(), never automatically
    - Resolved alerts are kept for audit; they are never reactivated
    - resolve() on an unknown or already resolved id is a no-op

The duplicate guard uses an index of open alerts keyed by
(location_id, type), so the check is O(1).

All mutation is serialized with a single lock, so resolve() may be called
from a request handler while the simulator is ticking.
"""

import itertools
import logging
import threading
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from crowdflow.models.alert import Alert, AlertSeverity, AlertType
from crowdflow.models.location import Location


logger = logging.getLogger(__name__)


class AlertStore:
    """
    Owner of all alerts raised during a process lifetime.

    Example:
        store = AlertStore()
        alert = store.raise_congestion(location, now)
        store.resolve(alert.id)
    """

    def __init__(self) -> None:
        """Initialize an empty alert store."""
        self._lock = threading.Lock()
        self._alerts: List[Alert] = []
        self._positions: Dict[str, int] = {}
        self._open: Dict[Tuple[str, AlertType], str] = {}
        self._sequence = itertools.count(1)

    def has_active_alert(self, location_id: str, alert_type: AlertType) -> bool:
        """Check whether an unresolved alert of this type exists for the location."""
        with self._lock:
            return (location_id, AlertType(alert_type)) in self._open

    def raise_congestion(self, location: Location, now: datetime) -> Optional[Alert]:
        """
        Raise a congestion alert unless one is already open.

        Args:
            location: Location that turned critical
            now: Alert creation time

        Returns:
            The new Alert, or None if an unresolved congestion alert exists
        """
        key = (location.id, AlertType.CONGESTION)

        with self._lock:
            if key in self._open:
                return None

            alert = Alert(
                id=self._next_id(location.id, now),
                location_id=location.id,
                type=AlertType.CONGESTION,
                severity=AlertSeverity.HIGH,
                message=f"Critical congestion at {location.name}. Immediate action required.",
                timestamp=now,
            )
            self._positions[alert.id] = len(self._alerts)
            self._alerts.append(alert)
            self._open[key] = alert.id

        logger.warning(f"Alert raised: {alert.id} ({alert.message})")
        return alert

    def resolve(self, alert_id: str) -> bool:
        """
        Mark an alert resolved.

        Args:
            alert_id: Identifier of the alert

        Returns:
            True if an active alert was resolved, False if the id is
            unknown or the alert was already resolved
        """
        with self._lock:
            position = self._positions.get(alert_id)
            if position is None:
                logger.debug(f"Resolve ignored, unknown alert: {alert_id}")
                return False

            alert = self._alerts[position]
            if alert.resolved:
                return False

            self._alerts[position] = alert.model_copy(update={"resolved": True})
            self._open.pop((alert.location_id, alert.type), None)

        logger.info(f"Alert resolved: {alert_id}")
        return True

    def get(self, alert_id: str) -> Optional[Alert]:
        """Look up an alert by id (resolved or not)."""
        with self._lock:
            position = self._positions.get(alert_id)
            return self._alerts[position] if position is not None else None

    def active(self) -> List[Alert]:
        """Unresolved alerts in creation order."""
        with self._lock:
            return [alert for alert in self._alerts if not alert.resolved]

    def all(self) -> List[Alert]:
        """Every alert ever raised, in creation order."""
        with self._lock:
            return list(self._alerts)

    def __len__(self) -> int:
        with self._lock:
            return len(self._alerts)

    def _next_id(self, location_id: str, now: datetime) -> str:
        """Unique id: creation time in ms, location and a process-wide sequence."""
        return f"alert-{int(now.timestamp() * 1000)}-{location_id}-{next(self._sequence)}"
