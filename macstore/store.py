"""Row-level access to the ``macs`` table."""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from macstore.models.db_models import RECORD_COLUMNS, MacRow, row_to_record
from macstore.models.mac_record import MacRecord

logger = logging.getLogger(__name__)

# Returned by create() and the counter getters when there is no usable row
MISSING = -1


def _label(mac: int) -> str:
    return f"{mac:012X}"


class MacRecordStore:
    """Insert, update, delete and query MAC address records.

    The engine is borrowed: the store never disposes it. Storage errors are
    logged and turned into the documented failure value of each operation
    (``MISSING``, ``False``, ``None`` or an empty list) instead of being
    raised.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def create(self, mac: int, active: bool = True) -> int:
        """Insert a new record with zeroed counters.

        Returns the new row id, or ``MISSING`` when ``mac`` is already stored
        or the insert fails.
        """
        try:
            with self._engine.begin() as conn:
                if self._find(conn, mac) is not None:
                    logger.debug("MAC %s already stored", _label(mac))
                    return MISSING
                result = conn.execute(
                    insert(MacRow).values(
                        mac=mac,
                        attempts=0,
                        successful=0,
                        active=int(bool(active)),
                    )
                )
                row_id = int(result.inserted_primary_key[0])
        except SQLAlchemyError:
            logger.exception("Failed to create MAC %s", _label(mac))
            return MISSING
        logger.debug("Created MAC %s as row %d", _label(mac), row_id)
        return row_id

    def set_active(self, mac: int, active: bool) -> bool:
        """Set the active flag of ``mac``. ``False`` if no row matched."""
        return self._update(
            update(MacRow).where(MacRow.mac == mac).values(active=int(bool(active))),
            "set_active",
            mac,
        )

    def deactivate_all(self) -> bool:
        """Clear the active flag on every row. ``True`` if any row was updated."""
        return self._update(update(MacRow).values(active=0), "deactivate_all")

    def increment_attempts(self, mac: int, delta: int = 1) -> bool:
        """Add ``delta`` to the attempt counter in a single statement.

        Counters only grow: a negative ``delta`` is refused with ``False``.
        """
        if delta < 0:
            logger.warning("Refusing negative attempts delta %d for MAC %s", delta, _label(mac))
            return False
        return self._update(
            update(MacRow).where(MacRow.mac == mac).values(attempts=MacRow.attempts + delta),
            "increment_attempts",
            mac,
        )

    def increment_successful(self, mac: int, delta: int = 1) -> bool:
        """Add ``delta`` to the successful-connection counter in a single statement."""
        if delta < 0:
            logger.warning("Refusing negative successful delta %d for MAC %s", delta, _label(mac))
            return False
        return self._update(
            update(MacRow).where(MacRow.mac == mac).values(successful=MacRow.successful + delta),
            "increment_successful",
            mac,
        )

    def delete(self, mac: int) -> bool:
        return self._update(delete(MacRow).where(MacRow.mac == mac), "delete", mac)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get_attempts(self, mac: int) -> int:
        """Return the attempt counter of ``mac`` or ``MISSING``."""
        return self._counter(MacRow.attempts, mac)

    def get_successful(self, mac: int) -> int:
        """Return the successful-connection counter of ``mac`` or ``MISSING``."""
        return self._counter(MacRow.successful, mac)

    def fetch_all(self) -> List[MacRecord]:
        return self._fetch(select(*RECORD_COLUMNS), "fetch_all")

    def fetch_active(self) -> List[MacRecord]:
        return self._fetch(select(*RECORD_COLUMNS).where(MacRow.active == 1), "fetch_active")

    def fetch_one(self, mac: int) -> Optional[MacRecord]:
        try:
            with self._engine.connect() as conn:
                row = self._find(conn, mac)
        except SQLAlchemyError:
            logger.exception("Failed to look up MAC %s", _label(mac))
            return None
        return row_to_record(row) if row is not None else None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _find(self, conn: Connection, mac: int) -> Optional[Any]:
        return conn.execute(select(*RECORD_COLUMNS).where(MacRow.mac == mac).limit(1)).first()

    def _update(self, statement: Any, operation: str, mac: Optional[int] = None) -> bool:
        target = _label(mac) if mac is not None else "all"
        try:
            with self._engine.begin() as conn:
                affected = conn.execute(statement).rowcount
        except SQLAlchemyError:
            logger.exception("%s failed for MAC %s", operation, target)
            return False
        logger.debug("%s on MAC %s affected %d row(s)", operation, target, affected)
        return affected > 0

    def _counter(self, column: Any, mac: int) -> int:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(select(column).where(MacRow.mac == mac).limit(1)).first()
        except SQLAlchemyError:
            logger.exception("Failed to read %s for MAC %s", column.key, _label(mac))
            return MISSING
        if row is None:
            return MISSING
        return int(row[0])

    def _fetch(self, statement: Any, operation: str) -> List[MacRecord]:
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(statement).all()
        except SQLAlchemyError:
            logger.exception("%s failed", operation)
            return []
        return [row_to_record(row) for row in rows]


__all__ = ["MacRecordStore", "MISSING"]
