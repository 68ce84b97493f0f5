"""SQLAlchemy declaration of the ``macs`` table.

The column layout is shared with other components of the application that
read the same database file, so the names (including ``_id``) are fixed.
"""
from __future__ import annotations

from sqlalchemy import BigInteger, Column, Integer
from sqlalchemy.orm import declarative_base

from .mac_record import MacRecord

Base = declarative_base()

TABLE_MACS = "macs"


class MacRow(Base):  # type: ignore[misc, valid-type]
    """Database model for a single MAC address entry."""
    __tablename__ = TABLE_MACS

    id = Column("_id", Integer, primary_key=True)
    # No unique constraint: duplicates are rejected by MacRecordStore.create
    mac = Column(BigInteger, nullable=False)
    attempts = Column(Integer, nullable=False, default=0)
    successful = Column(Integer, nullable=False, default=0)
    active = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<MacRow {self.mac} attempts={self.attempts} successful={self.successful}>"


RECORD_COLUMNS = (MacRow.mac, MacRow.attempts, MacRow.successful, MacRow.active)


def row_to_record(row) -> MacRecord:
    """Build a :class:`MacRecord` from a row selected with ``RECORD_COLUMNS``."""
    mac, attempts, successful, active = row
    return MacRecord(
        mac=int(mac),
        attempts=int(attempts),
        successful=int(successful),
        active=bool(active),
    )


__all__ = ["Base", "MacRow", "TABLE_MACS", "RECORD_COLUMNS", "row_to_record"]
