"""Model package for macstore.

``MacRecord`` is the plain value handed to callers; ``MacRow`` is the
SQLAlchemy table declaration it is read from.
"""
from .mac_record import MacRecord
from .db_models import Base, MacRow, TABLE_MACS

__all__ = [
    "MacRecord",
    "MacRow",
    "Base",
    "TABLE_MACS",
]
