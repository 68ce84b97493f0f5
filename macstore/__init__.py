"""Storage for MAC address records and their connection counters."""
from macstore.address import format_mac, parse_mac
from macstore.database import Database, get_database
from macstore.models import MacRecord
from macstore.store import MISSING, MacRecordStore

__all__ = [
    "MacRecordStore",
    "MacRecord",
    "MISSING",
    "Database",
    "get_database",
    "parse_mac",
    "format_mac",
]
