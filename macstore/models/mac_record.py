from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict

from macstore.address import format_mac


@dataclass
class MacRecord:
    """A stored MAC address with its connection counters."""
    mac: int
    attempts: int = 0
    successful: int = 0
    active: bool = False

    @property
    def address(self) -> str:
        return format_mac(self.mac)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "mac": self.mac,
            "attempts": self.attempts,
            "successful": self.successful,
            "active": self.active,
        }
