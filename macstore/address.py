"""Conversion helpers between MAC address text and its integer form."""
from __future__ import annotations

import string

_HEX_DIGITS = frozenset(string.hexdigits)

# Largest 48-bit hardware address
MAX_MAC = 0xFFFFFFFFFFFF


def parse_mac(text: str) -> int:
	"""Convert ``AA:BB:CC:DD:EE:FF`` style text to an integer.

	Colons are dropped and the remaining characters are read as base 16.
	Raises :class:`ValueError` if anything other than hex digits is left or
	the value does not fit in 48 bits.
	"""
	digits = text.replace(":", "")
	# int() would also accept signs, "0x", whitespace and underscores
	if not digits or not _HEX_DIGITS.issuperset(digits):
		raise ValueError(f"invalid MAC address: {text!r}")
	value = int(digits, 16)
	if value > MAX_MAC:
		raise ValueError(f"MAC address wider than 48 bits: {text!r}")
	return value


def format_mac(value: int) -> str:
	"""Render a 48-bit integer as uppercase, colon-separated hex pairs."""
	if value < 0:
		raise ValueError(f"MAC address cannot be negative: {value}")
	if value > MAX_MAC:
		raise ValueError(f"MAC address wider than 48 bits: {value:#x}")
	digits = f"{value:012X}"
	return ":".join(digits[index:index + 2] for index in range(0, len(digits), 2))


__all__ = ["parse_mac", "format_mac", "MAX_MAC"]
