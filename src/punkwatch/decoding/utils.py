"""Decoding utilities: ABI word access and typed parsers."""

from __future__ import annotations

from typing import Any

from punkwatch.errors import LogDecodeError


def word_at(data: bytes, i: int) -> bytes:
    """Return the i-th 32-byte ABI word; raise if the data is too short."""
    start = 32 * i
    end = start + 32
    if end > len(data):
        raise LogDecodeError(f"data has {len(data)} bytes, word {i} needs {end}")
    return data[start:end]


def parse_word(word: bytes, typ: str) -> Any:
    """Parse one 32-byte word (topic or data) according to the declared type."""
    if len(word) != 32:
        raise LogDecodeError(f"expected a 32-byte word, got {len(word)} bytes")
    if typ == "address":
        return "0x" + word[-20:].hex()
    if typ.startswith("uint"):
        return int.from_bytes(word, "big", signed=False)
    if typ.startswith("int"):
        # Handle signed integers using two's complement conversion
        v = int.from_bytes(word, "big", signed=False)
        bits = int(typ[3:]) if typ != "int" else 256
        if v >= 2 ** (bits - 1):
            v -= 2**bits
        return v
    if typ == "bool":
        return int.from_bytes(word, "big") != 0
    return "0x" + word.hex()


def parse_topic_field(topic: bytes, typ: str) -> Any:
    """Parse one indexed topic according to the declared type."""
    return parse_word(topic, typ)


def parse_data_word(data: bytes, word_index: int, typ: str) -> Any:
    """Parse one ABI word from data according to the declared type."""
    return parse_word(word_at(data, word_index), typ)
