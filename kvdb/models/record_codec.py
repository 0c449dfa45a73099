"""
Record codec - convert store contents to a JSON snapshot and back.

Keys and values are arbitrary bytes, so each one is stored as a base64
string inside the JSON document. The snapshot carries a CRC32 over the
length-prefixed records to catch edits and torn writes.

Format:
    {"format": "kvdb", "version": 1, "checksum": <crc32>,
     "entries": [{"key": "<base64>", "val": "<base64>"}, ...]}
"""

import base64
import binascii
import json
import zlib
from collections.abc import Iterable, Mapping

from kvdb.models.exceptions import CorruptFormatError, RecordEncodingError
from kvdb.models.key_val import KeyVal

FORMAT_NAME = "kvdb"
FORMAT_VERSION = 1


def checksum(records: Iterable[KeyVal]) -> int:
    """CRC32 over the framed bytes of every record, in order."""
    crc = 0
    for record in records:
        crc = zlib.crc32(bytes(record), crc)
    return crc & 0xffffffff


def encode(contents: Mapping[bytes, bytes]) -> bytes:
    """
    Serialize a key -> value mapping to snapshot bytes.

    Entries are written in key order so equal contents give equal bytes.
    """
    records = [KeyVal(key, contents[key]) for key in sorted(contents)]
    document = {
        "format": FORMAT_NAME,
        "version": FORMAT_VERSION,
        "checksum": checksum(records),
        "entries": [
            {
                "key": base64.b64encode(record.key).decode("ascii"),
                "val": base64.b64encode(record.val).decode("ascii"),
            }
            for record in records
        ],
    }
    return json.dumps(document, separators=(",", ":")).encode("utf-8")


def _b64decode(text: str, field: str, entry_index: int) -> bytes:
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise RecordEncodingError(field, entry_index, str(e)) from e


def decode(data: bytes) -> dict[bytes, bytes]:
    """
    Deserialize snapshot bytes to a key -> value mapping.

    Raises:
        CorruptFormatError: If the bytes are not a well-formed snapshot.
        RecordEncodingError: If a key or value is not valid base64.
    """
    try:
        document = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CorruptFormatError(f"not a JSON document ({e})") from e
    except RecursionError as e:
        raise CorruptFormatError("JSON nested too deeply") from e

    if not isinstance(document, dict):
        raise CorruptFormatError("top level is not an object")
    if document.get("format") != FORMAT_NAME:
        raise CorruptFormatError(f"unknown format {document.get('format')!r}")
    version = document.get("version")
    if isinstance(version, bool) or version != FORMAT_VERSION:
        raise CorruptFormatError(f"unsupported version {version!r}")

    entries = document.get("entries")
    if not isinstance(entries, list):
        raise CorruptFormatError("'entries' is missing or not a list")
    expected = document.get("checksum")
    if not isinstance(expected, int) or isinstance(expected, bool):
        raise CorruptFormatError("'checksum' is missing or not an integer")

    contents: dict[bytes, bytes] = {}
    records: list[KeyVal] = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise CorruptFormatError(f"entry {i} is not an object")
        key_text = entry.get("key")
        val_text = entry.get("val")
        if not isinstance(key_text, str) or not isinstance(val_text, str):
            raise CorruptFormatError(f"entry {i} needs string 'key' and 'val'")

        key = _b64decode(key_text, "key", i)
        val = _b64decode(val_text, "val", i)
        if key in contents:
            raise CorruptFormatError(f"duplicate key at entry {i}")
        contents[key] = val
        records.append(KeyVal(key, val))

    actual = checksum(records)
    if actual != expected:
        raise CorruptFormatError(
            f"checksum mismatch: expected CRC32 0x{expected:08x}, got 0x{actual:08x}"
        )
    return contents
