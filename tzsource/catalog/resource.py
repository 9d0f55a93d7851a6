"""Read the data version embedded in an ICU ``zoneinfo.res`` resource bundle."""
from __future__ import annotations

from pathlib import Path
import re

from tzsource.catalog.errors import VersionReadError

# ICU data header: uint16 headerSize, magic 0xda 0x27, then UDataInfo whose
# isBigEndian flag sits at byte offset 8.
ICU_MAGIC = b"\xda\x27"
ENDIANNESS_OFFSET = 8
HEADER_MIN_SIZE = 12

TZ_VERSION_KEY = b"TZVersion"

_VERSION_PATTERN = re.compile(r"(?<![0-9A-Za-z])(?:19|20)\d{2}[a-z]{1,2}(?![0-9A-Za-z])")


def read_tz_version(path: str | Path) -> str:
    """Return the ``TZVersion`` string (e.g. ``2007k``) stored in ``path``.

    Raises :class:`VersionReadError` when the file is not an ICU resource
    bundle or has no recognisable version.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise VersionReadError(path, f"unable to read file: {exc}") from exc

    if len(data) < HEADER_MIN_SIZE or data[2:4] != ICU_MAGIC:
        raise VersionReadError(path, "not an ICU resource bundle")
    key_offset = data.find(TZ_VERSION_KEY)
    if key_offset < 0:
        raise VersionReadError(path, "no TZVersion resource")

    # The string pool follows the key strings; UTF-16 units start on even offsets
    start = key_offset + len(TZ_VERSION_KEY)
    start += start % 2
    encoding = "utf-16-be" if data[ENDIANNESS_OFFSET] else "utf-16-le"
    text = data[start:].decode(encoding, errors="ignore")
    match = _VERSION_PATTERN.search(text)
    if match is None:
        raise VersionReadError(path, "TZVersion value not found")
    return match.group(0)
