"""Codec for the ``;``-delimited record format used by the data files.

One record per line, fields joined by ``;``. Inside a field the delimiter,
line breaks and the backslash itself are written as two-character escapes:

    ;                ->  \\;
    newline          ->  \\n
    carriage return  ->  \\r
    \\                ->  \\\\

Decoding is a two-step process: ``split_fields`` cuts the line on
unescaped delimiters, keeping every escape pair intact, then
``unescape_field`` resolves the pairs. A backslash followed by any other
character is kept verbatim (both characters), and so is a trailing lone
backslash.
"""

from typing import Iterable, List, Optional

DELIMITER = ";"
ESCAPE = "\\"

_ENCODE_MAP = {
    ESCAPE: ESCAPE + ESCAPE,
    DELIMITER: ESCAPE + DELIMITER,
    "\n": ESCAPE + "n",
    "\r": ESCAPE + "r",
}

_DECODE_MAP = {
    ESCAPE: ESCAPE,
    DELIMITER: DELIMITER,
    "n": "\n",
    "r": "\r",
}


def escape_field(value: Optional[str]) -> str:
    """Escape one raw field value. ``None`` encodes as an empty field."""
    if value is None:
        return ""
    return "".join(_ENCODE_MAP.get(ch, ch) for ch in str(value))


def unescape_field(value: str) -> str:
    """Resolve the escape pairs of one field produced by ``split_fields``."""
    out = []
    i = 0
    length = len(value)
    while i < length:
        ch = value[i]
        if ch == ESCAPE and i + 1 < length:
            nxt = value[i + 1]
            if nxt in _DECODE_MAP:
                out.append(_DECODE_MAP[nxt])
            else:
                # Unknown escape: keep it as written
                out.append(ch + nxt)
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def split_fields(line: str) -> List[str]:
    """Split a line on unescaped delimiters, leaving escape pairs untouched."""
    fields = []
    current = []
    escaping = False
    for ch in line:
        if escaping:
            current.append(ESCAPE + ch)
            escaping = False
            continue
        if ch == ESCAPE:
            escaping = True
            continue
        if ch == DELIMITER:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
    if escaping:
        current.append(ESCAPE)
    fields.append("".join(current))
    return fields


def encode_record(values: Iterable[Optional[str]]) -> str:
    """Serialize raw field values into one line (without line terminator)."""
    return DELIMITER.join(escape_field(v) for v in values)


def decode_record(line: str) -> Optional[List[str]]:
    """Recover the raw field values of one line.

    Returns None for empty or whitespace-only lines, which are not records.
    A trailing ``\\n`` / ``\\r\\n`` terminator is ignored.
    """
    line = line.rstrip("\r\n")
    if not line.strip():
        return None
    return [unescape_field(field) for field in split_fields(line)]
