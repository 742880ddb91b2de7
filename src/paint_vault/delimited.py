"""Line-oriented tokenizer for comma or semicolon separated catalog files."""
from __future__ import annotations

BOM = "\ufeff"


def decode_bytes(data: bytes) -> str:
    """Decode an uploaded file as UTF-8, falling back to Latin-1."""

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def strip_bom(text: str) -> str:
    return text.replace(BOM, "")


def split_lines(text: str) -> list[str]:
    """Split on CRLF, CR or LF and drop empty lines."""

    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return [line for line in normalized.split("\n") if line]


def detect_delimiter(header: str) -> str:
    """Semicolon when the header has one and no comma, otherwise comma."""

    if ";" in header and "," not in header:
        return ";"
    return ","


def parse_line(line: str, delimiter: str = ",") -> list[str]:
    """Split one line into fields.

    A double quote anywhere in a field opens or closes a quoted section, so
    ``a, "b,c"`` keeps ``b,c`` together. Inside quotes ``""`` is a literal
    quote. Text outside quotes is kept verbatim, including spaces. Quoted
    sections cannot span lines; an unclosed one runs to the end of the line.
    """

    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    position = 0
    while position < len(line):
        char = line[position]
        if char == '"':
            if in_quotes and line[position + 1 : position + 2] == '"':
                current.append('"')
                position += 2
                continue
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        position += 1
    fields.append("".join(current))
    return fields


__all__ = [
    "BOM",
    "decode_bytes",
    "detect_delimiter",
    "parse_line",
    "split_lines",
    "strip_bom",
]
