"""CSV export for flattened candidate rows (RFC 4180, UTF-8 with BOM)."""

from typing import Any, Iterable, List

from .models import CsvRow

HEADERS: List[str] = list(CsvRow._fields)

NEWLINE = "\n"
# Lets Excel detect UTF-8
BOM = "\ufeff"
_NEEDS_QUOTES = (",", '"', "\n")


def escape_field(value: Any) -> str:
    """Quote a field only when it contains a comma, quote or newline."""
    text = "" if value is None else str(value)
    if any(ch in text for ch in _NEEDS_QUOTES):
        return '"' + text.replace('"', '""') + '"'
    return text


def rows_to_csv(rows: Iterable[CsvRow]) -> str:
    """Serialize rows to a CSV document, header first, lines joined by LF."""
    lines = [",".join(HEADERS)]
    for row in rows:
        lines.append(",".join(escape_field(value) for value in row))
    return BOM + NEWLINE.join(lines)
