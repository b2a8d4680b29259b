"""
Record format for multi-row script results.

Scripts join fields with the ASCII unit separator and rows with the ASCII
record separator. Neither character occurs in text typed into Reminders,
Calendar or Notes, so titles and bodies containing ``||`` or line breaks come
back intact.
"""

from __future__ import annotations

FIELD_DELIMITER = "\x1f"
RECORD_DELIMITER = "\x1e"

# AppleScript expressions producing the delimiters
AS_FIELD_DELIMITER = "(character id 31)"
AS_RECORD_DELIMITER = "(character id 30)"


def parse_records(output: str, width: int) -> list[list[str]]:
    """
    Split script output into rows of ``width`` fields.

    Rows with fewer fields are skipped. Surplus delimiters are folded back
    into the last field.

    Args:
        output: Raw engine output.
        width: Number of fields per row.

    Returns:
        List of rows, each a list of exactly ``width`` strings.
    """
    rows: list[list[str]] = []
    for record in output.split(RECORD_DELIMITER):
        if not record.strip():
            continue
        fields = record.split(FIELD_DELIMITER, width - 1)
        if len(fields) < width:
            continue
        rows.append(fields)
    return rows


def parse_record(output: str, width: int) -> list[str] | None:
    """Return the first row of ``output``, or None if there is none."""
    rows = parse_records(output, width)
    return rows[0] if rows else None
