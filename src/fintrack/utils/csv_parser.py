"""CSV tokenizer for transaction imports."""

from fintrack.domain.entities import ParsedTable


def _split_rows(text: str) -> list[list[str]]:
    """Split raw CSV text into rows of trimmed cells.

    Quoted cells may contain commas and line breaks; a doubled quote inside
    quotes is a literal quote. Blank lines are skipped.
    """
    rows: list[list[str]] = []
    row: list[str] = []
    current: list[str] = []
    inside_quotes = False

    i = 0
    length = len(text)
    while i < length:
        char = text[i]

        if char == '"' and inside_quotes and i + 1 < length and text[i + 1] == '"':
            current.append('"')
            i += 2
            continue

        if char == '"':
            inside_quotes = not inside_quotes
        elif char == "," and not inside_quotes:
            row.append("".join(current).strip())
            current = []
        elif char in "\r\n" and not inside_quotes:
            if current or row:
                row.append("".join(current).strip())
                rows.append(row)
            row = []
            current = []
        else:
            current.append(char)
        i += 1

    if current or row:
        row.append("".join(current).strip())
        rows.append(row)

    return rows


def parse_csv(text: str) -> ParsedTable:
    """Parse CSV text into a header row and one field-map per data row.

    The first row supplies the headers. Each data row is zipped against the
    headers by position: missing trailing cells become ``""`` and cells past
    the last header are dropped. When two headers share a name, the
    rightmost column wins.

    Args:
        text: Raw file content

    Returns:
        ParsedTable with headers and rows in input order
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    rows = _split_rows(text)
    if not rows:
        return ParsedTable(headers=(), rows=())

    headers = tuple(rows[0])
    structured = []
    for cells in rows[1:]:
        record = {}
        for index, header in enumerate(headers):
            record[header] = cells[index] if index < len(cells) else ""
        structured.append(record)

    return ParsedTable(headers=headers, rows=tuple(structured))
