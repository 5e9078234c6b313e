"""
Minimal CSV tokenizer for Google Sheets exports.

The sheet export is loosely structured (ragged rows, repeated headers,
banner rows), so rows are tokenized by hand instead of through a
DataFrame reader that would try to infer a rectangular schema.
"""


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1].replace('""', '"')
    return value


def parse_csv_line(line: str) -> list[str]:
    """
    Splits one CSV line into trimmed, unquoted field values.
    Commas inside double quotes are literal; "" inside a quoted field is one quote.
    """
    fields = []
    in_quotes = False
    start = 0

    for i, char in enumerate(line):
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append(_unquote(line[start:i]))
            start = i + 1

    fields.append(_unquote(line[start:]))
    return fields


def _ends_inside_quoted_field(text: str) -> bool:
    """
    True when text ends inside a field that opened with a quote.
    Quotes that do not open a field (e.g. 18" Wheel) are literal.
    """
    in_quotes = False
    at_field_start = True
    i = 0
    while i < len(text):
        char = text[i]
        if in_quotes:
            if char == '"':
                if text[i + 1 : i + 2] == '"':
                    i += 1
                else:
                    in_quotes = False
        elif char == '"' and at_field_start:
            in_quotes = True
            at_field_start = False
        elif char == ",":
            at_field_start = True
        elif char not in " \t":
            at_field_start = False
        i += 1
    return in_quotes


def split_csv_lines(text: str) -> list[str]:
    """
    Splits raw CSV text into logical lines, dropping blank ones.
    A newline inside an open quoted field stays part of the current line.
    """
    lines = []
    pending = None

    for physical in text.split("\n"):
        physical = physical.rstrip("\r")
        pending = physical if pending is None else f"{pending}\n{physical}"

        if _ends_inside_quoted_field(pending):
            continue

        if pending.strip():
            lines.append(pending)
        pending = None

    # Unterminated quote at end of input: keep what we have
    if pending is not None and pending.strip():
        lines.append(pending)

    return lines
