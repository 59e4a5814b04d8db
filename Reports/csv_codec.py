"""
Flat CSV codec for the fallback data files.

parse_csv() understands quoted fields ("" is a literal quote, commas inside
quotes do not split) and types columns by header name. to_csv() quotes every
value but does not escape embedded quotes, so a value containing '"' does not
survive a round trip.
"""
import re

INT_MARKERS = ("stock", "quantity", "threshold", "count")
FLOAT_MARKERS = ("price", "revenue")

_LEADING_INT = re.compile(r"^[+-]?\d+")
_LEADING_FLOAT = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def _strip_quotes(value):
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def _is_int_column(header):
    if any(marker in header for marker in INT_MARKERS):
        return True
    return "id" in header and header != "product_id"


def _to_int(value):
    match = _LEADING_INT.match(value.strip())
    return int(match.group()) if match else 0


def _to_float(value):
    match = _LEADING_FLOAT.match(value.replace("$", "").replace(",", "").strip())
    return float(match.group()) if match else 0.0


def coerce(header, value):
    if _is_int_column(header):
        return _to_int(value)
    if any(marker in header for marker in FLOAT_MARKERS):
        return _to_float(value)
    return value


def split_line(line):
    values = []
    current = []
    in_quotes = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1
    values.append("".join(current).strip())
    return values


def parse_csv(text):
    lines = [line for line in text.split("\n") if line.strip()]
    if len(lines) < 2:
        return []
    headers = [_strip_quotes(h) for h in lines[0].split(",")]
    rows = []
    for line in lines[1:]:
        values = split_line(line)
        row = {}
        for i, header in enumerate(headers):
            row[header] = coerce(header, values[i] if i < len(values) else "")
        rows.append(row)
    return rows


def _format(value):
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_csv(rows):
    rows = list(rows)
    if not rows:
        return ""
    headers = list(rows[0].keys())
    lines = [",".join(headers)]
    for row in rows:
        lines.append(",".join(f'"{_format(row.get(h))}"' for h in headers))
    return "\n".join(lines)
