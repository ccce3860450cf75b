"""CSV Line Parser

Splits one snapshot line into nullable fields.

Conventions:
- ``"..."`` is a quoted field; ``""`` inside it is an escaped quote.
- An unquoted ``NULL`` (exact, case-sensitive) is an absent value (None).
- Any other unquoted text, including the empty string, is kept verbatim.
- A trailing comma yields a final empty field; an empty line yields ``[""]``.

The parser never raises. An unterminated quote runs to the end of the line;
structural problems are caught by the field-count check in the loader.
"""

from typing import List, Optional

NULL_LITERAL = "NULL"


def parse_line(line: str) -> List[Optional[str]]:
    """Parse a single CSV line (without its line terminator)."""
    fields: List[Optional[str]] = []
    pos = 0
    length = len(line)
    
    while True:
        if pos >= length:
            # Only reached after a separator, or for an empty line
            fields.append("")
            break
        
        if line[pos] == '"':
            pos += 1
            start = pos
            has_escaped_quotes = False
            
            while pos < length:
                quote = line.find('"', pos)
                if quote == -1:
                    pos = length
                    break
                if quote + 1 < length and line[quote + 1] == '"':
                    has_escaped_quotes = True
                    pos = quote + 2
                else:
                    pos = quote
                    break
            
            value = line[start:pos]
            if has_escaped_quotes:
                value = value.replace('""', '"')
            fields.append(value)
            
            if pos < length:
                pos += 1  # closing quote
            if pos < length and line[pos] == ',':
                pos += 1
            elif pos >= length:
                break
            # Text between a closing quote and the next comma is read as the
            # start of another field, matching the field-count semantics
        else:
            comma = line.find(',', pos)
            if comma == -1:
                raw = line[pos:]
                fields.append(None if raw == NULL_LITERAL else raw)
                break
            raw = line[pos:comma]
            fields.append(None if raw == NULL_LITERAL else raw)
            pos = comma + 1
    
    return fields


def quote_field(value: str) -> str:
    """Wrap ``value`` in double quotes, doubling any embedded quote."""
    if '"' in value:
        value = value.replace('"', '""')
    return f'"{value}"'
