"""HTML character reference decoding.

Handles named references (&amp;, &eacute;), decimal (&#233;) and hex
(&#xE9;) numeric references. Names come from Python's HTML5 table.
"""

import html.entities

# Keys in html.entities.html5 carry the trailing ";" when the reference
# requires one; the ones without it are the legacy forms.
NAMED_ENTITIES = {}
LEGACY_ENTITIES = set()
for _key, _value in html.entities.html5.items():
    if _key.endswith(";"):
        NAMED_ENTITIES[_key[:-1]] = _value
    else:
        LEGACY_ENTITIES.add(_key)
        NAMED_ENTITIES.setdefault(_key, _value)

_LONGEST_NAME = max(len(name) for name in NAMED_ENTITIES)

# Windows-1252 code points that browsers remap in numeric references.
NUMERIC_REPLACEMENTS = {
    0x00: "\ufffd",
    0x80: "\u20ac",
    0x82: "\u201a",
    0x83: "\u0192",
    0x84: "\u201e",
    0x85: "\u2026",
    0x86: "\u2020",
    0x87: "\u2021",
    0x88: "\u02c6",
    0x89: "\u2030",
    0x8a: "\u0160",
    0x8b: "\u2039",
    0x8c: "\u0152",
    0x8e: "\u017d",
    0x91: "\u2018",
    0x92: "\u2019",
    0x93: "\u201c",
    0x94: "\u201d",
    0x95: "\u2022",
    0x96: "\u2013",
    0x97: "\u2014",
    0x98: "\u02dc",
    0x99: "\u2122",
    0x9a: "\u0161",
    0x9b: "\u203a",
    0x9c: "\u0153",
    0x9e: "\u017e",
    0x9f: "\u0178",
}

_HEX_DIGITS = "0123456789abcdefABCDEF"


def decode_numeric_entity(digits, is_hex=False):
    """Return the character for the digits of a numeric reference."""
    try:
        codepoint = int(digits, 16 if is_hex else 10)
    except ValueError:
        return None
    if codepoint in NUMERIC_REPLACEMENTS:
        return NUMERIC_REPLACEMENTS[codepoint]
    if codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
        return "\ufffd"
    return chr(codepoint)


def _is_ascii_alnum(c):
    return c.isascii() and c.isalnum()


def _match_named(text, start, in_attribute):
    """Match a named reference starting right after "&".

    Returns (replacement, end) or None.
    """
    end = start
    length = len(text)
    limit = min(length, start + _LONGEST_NAME)
    while end < limit and _is_ascii_alnum(text[end]):
        end += 1
    name = text[start:end]
    if not name:
        return None

    if end < length and text[end] == ";" and name in NAMED_ENTITIES:
        return NAMED_ENTITIES[name], end + 1

    # Without a semicolon only the legacy names decode, longest prefix first.
    for size in range(len(name), 0, -1):
        prefix = name[:size]
        if prefix not in LEGACY_ENTITIES:
            continue
        after = start + size
        next_char = text[after] if after < length else ""
        if in_attribute and next_char and (_is_ascii_alnum(next_char) or next_char == "="):
            return None
        return NAMED_ENTITIES[prefix], after
    return None


def decode_entities_in_text(text, in_attribute=False):
    """Decode every character reference in text.

    Attribute values follow the stricter legacy rule: a reference without a
    semicolon followed by an alphanumeric or "=" is left alone.
    """
    if "&" not in text:
        return text

    result = []
    pos = 0
    length = len(text)
    while pos < length:
        amp = text.find("&", pos)
        if amp == -1:
            result.append(text[pos:])
            break
        if amp > pos:
            result.append(text[pos:amp])

        cursor = amp + 1
        if cursor < length and text[cursor] == "#":
            cursor += 1
            is_hex = cursor < length and text[cursor] in "xX"
            if is_hex:
                cursor += 1
            digit_start = cursor
            allowed = _HEX_DIGITS if is_hex else "0123456789"
            while cursor < length and text[cursor] in allowed:
                cursor += 1
            decoded = decode_numeric_entity(text[digit_start:cursor], is_hex=is_hex) if cursor > digit_start else None
            if decoded is None:
                result.append("&")
                pos = amp + 1
                continue
            if cursor < length and text[cursor] == ";":
                cursor += 1
            result.append(decoded)
            pos = cursor
            continue

        match = _match_named(text, cursor, in_attribute)
        if match is None:
            result.append("&")
            pos = amp + 1
            continue
        replacement, pos = match
        result.append(replacement)

    return "".join(result)
