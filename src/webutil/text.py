"""Plain text extraction from HTML snippets."""

from .entities import decode_entities_in_text

# Markup that ends a line in the rendered text. Applied in this order.
_LINE_BREAKS = ("</p>", "<br>", "</br>", "<br/>", "<br />")

# Harmless references rewritten to plain characters before decoding the rest.
_PLAIN_REFERENCES = (
    ("&#8216;", "'"),
    ("&#8217;", "'"),
    ("&#8220;", '"'),
    ("&#8221;", '"'),
    ("&nbsp;", " "),
    ("&quot;", '"'),
    ("&apos;", "'"),
)

_ESCAPE_TABLE = str.maketrans(
    {
        "<": "&lt;",
        ">": "&gt;",
        "&": "&amp;",
        "'": "&#39;",
        '"': "&#34;",
        "\0": "\ufffd",
    }
)

# Escapes undone after escaping. "&amp; " only with the trailing space.
_UNESCAPES = (
    ("&#34;", '"'),
    ("&#39;", "'"),
    ("&amp; ", "& "),
    ("&amp;amp; ", "& "),
)


def strip_tags(text):
    """Drop every "<...>" span, including the angle brackets."""
    out = []
    in_tag = False
    for c in text:
        if c == "<":
            in_tag = True
        elif c == ">":
            in_tag = False
        elif not in_tag:
            out.append(c)
    return "".join(out)


def to_plain_text(html):
    """Strip tags from html and return text that is safe to display.

    Text without any angle bracket is returned untouched. Otherwise paragraph
    ends and line breaks become newlines, other newlines are dropped (so
    <pre> formatting is lost), character references are decoded and <, >
    and a bare & are escaped again; quotes and "& " stay literal.
    """
    if "<" not in html and ">" not in html:
        return html

    # Newlines carry no meaning between tags.
    output = html.replace("\n", "")
    for marker in _LINE_BREAKS:
        output = output.replace(marker, "\n")
    output = strip_tags(output)

    for reference, plain in _PLAIN_REFERENCES:
        output = output.replace(reference, plain)

    output = decode_entities_in_text(output)
    output = output.translate(_ESCAPE_TABLE)

    for escaped, plain in _UNESCAPES:
        output = output.replace(escaped, plain)
    return output
