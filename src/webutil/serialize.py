"""Token serialization utilities.

Markup is always rebuilt from tokens, never copied from the input, so
whitespace and quoting inside tags come out normalized.
"""

from __future__ import annotations

from .tokens import CharacterTokens, CommentToken, DoctypeToken, Tag

_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "'": "&#39;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&#34;",
        "\r": "&#13;",
    }
)


def escape_html(text: str | None) -> str:
    """Escape the characters that are special in text and attribute values."""
    if not text:
        return ""
    return str(text).translate(_ESCAPE_TABLE)


def serialize_start_tag(name: str, attrs: list[str] | None = None, *, self_closing: bool = False) -> str:
    """Serialize a start tag from its flat [name1, value1, ...] attribute list."""
    parts: list[str] = ["<", name]
    if attrs:
        for index in range(0, len(attrs), 2):
            parts.extend([" ", attrs[index], '="', escape_html(attrs[index + 1]), '"'])
    parts.append("/>" if self_closing else ">")
    return "".join(parts)


def serialize_end_tag(name: str) -> str:
    return f"</{name}>"


def serialize_token(token: object) -> str:
    """Return the markup for a single token; EOF and errors serialize to ""."""
    token_type = type(token)
    if token_type is CharacterTokens:
        return escape_html(token.data)
    if token_type is Tag:
        if token.kind == Tag.END:
            return serialize_end_tag(token.name)
        return serialize_start_tag(token.name, token.attrs, self_closing=token.self_closing)
    if token_type is CommentToken:
        return f"<!--{token.data}-->"
    if token_type is DoctypeToken:
        return f"<!DOCTYPE {token.data}>" if token.data else "<!DOCTYPE>"
    return ""


def to_html(tokens) -> str:
    return "".join(serialize_token(token) for token in tokens)
