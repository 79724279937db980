"""Fixed tag sets used by the tokenizer and the sanitizer.

Usage:
    from webutil.constants import IGNORE_TAGS, DEFAULT_TAGS

Every set here is a frozenset built at import time and never mutated.
"""

# Tags whose whole content (text and nested markup) is dropped unless the
# tag itself is allowed.
IGNORE_TAGS = frozenset(
    [
        "title",
        "script",
        "style",
        "iframe",
        "frame",
        "frameset",
        "noframes",
        "noembed",
        "embed",
        "applet",
        "object",
        "base",
    ]
)

DEFAULT_TAGS = frozenset(
    [
        # Headings
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        # Structure
        "div",
        "span",
        "hr",
        "p",
        "br",
        # Text formatting
        "b",
        "i",
        "strong",
        "em",
        # Lists
        "ol",
        "ul",
        "li",
        # Links and images
        "a",
        "img",
        # Quotes/code
        "pre",
        "code",
        "blockquote",
    ]
)

DEFAULT_ATTRIBUTES = frozenset(["id", "class", "src", "href", "title", "alt", "name", "rel"])

# Start tags that switch the tokenizer to raw text until the matching end tag.
RAWTEXT_ELEMENTS = frozenset(
    [
        "iframe",
        "noembed",
        "noframes",
        "noscript",
        "plaintext",
        "script",
        "style",
        "textarea",
        "title",
        "xmp",
    ]
)

# Raw text elements whose content still has character references decoded.
RCDATA_ELEMENTS = frozenset(["textarea", "title"])
