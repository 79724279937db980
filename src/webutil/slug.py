"""Path and file name slugs.

All three slug functions share `normalize`: trim, transliterate, turn common
separators into "-", drop every character the caller's pattern marks as
illegal, then squeeze runs of "-". The result may be empty and callers are
expected to check for that.
"""

import posixpath
import re

from .transliterations import TRANSLITERATIONS

# Restrictive on purpose: these are ASCII URL slugs.
ILLEGAL_PATH_CHARS = re.compile(r"[^a-zA-Z0-9~\-./]")
ILLEGAL_NAME_CHARS = re.compile(r"[^a-zA-Z0-9\-.]")

_SEPARATORS = re.compile(r"[ &_=+:]")
_DASHES = re.compile(r"-+")
_DOT_RUNS = re.compile(r"\.{2,}")
_BASE_NAME_SEPARATORS = re.compile(r"[./]")

_TRANSLITERATION_TABLE = str.maketrans(TRANSLITERATIONS)


def transliterate(text):
    """Replace accented Latin and Cyrillic letters with ASCII spellings.

    Characters missing from the table are left as they are.
    """
    return text.translate(_TRANSLITERATION_TABLE)


def normalize(text, illegal):
    """Reduce text to the characters allowed by the `illegal` pattern's complement.

    Accents are flattened before the illegal characters are removed so that
    "é" becomes "e" instead of vanishing.
    """
    text = text.strip(" ")
    text = transliterate(text)
    text = _SEPARATORS.sub("-", text)
    text = illegal.sub("", text)
    return _DASHES.sub("-", text)


def clean_path(path):
    """Lexically clean a slash separated path, like a shell would resolve it.

    Never touches the file system. The empty path cleans to ".".
    """
    cleaned = posixpath.normpath(path)
    if cleaned.startswith("//"):
        # POSIX keeps exactly two leading slashes, URL paths do not.
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def base_name(path):
    """Return the last element of path, ignoring trailing slashes."""
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def slugify_path(text):
    """Make text safe to use as a relative URL path.

    Parent directory references are removed and the leading root is dropped,
    so the result never climbs out of the directory it is joined to.
    """
    path = text.lower().replace("..", "")
    path = normalize(clean_path(path), ILLEGAL_PATH_CHARS)
    # Removing illegal characters can bring dots together again (".?.").
    path = _DOT_RUNS.sub(".", path)
    return path.lstrip("/")


def slugify_name(text):
    """Make text safe to use as a file name, keeping only its base name."""
    name = clean_path(base_name(text.lower()))
    name = normalize(name, ILLEGAL_NAME_CHARS)
    if not name.strip("."):
        # "." and ".." name directories, not files.
        return ""
    return name


def slugify_base_name(text):
    """Make text safe to use in a file name, turning "." and "/" into "-".

    No path cleaning and no case change happen here.
    """
    name = _BASE_NAME_SEPARATORS.sub("-", text)
    return normalize(name, ILLEGAL_NAME_CHARS)
