from .convs import parse_ints
from .sanitize import DEFAULT_POLICY, HTMLSanitizer, SanitizationPolicy, clean_attributes, sanitize
from .serialize import escape_html, to_html
from .slug import normalize, slugify_base_name, slugify_name, slugify_path, transliterate
from .text import to_plain_text
from .timeutil import ms_to_time, now_local_ms, now_utc_ms, time_to_ms
from .tokenizer import StrictModeError, TokenizerError, TokenizerOpts, tokenize
from .tokens import ParseError

__all__ = [
    "DEFAULT_POLICY",
    "HTMLSanitizer",
    "ParseError",
    "SanitizationPolicy",
    "StrictModeError",
    "TokenizerError",
    "TokenizerOpts",
    "clean_attributes",
    "escape_html",
    "ms_to_time",
    "normalize",
    "now_local_ms",
    "now_utc_ms",
    "parse_ints",
    "sanitize",
    "slugify_base_name",
    "slugify_name",
    "slugify_path",
    "time_to_ms",
    "to_html",
    "to_plain_text",
    "tokenize",
    "transliterate",
]
