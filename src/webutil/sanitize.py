"""Allow-list HTML sanitization.

The sanitizer is a token sink: it walks the tokenizer's output once, keeps
allowed tags with their allowed attributes, keeps text, and drops everything
else. Markup is rebuilt from tokens, so the output never contains a byte of
the original tag syntax.

There is no tree: the only state is a single "ignoring" slot holding the name
of the ignore-tag whose content is being skipped.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Iterable
from dataclasses import dataclass, field, replace

from .constants import DEFAULT_ATTRIBUTES, DEFAULT_TAGS, IGNORE_TAGS
from .serialize import escape_html, serialize_end_tag, serialize_start_tag
from .tokenizer import Tokenizer, TokenizerOpts
from .tokens import CharacterTokens, CommentToken, DoctypeToken, EOFToken, Tag

# data: and javascript: anywhere in the value, tolerating whitespace between
# the letters ("j a v a s c r i p t :"). Matched against the lowercased value.
ILLEGAL_ATTRIBUTE_VALUE = re.compile(r"(d\s*a\s*t\s*a|j\s*a\s*v\s*a\s*s\s*c\s*r\s*i\s*p\s*t\s*)\s*:")

# href must be a local path or fragment, or an http(s)/mailto URL. The
# character after "/" is optional, so protocol-relative "//host" URLs pass.
LEGAL_HREF_VALUE = re.compile(r"[/#][^/\\]?|mailto://|http://|https://")


@dataclass(frozen=True, slots=True)
class SanitizationPolicy:
    """Allow-lists driving `sanitize`.

    - Tags not in `allowed_tags` are dropped; their text content is kept.
    - Tags in `ignore_tags` (and not allowed) are dropped with all of their
      content, nested tags included.
    - Attributes not in `allowed_attributes` are dropped from allowed tags.

    All names are expected to be ASCII-lowercase, as the tokenizer produces.
    """

    allowed_tags: Collection[str]
    allowed_attributes: Collection[str]
    ignore_tags: Collection[str] = field(default_factory=lambda: IGNORE_TAGS)

    def __post_init__(self) -> None:
        # Normalize to frozensets so the policy stays immutable and hashable.
        for name in ("allowed_tags", "allowed_attributes", "ignore_tags"):
            value = getattr(self, name)
            if isinstance(value, str):
                raise TypeError(f"{name} must be a collection of names, not a string")
            if not isinstance(value, frozenset):
                object.__setattr__(self, name, frozenset(value))

    def with_overrides(
        self,
        allowed_tags: Collection[str] | None = None,
        allowed_attributes: Collection[str] | None = None,
    ) -> SanitizationPolicy:
        changes = {}
        if allowed_tags is not None:
            changes["allowed_tags"] = allowed_tags
        if allowed_attributes is not None:
            changes["allowed_attributes"] = allowed_attributes
        if not changes:
            return self
        return replace(self, **changes)


DEFAULT_POLICY: SanitizationPolicy = SanitizationPolicy(
    allowed_tags=DEFAULT_TAGS,
    allowed_attributes=DEFAULT_ATTRIBUTES,
)


def clean_attributes(attrs: Iterable[tuple[str, str]], allowed: Collection[str]) -> list[tuple[str, str]]:
    """Return the allowed attributes whose values survive the URL checks.

    A value mentioning a data: or javascript: scheme is blanked, an href that
    is not a local path, fragment, mailto:// or http(s):// URL is blanked, and
    blank attributes are dropped. Order is preserved.
    """
    cleaned = []
    for name, value in attrs:
        if name not in allowed:
            continue
        lowered = value.lower()
        if ILLEGAL_ATTRIBUTE_VALUE.search(lowered):
            value = ""
        if name == "href" and not LEGAL_HREF_VALUE.match(lowered):
            value = ""
        if value:
            cleaned.append((name, value))
    return cleaned


class HTMLSanitizer:
    """Token sink that accumulates sanitized markup."""

    __slots__ = ("ignoring", "out", "policy")

    def __init__(self, policy: SanitizationPolicy = DEFAULT_POLICY) -> None:
        self.policy = policy
        self.out: list[str] = []
        self.ignoring: str | None = None

    def process_token(self, token: object) -> None:
        match token:
            case Tag(kind=Tag.END):
                self._end_tag(token)
            case Tag(self_closing=True):
                self._self_closing_tag(token)
            case Tag():
                self._start_tag(token)
            case CharacterTokens(data=data):
                if self.ignoring is None:
                    self.out.append(escape_html(data))
            case CommentToken() | DoctypeToken() | EOFToken():
                pass

    def _clean_tag_attributes(self, tag: Tag) -> list[str]:
        flat: list[str] = []
        for pair in clean_attributes(tag.attr_pairs(), self.policy.allowed_attributes):
            flat.extend(pair)
        return flat

    def _start_tag(self, tag: Tag) -> None:
        name = tag.name
        if self.ignoring is None and name in self.policy.allowed_tags:
            self.out.append(serialize_start_tag(name, self._clean_tag_attributes(tag)))
        elif name in self.policy.ignore_tags and self.ignoring is None:
            # Single slot: an ignore-tag nested in another one does not
            # replace the outer name.
            self.ignoring = name

    def _self_closing_tag(self, tag: Tag) -> None:
        name = tag.name
        if self.ignoring is None and name in self.policy.allowed_tags:
            self.out.append(serialize_start_tag(name, self._clean_tag_attributes(tag), self_closing=True))
        elif name == self.ignoring:
            # Likely unintended: a self-closing tag is not an end tag, but it
            # ends suppression the same way and existing output depends on it.
            self.ignoring = None

    def _end_tag(self, tag: Tag) -> None:
        name = tag.name
        if self.ignoring is None and name in self.policy.allowed_tags:
            self.out.append(serialize_end_tag(name))
        elif name == self.ignoring:
            self.ignoring = None

    def result(self) -> str:
        return "".join(self.out)


def sanitize(
    html: str | bytes,
    allowed_tags: Collection[str] | None = None,
    allowed_attributes: Collection[str] | None = None,
    *,
    policy: SanitizationPolicy = DEFAULT_POLICY,
    strict: bool = False,
) -> str:
    """Return html with only allow-listed tags and attributes left.

    `allowed_tags` / `allowed_attributes` replace the policy's lists for this
    call. Bytes input must be UTF-8.

    Raises `TokenizerError` when the input cannot be decoded and, with
    `strict=True`, `StrictModeError` on the first parse error. No partial
    output is returned in either case.
    """
    policy = policy.with_overrides(allowed_tags, allowed_attributes)
    sink = HTMLSanitizer(policy)
    # A BOM anywhere in the input is kept as text.
    Tokenizer(sink, TokenizerOpts(strict=strict, discard_bom=False)).run(html)
    return sink.result()
