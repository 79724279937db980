import re

from .constants import RAWTEXT_ELEMENTS, RCDATA_ELEMENTS
from .entities import decode_entities_in_text
from .tokens import (
    CharacterTokens,
    CommentToken,
    DoctypeToken,
    EOFToken,
    ParseError,
    Tag,
)

_ATTR_VALUE_DOUBLE_TERMINATORS = '"\0'
_ATTR_VALUE_SINGLE_TERMINATORS = "'\0"
_ATTR_VALUE_UNQUOTED_TERMINATORS = "\t\n\f >\"'<=`\0"
_ATTR_NAME_TERMINATORS = "\t\n\f />=\0\"'<"
_TAG_NAME_TERMINATORS = "\t\n\f />\0"
_WHITESPACE = ("\t", "\n", "\f", " ")
_ASCII_LOWER_TABLE = str.maketrans({chr(code): chr(code + 32) for code in range(65, 91)})

_ATTR_VALUE_DOUBLE_PATTERN = re.compile(f"[{re.escape(_ATTR_VALUE_DOUBLE_TERMINATORS)}]")
_ATTR_VALUE_SINGLE_PATTERN = re.compile(f"[{re.escape(_ATTR_VALUE_SINGLE_TERMINATORS)}]")
_ATTR_VALUE_UNQUOTED_PATTERN = re.compile(f"[{re.escape(_ATTR_VALUE_UNQUOTED_TERMINATORS)}]")
_ATTR_NAME_TERMINATOR_PATTERN = re.compile(f"[{re.escape(_ATTR_NAME_TERMINATORS)}]")
_TAG_NAME_TERMINATOR_PATTERN = re.compile(f"[{re.escape(_TAG_NAME_TERMINATORS)}]")
_COMMENT_END_PATTERN = re.compile(r"--!?>")

# "</script" only closes raw text when followed by whitespace, "/" or ">".
_RAWTEXT_END_PATTERNS = {
    name: re.compile("</" + re.escape(name) + r"(?=[\t\n\f />])", re.IGNORECASE) for name in RAWTEXT_ELEMENTS
}


def _is_ascii_alpha(c):
    return ("a" <= c <= "z") or ("A" <= c <= "Z")


class TokenizerError(Exception):
    """Raised when the input cannot be tokenized at all."""

    def __init__(self, error):
        self.error = error
        super().__init__(str(error))


class StrictModeError(TokenizerError):
    """Raised on the first parse error when the tokenizer runs in strict mode."""


class TokenizerOpts:
    __slots__ = ("collect_errors", "discard_bom", "strict")

    def __init__(self, strict=False, collect_errors=False, discard_bom=True):
        self.strict = bool(strict)
        self.collect_errors = bool(collect_errors)
        self.discard_bom = bool(discard_bom)


class Tokenizer:
    """Lexical HTML tokenizer.

    Feeds tokens to ``sink.process_token`` one at a time. There is no tree
    construction: the only context kept between tokens is the raw text
    element opened by the last start tag.
    """

    DATA = 0
    TAG_OPEN = 1
    END_TAG_OPEN = 2
    TAG_NAME = 3
    BEFORE_ATTRIBUTE_NAME = 4
    ATTRIBUTE_NAME = 5
    AFTER_ATTRIBUTE_NAME = 6
    BEFORE_ATTRIBUTE_VALUE = 7
    ATTRIBUTE_VALUE_DOUBLE = 8
    ATTRIBUTE_VALUE_SINGLE = 9
    ATTRIBUTE_VALUE_UNQUOTED = 10
    AFTER_ATTRIBUTE_VALUE_QUOTED = 11
    SELF_CLOSING_START_TAG = 12
    MARKUP_DECLARATION_OPEN = 13
    COMMENT = 14
    BOGUS_COMMENT = 15
    DOCTYPE = 16
    RAWTEXT = 17
    PLAINTEXT = 18

    __slots__ = (
        "buffer",
        "current_attr_name",
        "current_attr_names",
        "current_attr_value",
        "current_char",
        "current_comment",
        "current_tag_attrs",
        "current_tag_kind",
        "current_tag_name",
        "current_tag_self_closing",
        "errors",
        "length",
        "opts",
        "pos",
        "rawtext_tag_name",
        "sink",
        "state",
        "text_buffer",
    )

    def __init__(self, sink, opts=None):
        self.sink = sink
        self.opts = opts or TokenizerOpts()
        self.errors = []

        self.state = self.DATA
        self.buffer = ""
        self.length = 0
        self.pos = 0
        self.current_char = ""

        self.text_buffer = []
        self.current_tag_name = []
        self.current_tag_attrs = []  # flat list [name1, value1, ...]
        self.current_attr_names = []
        self.current_attr_name = []
        self.current_attr_value = []
        self.current_tag_self_closing = False
        self.current_tag_kind = Tag.START
        self.current_comment = []
        self.rawtext_tag_name = None

    def run(self, html):
        if isinstance(html, (bytes, bytearray)):
            try:
                html = bytes(html).decode("utf-8")
            except UnicodeDecodeError as exc:
                raise TokenizerError(
                    ParseError("invalid-byte-sequence", message=f"Input is not valid UTF-8 at byte {exc.start}")
                ) from exc

        html = html or ""
        if html and html[0] == "\ufeff" and self.opts.discard_bom:
            html = html[1:]
        if "\r" in html:
            html = html.replace("\r\n", "\n").replace("\r", "\n")

        self.buffer = html
        self.length = len(html)
        self.pos = 0
        self.current_char = ""
        self.errors = []
        self.text_buffer.clear()
        self.current_comment.clear()
        self._start_tag(Tag.START)
        self.rawtext_tag_name = None
        self.state = self.DATA

        while True:
            state = self.state
            if state == self.DATA:
                if self._state_data():
                    break
            elif state == self.TAG_OPEN:
                if self._state_tag_open():
                    break
            elif state == self.END_TAG_OPEN:
                if self._state_end_tag_open():
                    break
            elif state == self.TAG_NAME:
                if self._state_tag_name():
                    break
            elif state == self.BEFORE_ATTRIBUTE_NAME:
                if self._state_before_attribute_name():
                    break
            elif state == self.ATTRIBUTE_NAME:
                if self._state_attribute_name():
                    break
            elif state == self.AFTER_ATTRIBUTE_NAME:
                if self._state_after_attribute_name():
                    break
            elif state == self.BEFORE_ATTRIBUTE_VALUE:
                if self._state_before_attribute_value():
                    break
            elif state == self.ATTRIBUTE_VALUE_DOUBLE:
                if self._state_attribute_value_quoted('"', _ATTR_VALUE_DOUBLE_PATTERN):
                    break
            elif state == self.ATTRIBUTE_VALUE_SINGLE:
                if self._state_attribute_value_quoted("'", _ATTR_VALUE_SINGLE_PATTERN):
                    break
            elif state == self.ATTRIBUTE_VALUE_UNQUOTED:
                if self._state_attribute_value_unquoted():
                    break
            elif state == self.AFTER_ATTRIBUTE_VALUE_QUOTED:
                if self._state_after_attribute_value_quoted():
                    break
            elif state == self.SELF_CLOSING_START_TAG:
                if self._state_self_closing_start_tag():
                    break
            elif state == self.MARKUP_DECLARATION_OPEN:
                if self._state_markup_declaration_open():
                    break
            elif state == self.COMMENT:
                if self._state_comment():
                    break
            elif state == self.BOGUS_COMMENT:
                if self._state_bogus_comment():
                    break
            elif state == self.DOCTYPE:
                if self._state_doctype():
                    break
            elif state == self.RAWTEXT:
                if self._state_rawtext():
                    break
            elif state == self.PLAINTEXT:
                if self._state_plaintext():
                    break
            else:
                # Unknown state fallback to data.
                self.state = self.DATA

    # ---------------------
    # State handlers
    # ---------------------

    def _state_data(self):
        buffer = self.buffer
        pos = self.pos
        lt_index = buffer.find("<", pos)
        if lt_index == -1:
            if pos < self.length:
                self.text_buffer.append(buffer[pos:])
            self.pos = self.length
            self._emit_eof()
            return True
        if lt_index > pos:
            self.text_buffer.append(buffer[pos:lt_index])
        self.pos = lt_index + 1
        self.state = self.TAG_OPEN
        return False

    def _state_tag_open(self):
        c = self._get_char()
        if c is None:
            self._emit_error("eof-before-tag-name")
            self.text_buffer.append("<")
            self._emit_eof()
            return True
        if c == "!":
            self.state = self.MARKUP_DECLARATION_OPEN
            return False
        if c == "/":
            self.state = self.END_TAG_OPEN
            return False
        if c == "?":
            self._emit_error("unexpected-question-mark-instead-of-tag-name")
            self.current_comment.clear()
            self._reconsume_current()
            self.state = self.BOGUS_COMMENT
            return False
        if _is_ascii_alpha(c):
            self._start_tag(Tag.START)
            self._reconsume_current()
            self.state = self.TAG_NAME
            return False

        self._emit_error("invalid-first-character-of-tag-name")
        self.text_buffer.append("<")
        self._reconsume_current()
        self.state = self.DATA
        return False

    def _state_end_tag_open(self):
        c = self._get_char()
        if c is None:
            self._emit_error("eof-before-tag-name")
            self.text_buffer.append("</")
            self._emit_eof()
            return True
        if _is_ascii_alpha(c):
            self._start_tag(Tag.END)
            self._reconsume_current()
            self.state = self.TAG_NAME
            return False
        if c == ">":
            self._emit_error("missing-end-tag-name")
            self.state = self.DATA
            return False

        self._emit_error("invalid-first-character-of-tag-name")
        self.current_comment.clear()
        self._reconsume_current()
        self.state = self.BOGUS_COMMENT
        return False

    def _state_tag_name(self):
        while True:
            self._consume_run(_TAG_NAME_TERMINATOR_PATTERN, self.current_tag_name, lower=True)
            c = self._get_char()
            if c is None:
                # The incomplete tag is discarded, not emitted as text.
                self._emit_error("eof-in-tag")
                self._emit_eof()
                return True
            if c in _WHITESPACE:
                self.state = self.BEFORE_ATTRIBUTE_NAME
                return False
            if c == "/":
                self.state = self.SELF_CLOSING_START_TAG
                return False
            if c == ">":
                self._emit_current_tag()
                return False
            self._emit_error("unexpected-null-character")
            self.current_tag_name.append("\ufffd")

    def _state_before_attribute_name(self):
        while True:
            c = self._get_char()
            if c is None:
                self._emit_error("eof-in-tag")
                self._emit_eof()
                return True
            if c in _WHITESPACE:
                continue
            if c == "/":
                self.state = self.SELF_CLOSING_START_TAG
                return False
            if c == ">":
                self._emit_current_tag()
                return False
            self._start_attribute()
            if c == "=":
                self._emit_error("unexpected-equals-sign-before-attribute-name")
                self.current_attr_name.append(c)
            else:
                self._reconsume_current()
            self.state = self.ATTRIBUTE_NAME
            return False

    def _state_attribute_name(self):
        while True:
            self._consume_run(_ATTR_NAME_TERMINATOR_PATTERN, self.current_attr_name, lower=True)
            c = self._get_char()
            if c is None:
                self._emit_error("eof-in-tag")
                self._emit_eof()
                return True
            if c in _WHITESPACE:
                self.state = self.AFTER_ATTRIBUTE_NAME
                return False
            if c == "/":
                self._finish_attribute()
                self.state = self.SELF_CLOSING_START_TAG
                return False
            if c == "=":
                self.state = self.BEFORE_ATTRIBUTE_VALUE
                return False
            if c == ">":
                self._emit_current_tag()
                return False
            if c == "\0":
                self._emit_error("unexpected-null-character")
                self.current_attr_name.append("\ufffd")
                continue
            # '"', "'" or "<" become part of the name.
            self._emit_error("unexpected-character-in-attribute-name")
            self.current_attr_name.append(c)

    def _state_after_attribute_name(self):
        while True:
            c = self._get_char()
            if c is None:
                self._emit_error("eof-in-tag")
                self._emit_eof()
                return True
            if c in _WHITESPACE:
                continue
            if c == "/":
                self._finish_attribute()
                self.state = self.SELF_CLOSING_START_TAG
                return False
            if c == "=":
                self.state = self.BEFORE_ATTRIBUTE_VALUE
                return False
            if c == ">":
                self._emit_current_tag()
                return False
            self._finish_attribute()
            self._start_attribute()
            self._reconsume_current()
            self.state = self.ATTRIBUTE_NAME
            return False

    def _state_before_attribute_value(self):
        while True:
            c = self._get_char()
            if c is None:
                self._emit_error("eof-in-tag")
                self._emit_eof()
                return True
            if c in _WHITESPACE:
                continue
            if c == '"':
                self.state = self.ATTRIBUTE_VALUE_DOUBLE
                return False
            if c == "'":
                self.state = self.ATTRIBUTE_VALUE_SINGLE
                return False
            if c == ">":
                self._emit_error("missing-attribute-value")
                self._emit_current_tag()
                return False
            self._reconsume_current()
            self.state = self.ATTRIBUTE_VALUE_UNQUOTED
            return False

    def _state_attribute_value_quoted(self, quote, stop_pattern):
        while True:
            self._consume_run(stop_pattern, self.current_attr_value)
            c = self._get_char()
            if c is None:
                self._emit_error("eof-in-tag")
                self._emit_eof()
                return True
            if c == quote:
                self._finish_attribute()
                self.state = self.AFTER_ATTRIBUTE_VALUE_QUOTED
                return False
            self._emit_error("unexpected-null-character")
            self.current_attr_value.append("\ufffd")

    def _state_attribute_value_unquoted(self):
        while True:
            self._consume_run(_ATTR_VALUE_UNQUOTED_PATTERN, self.current_attr_value)
            c = self._get_char()
            if c is None:
                self._emit_error("eof-in-tag")
                self._emit_eof()
                return True
            if c in _WHITESPACE:
                self._finish_attribute()
                self.state = self.BEFORE_ATTRIBUTE_NAME
                return False
            if c == ">":
                self._emit_current_tag()
                return False
            if c == "\0":
                self._emit_error("unexpected-null-character")
                self.current_attr_value.append("\ufffd")
                continue
            self._emit_error("unexpected-character-in-unquoted-attribute-value")
            self.current_attr_value.append(c)

    def _state_after_attribute_value_quoted(self):
        c = self._get_char()
        if c is None:
            self._emit_error("eof-in-tag")
            self._emit_eof()
            return True
        if c in _WHITESPACE:
            self.state = self.BEFORE_ATTRIBUTE_NAME
            return False
        if c == "/":
            self.state = self.SELF_CLOSING_START_TAG
            return False
        if c == ">":
            self._emit_current_tag()
            return False
        self._emit_error("missing-whitespace-between-attributes")
        self._reconsume_current()
        self.state = self.BEFORE_ATTRIBUTE_NAME
        return False

    def _state_self_closing_start_tag(self):
        c = self._get_char()
        if c is None:
            self._emit_error("eof-in-tag")
            self._emit_eof()
            return True
        if c == ">":
            self.current_tag_self_closing = True
            self._emit_current_tag()
            return False
        self._emit_error("unexpected-solidus-in-tag")
        self._reconsume_current()
        self.state = self.BEFORE_ATTRIBUTE_NAME
        return False

    def _state_markup_declaration_open(self):
        if self._consume_if("--"):
            self.state = self.COMMENT
            return False
        if self._consume_case_insensitive("DOCTYPE"):
            self.state = self.DOCTYPE
            return False
        # CDATA sections are bogus comments outside foreign content.
        self._emit_error("incorrectly-opened-comment")
        self.current_comment.clear()
        self.state = self.BOGUS_COMMENT
        return False

    def _state_comment(self):
        buffer = self.buffer
        pos = self.pos
        # "<!-->" and "<!--->" close the comment right away.
        for abrupt in (">", "->"):
            if buffer.startswith(abrupt, pos):
                self._emit_error("abrupt-closing-of-empty-comment")
                self.pos = pos + len(abrupt)
                self._emit_comment("")
                self.state = self.DATA
                return False
        match = _COMMENT_END_PATTERN.search(buffer, pos)
        if match is None:
            self.pos = self.length
            self._emit_error("eof-in-comment")
            self._emit_comment(buffer[pos:])
            self._emit_eof()
            return True
        if match.group() == "--!>":
            self._emit_error("incorrectly-closed-comment")
        self.pos = match.end()
        self._emit_comment(buffer[pos : match.start()])
        self.state = self.DATA
        return False

    def _state_bogus_comment(self):
        buffer = self.buffer
        pos = self.pos
        gt_index = buffer.find(">", pos)
        end = self.length if gt_index == -1 else gt_index
        self.current_comment.append(buffer[pos:end])
        data = "".join(self.current_comment)
        self.current_comment.clear()
        self._emit_comment(data)
        if gt_index == -1:
            self.pos = self.length
            self._emit_eof()
            return True
        self.pos = gt_index + 1
        self.state = self.DATA
        return False

    def _state_doctype(self):
        buffer = self.buffer
        pos = self.pos
        gt_index = buffer.find(">", pos)
        if gt_index == -1:
            self.pos = self.length
            self._emit_error("eof-in-doctype")
            self._flush_text()
            self._emit_token(DoctypeToken(buffer[pos:].strip()))
            self._emit_eof()
            return True
        self.pos = gt_index + 1
        self._flush_text()
        self._emit_token(DoctypeToken(buffer[pos:gt_index].strip()))
        self.state = self.DATA
        return False

    def _state_rawtext(self):
        name = self.rawtext_tag_name
        decode = name in RCDATA_ELEMENTS
        match = _RAWTEXT_END_PATTERNS[name].search(self.buffer, self.pos)
        if match is None:
            if self.pos < self.length:
                self.text_buffer.append(self.buffer[self.pos :])
            self.pos = self.length
            self._flush_text(decode=decode)
            self._emit_eof()
            return True
        if match.start() > self.pos:
            self.text_buffer.append(self.buffer[self.pos : match.start()])
        self._flush_text(decode=decode)
        # Resume right after "</" so the end tag is tokenized normally.
        self.pos = match.start() + 2
        self.rawtext_tag_name = None
        self.state = self.END_TAG_OPEN
        return False

    def _state_plaintext(self):
        if self.pos < self.length:
            self.text_buffer.append(self.buffer[self.pos :])
        self.pos = self.length
        self._flush_text(decode=False)
        self._emit_eof()
        return True

    # ---------------------
    # Low-level helpers
    # ---------------------

    def _get_char(self):
        if self.pos >= self.length:
            self.current_char = None
            return None
        c = self.buffer[self.pos]
        self.pos += 1
        self.current_char = c
        return c

    def _reconsume_current(self):
        if self.current_char is not None:
            self.pos -= 1

    def _consume_run(self, stop_pattern, target, lower=False):
        pos = self.pos
        if pos >= self.length:
            return
        match = stop_pattern.search(self.buffer, pos)
        end = match.start() if match else self.length
        if end == pos:
            return
        chunk = self.buffer[pos:end]
        target.append(chunk.translate(_ASCII_LOWER_TABLE) if lower else chunk)
        self.pos = end

    def _consume_if(self, literal):
        end = self.pos + len(literal)
        if end > self.length:
            return False
        if self.buffer[self.pos : end] != literal:
            return False
        self.pos = end
        return True

    def _consume_case_insensitive(self, literal):
        end = self.pos + len(literal)
        if end > self.length:
            return False
        if self.buffer[self.pos : end].lower() != literal.lower():
            return False
        self.pos = end
        return True

    def _start_tag(self, kind):
        self.current_tag_kind = kind
        self.current_tag_name.clear()
        self.current_tag_attrs = []
        self.current_attr_names.clear()
        self.current_attr_name.clear()
        self.current_attr_value.clear()
        self.current_tag_self_closing = False

    def _start_attribute(self):
        self.current_attr_name.clear()
        self.current_attr_value.clear()

    def _finish_attribute(self):
        if not self.current_attr_name:
            self.current_attr_value.clear()
            return
        name = "".join(self.current_attr_name)
        value = "".join(self.current_attr_value)
        self.current_attr_name.clear()
        self.current_attr_value.clear()
        if "&" in value:
            value = decode_entities_in_text(value, in_attribute=True)
        if name in self.current_attr_names:
            # First occurrence wins.
            self._emit_error("duplicate-attribute")
            return
        self.current_attr_names.append(name)
        self.current_tag_attrs.extend((name, value))

    def _flush_text(self, decode=True):
        if not self.text_buffer:
            return
        data = "".join(self.text_buffer)
        self.text_buffer.clear()
        if "\0" in data:
            self._emit_error("unexpected-null-character")
            data = data.replace("\0", "\ufffd")
        if decode and "&" in data:
            data = decode_entities_in_text(data)
        if data:
            self._emit_token(CharacterTokens(data))

    def _emit_current_tag(self):
        self._finish_attribute()
        name = "".join(self.current_tag_name)
        tag = Tag(self.current_tag_kind, name, self.current_tag_attrs, self.current_tag_self_closing)
        self.state = self.DATA
        if tag.kind == Tag.START and not tag.self_closing and name in RAWTEXT_ELEMENTS:
            self.rawtext_tag_name = name
            self.state = self.PLAINTEXT if name == "plaintext" else self.RAWTEXT
        self._flush_text()
        self._emit_token(tag)
        self._start_tag(Tag.START)

    def _emit_comment(self, data):
        self._flush_text()
        if "\0" in data:
            data = data.replace("\0", "\ufffd")
        self._emit_token(CommentToken(data))

    def _emit_eof(self):
        self._flush_text()
        self._emit_token(EOFToken())

    def _emit_token(self, token):
        self.sink.process_token(token)

    def _emit_error(self, code):
        opts = self.opts
        if not (opts.strict or opts.collect_errors):
            return
        pos = self.pos
        line = self.buffer.count("\n", 0, pos) + 1
        column = pos - self.buffer.rfind("\n", 0, pos)
        error = ParseError(code, line=line, column=column)
        if opts.strict:
            raise StrictModeError(error)
        self.errors.append(error)


class TokenCollector:
    """Sink that records every token it receives."""

    __slots__ = ("tokens",)

    def __init__(self):
        self.tokens = []

    def process_token(self, token):
        self.tokens.append(token)


def tokenize(html, opts=None):
    """Return the full token list for html, ending with an EOFToken."""
    sink = TokenCollector()
    Tokenizer(sink, opts).run(html)
    return sink.tokens
