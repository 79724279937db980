"""Tests for the lexical tokenizer."""

import unittest

from webutil import ParseError, StrictModeError, TokenizerError, TokenizerOpts, tokenize
from webutil.serialize import to_html
from webutil.tokenizer import TokenCollector, Tokenizer
from webutil.tokens import CharacterTokens, CommentToken, DoctypeToken, EOFToken, Tag


def _text(tokens):
    return "".join(token.data for token in tokens if isinstance(token, CharacterTokens))


class TestTags(unittest.TestCase):
    def test_start_and_end_tags_are_lowercased(self):
        tokens = tokenize("<P Class=x>Hi</P>")
        assert len(tokens) == 4
        start, text, end, eof = tokens
        assert isinstance(start, Tag)
        assert start.kind == Tag.START
        assert start.name == "p"
        assert start.attr_pairs() == [("class", "x")]
        assert text.data == "Hi"
        assert end.kind == Tag.END
        assert end.name == "p"
        assert isinstance(eof, EOFToken)

    def test_stream_ends_with_single_eof(self):
        tokens = tokenize("")
        assert len(tokens) == 1
        assert isinstance(tokens[0], EOFToken)

    def test_duplicate_attribute_keeps_first(self):
        tag = tokenize('<a href="/x" href="/y">')[0]
        assert tag.attr_pairs() == [("href", "/x")]

    def test_attribute_quoting_styles(self):
        tag = tokenize("<img alt='one' title=\"two\" id=three data-x>")[0]
        assert tag.attr_pairs() == [("alt", "one"), ("title", "two"), ("id", "three"), ("data-x", "")]

    def test_missing_whitespace_between_attributes(self):
        tag = tokenize('<img alt="a"src="b">')[0]
        assert tag.attr_pairs() == [("alt", "a"), ("src", "b")]

    def test_self_closing_flag(self):
        tag = tokenize('<br class="x"/>')[0]
        assert tag.self_closing
        assert tag.attr_pairs() == [("class", "x")]

    def test_attribute_entities_use_legacy_rule(self):
        tag = tokenize('<a title="x&amp;y" href="?a=1&copy=2">')[0]
        assert tag.attr_pairs() == [("title", "x&y"), ("href", "?a=1&copy=2")]

    def test_legacy_reference_before_non_ascii_letter(self):
        tag = tokenize('<a title="&ampé" alt="&ampx">')[0]
        assert tag.attr_pairs() == [("title", "&é"), ("alt", "&ampx")]

    def test_incomplete_tag_at_eof_is_dropped(self):
        tokens = tokenize("a<b")
        assert [type(token) for token in tokens] == [CharacterTokens, EOFToken]
        assert tokens[0].data == "a"

    def test_lone_less_than_is_text(self):
        tokens = tokenize("a < b")
        assert _text(tokens) == "a < b"
        assert not any(isinstance(token, Tag) for token in tokens)

    def test_end_tag_without_name_is_dropped(self):
        assert _text(tokenize("a</>b")) == "ab"


class TestText(unittest.TestCase):
    def test_character_references_decoded(self):
        assert _text(tokenize("a &amp; b &lt;c&gt; &#233;&#xE9;")) == "a & b <c> éé"

    def test_unknown_reference_left_alone(self):
        assert _text(tokenize("&bogus; & done")) == "&bogus; & done"

    def test_newlines_normalized(self):
        assert _text(tokenize("a\r\nb\rc")) == "a\nb\nc"

    def test_bom_dropped(self):
        assert _text(tokenize("\ufeffhi")) == "hi"

    def test_bom_kept_when_asked(self):
        assert _text(tokenize("\ufeffhi", TokenizerOpts(discard_bom=False))) == "\ufeffhi"

    def test_null_replaced(self):
        assert _text(tokenize("a\x00b")) == "a\ufffdb"


class TestRawText(unittest.TestCase):
    def test_script_content_is_not_tokenized(self):
        tokens = tokenize("<script>a<b>&amp;</script>x")
        assert [type(token) for token in tokens] == [Tag, CharacterTokens, Tag, CharacterTokens, EOFToken]
        assert tokens[1].data == "a<b>&amp;"
        assert tokens[2].kind == Tag.END
        assert tokens[2].name == "script"

    def test_rcdata_decodes_references(self):
        tokens = tokenize("<title>a &amp; <b></title>")
        assert tokens[1].data == "a & <b>"

    def test_end_tag_match_is_case_insensitive(self):
        tokens = tokenize("<SCRIPT>x</Script >y")
        assert tokens[2].kind == Tag.END
        assert tokens[2].name == "script"
        assert tokens[3].data == "y"

    def test_longer_name_does_not_close(self):
        tokens = tokenize("<script>a</scriptx>b</script>")
        assert tokens[1].data == "a</scriptx>b"

    def test_unterminated_raw_text_runs_to_eof(self):
        tokens = tokenize("<style>p { color: red }")
        assert tokens[1].data == "p { color: red }"
        assert isinstance(tokens[-1], EOFToken)

    def test_self_closing_raw_tag_does_not_switch(self):
        tokens = tokenize("<script/><b>x</b>")
        assert tokens[0].self_closing
        assert tokens[1].name == "b"

    def test_plaintext_runs_to_eof(self):
        tokens = tokenize("<plaintext>a</plaintext><b>")
        assert tokens[1].data == "a</plaintext><b>"
        assert len(tokens) == 3


class TestMarkupDeclarations(unittest.TestCase):
    def test_comment(self):
        tokens = tokenize("a<!-- c -->b")
        assert isinstance(tokens[1], CommentToken)
        assert tokens[1].data == " c "
        assert _text(tokens) == "ab"

    def test_abrupt_comment(self):
        tokens = tokenize("<!-->x<!--->y")
        assert [type(token) for token in tokens][:4] == [CommentToken, CharacterTokens, CommentToken, CharacterTokens]
        assert tokens[0].data == ""
        assert _text(tokens) == "xy"

    def test_unterminated_comment_swallows_rest(self):
        tokens = tokenize("a<!-- <b>x</b>")
        assert tokens[1].data == " <b>x</b>"
        assert _text(tokens) == "a"

    def test_doctype(self):
        token = tokenize("<!DOCTYPE html>")[0]
        assert isinstance(token, DoctypeToken)
        assert token.data == "html"

    def test_processing_instruction_is_bogus_comment(self):
        token = tokenize("<?xml version='1.0'?>")[0]
        assert isinstance(token, CommentToken)
        assert token.data == "?xml version='1.0'?"

    def test_cdata_is_bogus_comment(self):
        tokens = tokenize("<![CDATA[x]]>y")
        assert isinstance(tokens[0], CommentToken)
        assert _text(tokens) == "y"


class TestDecoding(unittest.TestCase):
    def test_bytes_are_utf8(self):
        assert _text(tokenize(b"<b>caf\xc3\xa9</b>")) == "café"

    def test_invalid_bytes_raise(self):
        with self.assertRaises(TokenizerError) as ctx:
            tokenize(b"ok\xff")
        assert isinstance(ctx.exception.error, ParseError)
        assert ctx.exception.error.code == "invalid-byte-sequence"


class TestErrors(unittest.TestCase):
    def _run(self, html, **opts):
        tokenizer = Tokenizer(TokenCollector(), TokenizerOpts(**opts))
        tokenizer.run(html)
        return tokenizer

    def test_no_errors_by_default(self):
        assert self._run("<p>\x00</p>").errors == []

    def test_collect_errors(self):
        errors = self._run("<p>\x00</p>", collect_errors=True).errors
        assert [error.code for error in errors] == ["unexpected-null-character"]
        assert errors[0].line == 1

    def test_error_line_after_newlines(self):
        errors = self._run("a\n\n</>", collect_errors=True).errors
        assert errors[0].code == "missing-end-tag-name"
        assert errors[0].line == 3

    def test_strict_mode_raises_on_first_error(self):
        with self.assertRaises(StrictModeError) as ctx:
            tokenize("<div", TokenizerOpts(strict=True))
        assert ctx.exception.error.code == "eof-in-tag"
        assert isinstance(ctx.exception, TokenizerError)

    def test_strict_mode_accepts_clean_input(self):
        tokens = tokenize('<p class="a">x</p>', TokenizerOpts(strict=True))
        assert len(tokens) == 4


class TestSerialize(unittest.TestCase):
    def test_tokens_serialize_normalized(self):
        html = to_html(tokenize("<P   class = 'x' >a<BR/></p><!--c-->"))
        assert html == '<p class="x">a<br/></p><!--c-->'


if __name__ == "__main__":
    unittest.main()
