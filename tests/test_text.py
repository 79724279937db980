import unittest

from webutil import to_plain_text
from webutil.text import strip_tags


class TestStripTags(unittest.TestCase):
    def test_strip_tags(self):
        assert strip_tags("a<b>c</b>d") == "acd"

    def test_unbalanced_brackets(self):
        assert strip_tags("a>b") == "ab"
        assert strip_tags("a<b") == "a"


class TestToPlainText(unittest.TestCase):
    def test_text_without_brackets_is_untouched(self):
        assert to_plain_text("a &amp; b\n") == "a &amp; b\n"
        assert to_plain_text("") == ""

    def test_paragraphs_and_breaks_become_newlines(self):
        assert to_plain_text("<p>Hello</p><p>World</p>") == "Hello\nWorld\n"
        assert to_plain_text("a<br>b<br />c<br/>d</br>e") == "a\nb\nc\nd\ne"

    def test_source_newlines_dropped(self):
        assert to_plain_text("<pre>a\nb</pre>") == "ab"

    def test_typographic_quotes_flattened(self):
        html = "<b>&#8220;hi&#8221; &quot;x&quot; it&#8217;s &#8216;y&apos;</b>"
        assert to_plain_text(html) == "\"hi\" \"x\" it's 'y'"

    def test_nbsp_becomes_space(self):
        assert to_plain_text("<i>a&nbsp;b</i>") == "a b"

    def test_decoded_markup_stays_escaped(self):
        assert to_plain_text("<b>&lt;script&gt;</b>") == "&lt;script&gt;"

    def test_ampersand_before_space_is_literal(self):
        assert to_plain_text("<b>Tom &amp; Jerry</b>") == "Tom & Jerry"
        assert to_plain_text("<b>a&amp;b</b>") == "a&amp;b"

    def test_double_escaped_ampersand_before_space(self):
        assert to_plain_text("<b>a &amp;amp; b</b>") == "a & b"

    def test_line_break_example(self):
        assert to_plain_text("Line1<br>Line2") == "Line1\nLine2"

    def test_legacy_reference_before_non_ascii_letter(self):
        assert to_plain_text("<b>&ampé</b>") == "&amp;é"

    def test_null_replaced(self):
        assert to_plain_text("<b>\x00</b>") == "\ufffd"


if __name__ == "__main__":
    unittest.main()
