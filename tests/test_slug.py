import unittest

from webutil import normalize, slugify_base_name, slugify_name, slugify_path, transliterate
from webutil.slug import ILLEGAL_NAME_CHARS, ILLEGAL_PATH_CHARS, base_name, clean_path
from webutil.transliterations import TRANSLITERATIONS


class TestTransliterate(unittest.TestCase):
    def test_latin(self):
        assert transliterate("Étienne's Café") == "Etienne's Cafe"
        assert transliterate("Straße") == "Strasse"

    def test_cyrillic(self):
        assert transliterate("Привет") == "Privet"

    def test_unknown_characters_kept(self):
        assert transliterate("日本 ok") == "日本 ok"

    def test_table_values_are_ascii(self):
        for key, value in TRANSLITERATIONS.items():
            assert len(key) == 1
            assert value.isascii()


class TestNormalize(unittest.TestCase):
    def test_separators_become_single_dash(self):
        assert normalize("  a & b  ", ILLEGAL_NAME_CHARS) == "a-b"
        assert normalize("a_b=c+d:e", ILLEGAL_NAME_CHARS) == "a-b-c-d-e"

    def test_illegal_characters_removed(self):
        assert normalize("a/b?c~d", ILLEGAL_NAME_CHARS) == "abcd"
        assert normalize("a/b?c~d", ILLEGAL_PATH_CHARS) == "a/bc~d"

    def test_may_be_empty(self):
        assert normalize("%%%", ILLEGAL_NAME_CHARS) == ""


class TestPathHelpers(unittest.TestCase):
    def test_clean_path(self):
        assert clean_path("") == "."
        assert clean_path("a/./b//c/") == "a/b/c"
        assert clean_path("a/../b") == "b"
        assert clean_path("//x") == "/x"

    def test_base_name(self):
        assert base_name("") == "."
        assert base_name("///") == "/"
        assert base_name("a/b/") == "b"
        assert base_name("file.txt") == "file.txt"


class TestSlugifyPath(unittest.TestCase):
    def test_parent_references_and_accents(self):
        assert slugify_path("../../Étienne's Café.txt") == "etiennes-cafe.txt"

    def test_relative_result(self):
        assert slugify_path("/Foo Bar/Baz_Qux") == "foo-bar/baz-qux"
        assert slugify_path("a/./b//c/") == "a/b/c"

    def test_dots_rejoined_by_removal_are_collapsed(self):
        slug = slugify_path(".?./etc/passwd")
        assert ".." not in slug
        assert slug == "./etc/passwd"


class TestSlugifyName(unittest.TestCase):
    def test_base_name_only(self):
        assert slugify_name("a/b/C D.PDF") == "c-d.pdf"
        assert slugify_name("dir/") == "dir"

    def test_empty_results(self):
        assert slugify_name("...") == ""
        assert slugify_name("%%%") == ""


class TestSlugifyBaseName(unittest.TestCase):
    def test_dots_and_slashes_become_dashes(self):
        assert slugify_base_name("My.File/Name.txt") == "My-File-Name-txt"

    def test_no_path_cleaning(self):
        assert slugify_base_name("../x") == "-x"


if __name__ == "__main__":
    unittest.main()
