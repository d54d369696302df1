"""
Tests for reserved-word classification.
"""

import unittest

from serpent.lexer import KEYWORDS, Scanner, TokenKind, classify, is_keyword


RESERVED_WORDS = [
    "and", "as", "assert", "async", "await", "break", "class", "continue",
    "def", "del", "elif", "else", "except", "false", "finally", "for",
    "from", "global", "if", "import", "in", "is", "lambda", "none",
    "nonlocal", "not", "or", "pass", "raise", "return", "true", "try",
    "while", "with", "yield",
]


class TestKeywordTable(unittest.TestCase):

    def test_table_holds_exactly_the_reserved_words(self):
        self.assertEqual(sorted(KEYWORDS), sorted(RESERVED_WORDS))

    def test_each_word_maps_to_its_own_kind(self):
        for word in RESERVED_WORDS:
            with self.subTest(word=word):
                kind = classify(word)
                self.assertIs(kind, TokenKind["KW_" + word.upper()])
                self.assertTrue(kind.is_keyword)
                self.assertTrue(is_keyword(word))

    def test_non_keywords_are_identifiers(self):
        for text in ["x", "iff", "classy", "_if", "if_", "print", "None", "True", "IF", "elif2", ""]:
            with self.subTest(text=text):
                self.assertIs(classify(text), TokenKind.IDENTIFIER)
                self.assertFalse(is_keyword(text))

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            KEYWORDS["let"] = TokenKind.IDENTIFIER


class TestKeywordScanning(unittest.TestCase):

    def test_scanning_each_keyword(self):
        for word in RESERVED_WORDS:
            with self.subTest(word=word):
                tokens = Scanner(word).tokenize()
                self.assertEqual(len(tokens), 2)
                self.assertIs(tokens[0].kind, classify(word))
                self.assertEqual(tokens[0].text, word)

    def test_maximal_munch_over_identifier_characters(self):
        tokens = Scanner("ifx if_x x1if if").tokenize()
        self.assertEqual(
            [t.kind for t in tokens[:-1]],
            [TokenKind.IDENTIFIER, TokenKind.IDENTIFIER, TokenKind.IDENTIFIER, TokenKind.KW_IF],
        )
        self.assertEqual([t.text for t in tokens[:-1]], ["ifx", "if_x", "x1if", "if"])

    def test_literal_keywords_carry_values(self):
        tokens = Scanner("true false none").tokenize()
        self.assertEqual([t.value for t in tokens[:-1]], [True, False, None])
        self.assertTrue(all(t.is_literal for t in tokens[:-1]))

    def test_underscore_and_unicode_identifiers(self):
        tokens = Scanner("_private __dunder__ café x²").tokenize()
        self.assertEqual(
            [t.text for t in tokens[:-1]], ["_private", "__dunder__", "café", "x²"]
        )
        self.assertTrue(all(t.kind is TokenKind.IDENTIFIER for t in tokens[:-1]))


if __name__ == "__main__":
    unittest.main()
