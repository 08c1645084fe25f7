"""
Test suite for the lingparse parser.

Tests cover:
- Noun phrases, noun lists and case markers
- Condition elements and conditions
- Variable and predicate declarations
- Imports
- Statement sequencing and whole programs
- Syntax errors and their diagnostics
"""

import os
import sys
import tempfile
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from lingparse.lexer import Token, Reserved, Preposition, tokenize_string
from lingparse.parser import (
    Parser, parse_string, parse_file,
    Program, Identifier, StringLiteral, Noun, Case, NounsWithCase, Verb,
    CondElem, Cond, VarDecl, PredicateDecl, Import, ASTNodeType,
    ParseError, EndOfFileError, UnexpectedTokenError
)


PREDICATE_SOURCE = (
    "nert ad ektir'st es_tydivexy-o : "
    "ektir mol cecioj 4 ad 204 mal nert mol cecioj 24 ad 154."
)


def parser_for(source: str) -> Parser:
    return Parser(tokenize_string(source, "<test>"), "<test>")


def noun(*names: str) -> Noun:
    """Noun built from bare identifiers; the last one is the head."""
    return Noun.from_primaries([Identifier(name) for name in names])


class TestNouns(unittest.TestCase):
    """Test cases for primary nouns and nouns."""

    def test_primary_identifier(self):
        parser = parser_for("xakant")
        self.assertEqual(parser.parse_primary_noun(), Identifier("xakant"))
        self.assertTrue(parser.is_at_end())

    def test_primary_string_literal(self):
        node = parser_for("<selsurle>").parse_primary_noun()
        self.assertEqual(node, StringLiteral("<selsurle>"))
        self.assertEqual(node.contents, "selsurle")

    def test_primary_rejects_keyword(self):
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parser_for("es").parse_primary_noun()
        self.assertEqual(ctx.exception.expected, "identifier or string literal")
        self.assertEqual(ctx.exception.actual, Token.keyword(Reserved.ES))

    def test_noun_with_modifier(self):
        parser = parser_for("jerldir'd xakant")
        result = parser.parse_noun()
        self.assertEqual(result, Noun([Identifier("jerldir")], Identifier("xakant")))
        self.assertTrue(parser.is_at_end())

    def test_bare_noun(self):
        self.assertEqual(parser_for("deln").parse_noun(), Noun([], Identifier("deln")))

    def test_modifiers_keep_surface_order(self):
        result = parser_for("jerldir'd <xakant>'d deln").parse_noun()
        self.assertEqual(result.modifier, [Identifier("jerldir"), StringLiteral("<xakant>")])
        self.assertEqual(result.head, Identifier("deln"))

    def test_noun_stops_before_other_tokens(self):
        parser = parser_for("jerldir'd xakant es iu")
        parser.parse_noun()
        self.assertEqual(parser.peek(), Token.keyword(Reserved.ES))

    def test_dangling_modifier_marker(self):
        with self.assertRaises(EndOfFileError):
            parser_for("jerldir'd").parse_noun()

    def test_from_primaries_needs_a_head(self):
        with self.assertRaises(ValueError):
            Noun.from_primaries([])

    def test_equality_ignores_location(self):
        first = parser_for("jerldir'd xakant").parse_noun()
        second = parser_for("\n\n   jerldir'd   xakant").parse_noun()
        self.assertEqual(first, second)
        self.assertNotEqual(first.head.location, second.head.location)


class TestNounLists(unittest.TestCase):
    """Test cases for noun lists."""

    def test_single_noun(self):
        self.assertEqual(parser_for("xakant").parse_noun_list(), [noun("xakant")])

    def test_pair(self):
        self.assertEqual(parser_for("10 ad 168").parse_noun_list(), [noun("10"), noun("168")])

    def test_adit_list(self):
        parser = parser_for("jerldir'd xakant adit kernumesaxm, deln")
        result = parser.parse_noun_list()
        self.assertEqual(result, [noun("jerldir", "xakant"), noun("kernumesaxm"), noun("deln")])
        self.assertTrue(parser.is_at_end())

    def test_long_adit_list(self):
        result = parser_for("a adit b, c, d, e").parse_noun_list()
        self.assertEqual(len(result), 5)

    def test_adit_requires_comma(self):
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parser_for("a adit b c").parse_noun_list()
        self.assertEqual(ctx.exception.expected, "',' in an 'adit' list")

    def test_adit_requires_three_nouns(self):
        with self.assertRaises(EndOfFileError):
            parser_for("a adit b").parse_noun_list()

    def test_pair_does_not_chain(self):
        parser = parser_for("a ad b ad c")
        self.assertEqual(len(parser.parse_noun_list()), 2)
        self.assertEqual(parser.peek(), Token.keyword(Reserved.AD))


class TestCases(unittest.TestCase):
    """Test cases for case markers and case-marked noun phrases."""

    def test_prepositions(self):
        for word, preposition in (("el", Preposition.EL), ("lerj", Preposition.LERJ),
                                  ("fal", Preposition.FAL), ("cecioj", Preposition.CECIOJ)):
            self.assertEqual(parser_for(word).parse_case(), Case.fronted(preposition))

    def test_trailing_marker(self):
        case = parser_for("'c").parse_case()
        self.assertTrue(case.is_trailing)
        self.assertEqual(case, Case.trailing())

    def test_case_rejects_identifier(self):
        with self.assertRaises(UnexpectedTokenError):
            parser_for("xakant").parse_case()

    def test_fronted_noun_list(self):
        result = parser_for("lerj 10 ad 10").parse_nouns_with_case()
        self.assertEqual(result, NounsWithCase([noun("10"), noun("10")], Case.fronted(Preposition.LERJ)))

    def test_trailing_noun_list(self):
        result = parser_for("selsurle'd iu'c").parse_nouns_with_case()
        self.assertEqual(result, NounsWithCase([noun("selsurle", "iu")], Case.trailing()))

    def test_literal_with_trailing_marker(self):
        result = parser_for("jerldir'd<selsurle>'c").parse_nouns_with_case()
        self.assertEqual(result.nouns, [Noun([Identifier("jerldir")], StringLiteral("<selsurle>"))])
        self.assertEqual(result.case, Case.trailing())

    def test_missing_trailing_marker(self):
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parser_for("selsurle iu'c").parse_nouns_with_case()
        self.assertEqual(ctx.exception.expected, "case marker 'c")
        self.assertEqual(ctx.exception.actual, Token.identifier("iu"))

    def test_verb(self):
        self.assertEqual(parser_for("mol").parse_verb(), Verb("mol"))
        with self.assertRaises(UnexpectedTokenError):
            parser_for("<mol>").parse_verb()


class TestConditions(unittest.TestCase):
    """Test cases for condition elements and conditions."""

    def test_elem_before_period(self):
        parser = parser_for("ektir mol.")
        self.assertEqual(parser.parse_cond_elem(), CondElem(noun("ektir"), Verb("mol")))
        self.assertEqual(parser.peek(), Token.keyword(Reserved.PERIOD))

    def test_elem_before_terminators(self):
        for terminator in ("felx", "mal"):
            elem = parser_for(f"ektir mol {terminator}").parse_cond_elem()
            self.assertIsNone(elem.nouns_with_case)

    def test_elem_with_case(self):
        elem = parser_for("ektir mol cecioj 4 ad 204").parse_cond_elem()
        self.assertEqual(elem.nouns_with_case.case, Case.fronted(Preposition.CECIOJ))
        self.assertEqual(elem.nouns_with_case.nouns, [noun("4"), noun("204")])

    def test_elem_requires_case_phrase(self):
        with self.assertRaises(ParseError):
            parser_for("ektir mol xakant").parse_cond_elem()
        with self.assertRaises(EndOfFileError):
            parser_for("ektir mol").parse_cond_elem()

    def test_cond_conjunction(self):
        cond = parser_for("ektir mol. ").parse_cond()
        self.assertEqual(len(cond.elems), 1)

        cond = parser_for("ektir mol mal nert mol mal deln mol.").parse_cond()
        self.assertEqual([e.noun for e in cond.elems], [noun("ektir"), noun("nert"), noun("deln")])


class TestSentences(unittest.TestCase):
    """Test cases for variable and predicate declarations."""

    def test_var_decl(self):
        result = parser_for("selsurle es iu").parse_var_decl()
        self.assertEqual(result, VarDecl(noun("selsurle"), noun("iu")))

    def test_var_decl_requires_es(self):
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parser_for("selsurle ad iu").parse_var_decl()
        self.assertEqual(ctx.exception.expected, "'es'")

    def test_predicate_decl(self):
        parser = parser_for(PREDICATE_SOURCE)
        result = parser.parse_predicate_decl()

        self.assertEqual(result.nouns, [noun("nert"), noun("ektir")])
        self.assertEqual(result.verb, Verb("es_tydivexy"))
        self.assertEqual(len(result.cond.elems), 2)
        for elem in result.cond.elems:
            self.assertEqual(elem.verb, Verb("mol"))
            self.assertEqual(elem.nouns_with_case.case, Case.fronted(Preposition.CECIOJ))
            self.assertEqual(len(elem.nouns_with_case.nouns), 2)
        self.assertEqual(result.cond.elems[1].nouns_with_case.nouns, [noun("24"), noun("154")])
        self.assertEqual(parser.remaining(), [Token.keyword(Reserved.PERIOD)])

    def test_predicate_decl_full_tree(self):
        expected = PredicateDecl(
            [noun("nert"), noun("ektir")],
            Verb("es_tydivexy"),
            Cond([
                CondElem(noun("ektir"), Verb("mol"),
                         NounsWithCase([noun("4"), noun("204")], Case.fronted(Preposition.CECIOJ))),
                CondElem(noun("nert"), Verb("mol"),
                         NounsWithCase([noun("24"), noun("154")], Case.fronted(Preposition.CECIOJ))),
            ])
        )
        self.assertEqual(parser_for(PREDICATE_SOURCE).parse_predicate_decl(), expected)

    def test_predicate_requires_hyphen_o(self):
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parser_for("kernumesaxm'st sides-il io").parse_predicate_decl()
        self.assertEqual(ctx.exception.actual, Token.keyword(Reserved.HYPHEN_IL))

    def test_sentence_dispatch(self):
        self.assertIsInstance(parser_for("selsurle es iu").parse_sentence(), VarDecl)
        self.assertIsInstance(parser_for(PREDICATE_SOURCE).parse_sentence(), PredicateDecl)

    def test_sentence_matches_direct_productions(self):
        self.assertEqual(parser_for("jerldir'd xakant es deln").parse_sentence(),
                         parser_for("jerldir'd xakant es deln").parse_var_decl())
        self.assertEqual(parser_for(PREDICATE_SOURCE).parse_sentence(),
                         parser_for(PREDICATE_SOURCE).parse_predicate_decl())


class TestImports(unittest.TestCase):
    """Test cases for module imports."""

    def test_single_name(self):
        parser = parser_for("lus lang'd xakant.")
        self.assertEqual(parser.parse_import(), Import(["lang"], ["xakant"]))
        self.assertTrue(parser.is_at_end())

    def test_multi_segment_path(self):
        result = parser_for("lus lang'd core'd xakant.").parse_import()
        self.assertEqual(result.module_path, ["lang", "core"])
        self.assertEqual(result.dotted_path, "lang.core")
        self.assertEqual(result.names, ["xakant"])

    def test_pair(self):
        parser = parser_for("lus lang'd xakant ad deln.")
        self.assertEqual(parser.parse_import(), Import(["lang"], ["xakant", "deln"]))
        self.assertEqual(parser.peek(), Token.keyword(Reserved.PERIOD))

    def test_list(self):
        result = parser_for("lus lang'd core'd xakant adit deln, nert, ektir").parse_import()
        self.assertEqual(result, Import(["lang", "core"], ["xakant", "deln", "nert", "ektir"]))

    def test_module(self):
        self.assertEqual(parser_for("lang").parse_module(), "lang")

    def test_path_requires_marker(self):
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parser_for("lus xakant.").parse_import()
        self.assertEqual(ctx.exception.expected, "'d after module name")

    def test_bad_tail(self):
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parser_for("lus lang'd xakant es").parse_import()
        self.assertEqual(ctx.exception.actual, Token.keyword(Reserved.ES))

        with self.assertRaises(UnexpectedTokenError):
            parser_for("lus lang'd <xakant>.").parse_import()

    def test_truncated(self):
        for source in ("lus", "lus lang'd", "lus lang'd xakant", "lus lang'd xakant adit deln"):
            with self.assertRaises(EndOfFileError, msg=source):
                parser_for(source).parse_import()


class TestStatements(unittest.TestCase):
    """Test cases for statements and whole programs."""

    def test_sentence_statement(self):
        parser = parser_for("selsurle es iu.")
        self.assertEqual(parser.parse_statement(), VarDecl(noun("selsurle"), noun("iu")))
        self.assertTrue(parser.is_at_end())

    def test_import_consumes_its_period(self):
        parser = parser_for("lus lang'd xakant. selsurle es iu.")
        self.assertIsInstance(parser.parse_statement(), Import)
        self.assertIsInstance(parser.parse_statement(), VarDecl)
        self.assertTrue(parser.is_at_end())

    def test_pair_import_needs_period(self):
        parser = parser_for("lus lang'd xakant ad deln.")
        self.assertEqual(parser.parse_statement(), Import(["lang"], ["xakant", "deln"]))
        self.assertTrue(parser.is_at_end())

        with self.assertRaises(EndOfFileError):
            parser_for("lus lang'd xakant ad deln").parse_statement()

    def test_missing_period(self):
        with self.assertRaises(EndOfFileError) as ctx:
            parser_for("selsurle es iu").parse_statement()
        self.assertEqual(ctx.exception.expected, "'.' at end of statement")

    def test_program(self):
        source = "lus lang'd core'd xakant.\nselsurle es iu.\n" + PREDICATE_SOURCE
        program = parse_string(source)
        kinds = [type(statement) for statement in program.statements]
        self.assertEqual(kinds, [Import, VarDecl, PredicateDecl])

    def test_empty_program(self):
        self.assertEqual(parse_string(""), Program([]))
        self.assertEqual(Parser([]).parse(), Program([]))

    def test_program_stops_at_first_error(self):
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parse_string("selsurle es iu iu. deln es nert.", "<t>")
        error = ctx.exception
        self.assertEqual(error.actual, Token.identifier("iu"))
        self.assertEqual((error.location.line, error.location.column), (1, 16))
        self.assertIn("<t>:1:16", str(error))

    def test_parse_file(self):
        with tempfile.NamedTemporaryFile("w", suffix=".txt", delete=False, encoding="utf-8") as f:
            f.write("selsurle es iu.\n")
            path = f.name
        try:
            program = parse_file(path)
        finally:
            os.unlink(path)
        self.assertEqual(program.filename, path)
        self.assertEqual(len(program.statements), 1)


class TestEmptyInput(unittest.TestCase):
    """Every production reports end of input on an empty token list."""

    PRODUCTIONS = [
        "parse_primary_noun", "parse_noun", "parse_noun_list", "parse_case",
        "parse_nouns_with_case", "parse_verb", "parse_cond_elem", "parse_cond",
        "parse_var_decl", "parse_predicate_decl", "parse_sentence",
        "parse_module", "parse_import", "parse_statement",
    ]

    def test_each_production(self):
        for name in self.PRODUCTIONS:
            with self.subTest(production=name):
                parser = Parser([])
                with self.assertRaises(EndOfFileError):
                    getattr(parser, name)()

    def test_next_and_peek(self):
        parser = Parser([])
        self.assertIsNone(parser.peek())
        with self.assertRaises(EndOfFileError) as ctx:
            parser.next("verb")
        self.assertEqual(ctx.exception.diagnostic.code, "P010")
        self.assertIsNone(ctx.exception.location)


class TestDiagnostics(unittest.TestCase):
    """Test cases for error payloads and tree helpers."""

    def test_keyword_suggestion(self):
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parse_string("selsurle ez iu.")
        self.assertIn("Did you mean 'es'?", ctx.exception.diagnostic.suggestions)

    def test_no_suggestion_for_keywords(self):
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parser_for("es").parse_verb()
        self.assertFalse(ctx.exception.diagnostic.suggestions)

    def test_error_to_dict(self):
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parse_string("selsurle es iu iu.", "<t>")
        data = ctx.exception.to_dict()
        self.assertEqual(data["code"], "P001")
        self.assertEqual(data["token"]["lexeme"], "iu")
        self.assertEqual(data["location"]["column"], 16)

    def test_eof_error_message(self):
        error = EndOfFileError("verb")
        self.assertEqual(error.diagnostic.message, "Unexpected end of input, expected verb")
        self.assertIsInstance(error, ParseError)

    def test_public_names_resolve(self):
        import lingparse.parser as parser_package
        for name in parser_package.__all__:
            self.assertTrue(hasattr(parser_package, name), name)

    def test_walk(self):
        program = parse_string("selsurle es iu.")
        kinds = [node.node_type for node in program.walk()]
        self.assertEqual(kinds, [
            ASTNodeType.PROGRAM, ASTNodeType.VAR_DECL,
            ASTNodeType.NOUN, ASTNodeType.IDENTIFIER,
            ASTNodeType.NOUN, ASTNodeType.IDENTIFIER,
        ])

    def test_to_dict(self):
        data = parser_for("jerldir'd xakant es <iu>").parse_var_decl().to_dict()
        self.assertEqual(data, {
            "type": "VarDecl",
            "name": {
                "type": "Noun",
                "modifier": [{"type": "Identifier", "name": "jerldir"}],
                "head": {"type": "Identifier", "name": "xakant"},
            },
            "value": {
                "type": "Noun",
                "modifier": [],
                "head": {"type": "StringLiteral", "literal": "<iu>"},
            },
        })


if __name__ == '__main__':
    unittest.main()
