import unittest

import slrtable
from slrtable.grammar import (
    EndOfInputSpec,
    EpsilonSpec,
    NontermSpec,
    TokenSpec,
    classify,
    eoi,
    epsilon,
)


class TestGrammar(unittest.TestCase):
    def test_package(self):
        self.assertTrue(slrtable.__doc__.lstrip().startswith(
            "The slrtable module generates SLR(1)"
        ))
        for name in slrtable.__all__:
            self.assertTrue(hasattr(slrtable, name), name)

    def test_classify(self):
        self.assertIs(classify("E"), NontermSpec)
        self.assertIs(classify("Expr"), NontermSpec)
        self.assertIs(classify("Epsilon"), NontermSpec)
        self.assertIs(classify("id"), TokenSpec)
        self.assertIs(classify("eX"), TokenSpec)
        self.assertIs(classify("+"), TokenSpec)
        self.assertIs(classify("_A"), TokenSpec)
        self.assertIs(classify("epsilon"), EpsilonSpec)
        self.assertIs(classify("$"), EndOfInputSpec)

    def test_symbols(self):
        self.assertEqual(TokenSpec("x"), TokenSpec("x"))
        self.assertNotEqual(TokenSpec("x"), NontermSpec("x"))
        self.assertNotEqual(TokenSpec("epsilon"), epsilon)
        self.assertNotEqual(eoi, epsilon)

    def test_productions(self):
        from slrtable.tests.specs import d

        grammar = slrtable.load_grammar(d.grammar)
        self.assertEqual(grammar.userStartSym.name, "F")
        self.assertEqual(
            [(prod.seq, repr(prod)) for prod in grammar.productions],
            [
                (1, "F ::= ( E )."),
                (2, "F ::= id."),
                (3, "F ::= epsilon."),
                (4, "E ::= F."),
            ],
        )
        self.assertTrue(grammar.productions[2].isEpsilon)
        self.assertEqual(list(grammar.tokens), ["(", ")", "id"])

    def test_augment(self):
        from slrtable.tests.specs import a

        grammar = slrtable.load_grammar(a.grammar)
        self.assertIsNone(grammar.startProd)
        prod = grammar.augment()
        self.assertIs(grammar.augment(), prod)
        self.assertIsNone(prod.seq)
        self.assertEqual(repr(prod), "<S'> ::= E $.")
        self.assertNotIn(prod, grammar.productions)
        self.assertEqual(len(grammar.productions), 3)
        self.assertEqual(list(grammar.allProductions())[0], prod)
        self.assertEqual(
            [nt.name for nt in grammar.allNonterms()], ["<S'>", "E", "T"]
        )

    def test_items(self):
        from slrtable.tests.specs import a

        grammar = slrtable.load_grammar(a.grammar)
        prod = grammar.productions[0]
        self.assertEqual(repr(prod.item(0)), "[E ::= * E + T.]")
        self.assertEqual(repr(prod.item(1)), "[E ::= E * + T.]")
        self.assertEqual(repr(prod.item(3)), "[E ::= E + T *.]")
        self.assertEqual(prod.item(1), prod.item(0).advance())
        self.assertNotEqual(prod.item(1), prod.item(2))
        self.assertEqual(prod.item(1).symbol, grammar.tokens["+"])
        self.assertTrue(prod.item(3).complete)
        self.assertIsNone(prod.item(3).symbol)

    def test_format_errors(self):
        bad = [
            {},
            [("E", ["x"])],
            {"e": ["x"]},
            {"epsilon": ["x"]},
            {1: ["x"]},
            {"E": []},
            {"E": "x"},
            {"E": [""]},
            {"E": ["   "]},
            {"E": [1]},
            {"E": ["x epsilon"]},
            {"E": ["x $"]},
            {"E": ["x <S'>"]},
            {"E": ["X"]},
            {"E": ["x", "x"]},
        ]
        for grammar in bad:
            with self.subTest(grammar=grammar):
                self.assertRaises(
                    slrtable.GrammarFormatError, slrtable.Table, grammar
                )

    def test_format_error_message(self):
        with self.assertRaises(slrtable.GrammarFormatError) as cm:
            slrtable.load_grammar({"E": ["T + x"], "T": ["U"]})
        self.assertIn("Undefined non-terminal U", str(cm.exception))
        self.assertIn("T ::= U", str(cm.exception))

    def test_source(self):
        source = slrtable.MappingGrammarSource({"E": ["E x", "y"]})
        nonterms, start = source.get_nonterminals()
        self.assertEqual([nt.name for nt in nonterms], ["E"])
        self.assertIs(start, nonterms[0])
        self.assertEqual([tok.name for tok in source.get_tokens()],
                         ["x", "y"])
        table = slrtable.Table(source)
        self.assertEqual(table.reductions()["r2"], (("y",), "E"))

    def test_forward_reference(self):
        grammar = slrtable.load_grammar({"S": ["A b"], "A": ["a"]})
        self.assertIs(grammar.productions[0].rhs[0], grammar.nonterms["A"])


if __name__ == "__main__":
    unittest.main()
