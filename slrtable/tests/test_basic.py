import contextlib
import io
import os
import tempfile
import unittest

import slrtable
from slrtable.grammar import AcceptAction
from slrtable.introspection import parse_alternative


def drive(table, reductions, tokens):
    """Run a shift-reduce parse over tokens and return the actions taken."""
    stack = [0]
    trace = []
    tokens = list(tokens) + ["$"]
    pos = 0
    while True:
        tok = tokens[pos]
        act = table["e%d" % stack[-1]].get(tok)
        if act is None:
            raise AssertionError(
                "no action in state %d on %r" % (stack[-1], tok)
            )
        trace.append(act)
        if act == "ac":
            return trace
        if act.startswith("e"):
            stack.append(int(act[1:]))
            pos += 1
        else:
            body, head = reductions[act]
            n = 0 if body == ("epsilon",) else len(body)
            del stack[len(stack) - n:]
            stack.append(int(table["e%d" % stack[-1]][head][1:]))


class TestTable(unittest.TestCase):
    def test_basic_a(self):
        from slrtable.tests.specs import a

        table = slrtable.Table(a.grammar)
        actions = table.action_table()
        reductions = table.reductions()

        self.assertEqual(
            reductions,
            {
                "r1": (("E", "+", "T"), "E"),
                "r2": (("T",), "E"),
                "r3": (("id",), "T"),
            },
        )
        self.assertEqual(len(actions), 6)

        # Shift id from the start state, then reduce T ::= id. on every
        # terminal in FOLLOW(T).
        shift = actions["e0"]["id"]
        self.assertTrue(shift.startswith("e"))
        follow = table.sets.follow("T")
        self.assertEqual(follow, {"+", "$"})
        for tok in follow:
            self.assertEqual(actions[shift][tok], "r3")

        self.assertEqual(
            drive(actions, reductions, ["id", "+", "id"]),
            ["e3", "r3", "r2", "e4", "e3", "r3", "r1", "ac"],
        )

    def test_basic_b(self):
        from slrtable.tests.specs import b

        table = slrtable.Table(b.grammar)
        actions = table.action_table()
        reductions = table.reductions()

        self.assertEqual(len(actions), 12)
        self.assertEqual(table.conflicts, [])
        drive(actions, reductions, "id * ( id + id )".split())
        drive(actions, reductions, "( ( id ) ) * id + id".split())
        self.assertRaises(
            AssertionError, drive, actions, reductions, "id + * id".split()
        )

    def test_basic_c(self):
        from slrtable.tests.specs import c

        table = slrtable.Table(c.grammar)
        actions = table.action_table()
        reductions = table.reductions()

        drive(actions, reductions, ["id"])
        drive(actions, reductions, "id + id * ( id )".split())
        for state in actions.values():
            self.assertNotIn("epsilon", state)

    def test_epsilon(self):
        from slrtable.tests.specs import d

        table = slrtable.Table(d.grammar)
        actions = table.action_table()
        reductions = table.reductions()

        (empty,) = [
            r for r, (body, head) in reductions.items()
            if body == ("epsilon",)
        ]
        self.assertEqual(reductions[empty], (("epsilon",), "F"))

        follow = table.sets.follow("F")
        self.assertEqual(follow, {"$", ")"})

        nstates = 0
        for i, itemSet in enumerate(table.collection):
            if any(
                item.complete and item.production.isEpsilon
                for item in itemSet
            ):
                nstates += 1
                for tok in follow:
                    self.assertEqual(actions["e%d" % i][tok], empty)
        # The start state and the state after "(".
        self.assertEqual(nstates, 2)

        for state in actions.values():
            self.assertNotIn("epsilon", state)

        self.assertEqual(drive(actions, reductions, []), [empty, "ac"])
        drive(actions, reductions, ["(", ")"])
        drive(actions, reductions, ["(", "(", "id", ")", ")"])

    def test_epsilon_nullable(self):
        from slrtable.tests.specs import d

        table = slrtable.Table(d.nullable)
        actions = table.action_table()
        reductions = table.reductions()

        for state in actions.values():
            self.assertNotIn("epsilon", state)
        drive(actions, reductions, "numero + ( numero * numero )".split())
        drive(actions, reductions, [])

    def test_reduce_reduce(self):
        from slrtable.tests.specs import i

        with self.assertRaises(slrtable.ConflictError) as cm:
            slrtable.Table(i.grammar)
        self.assertIn("not SLR(1)", str(cm.exception))
        self.assertEqual(cm.exception.symbol.name, "$")
        self.assertEqual(
            {prod.lhs.name for prod in cm.exception.productions},
            {"A", "B"},
        )
        self.assertRaises(slrtable.GrammarError, slrtable.build, i.grammar)

    def test_shift_reduce(self):
        from slrtable.tests.specs import i

        table = slrtable.Table(i.dangling)
        actions = table.action_table()
        reductions = table.reductions()

        self.assertEqual(len(table.conflicts), 1)
        conflict = table.conflicts[0]
        self.assertEqual(conflict.symbol.name, "e")
        self.assertEqual(repr(conflict.production), "S ::= i S.")
        # The shift is kept.
        state = actions["e%d" % conflict.state]
        self.assertTrue(state["e"].startswith("e"))
        self.assertEqual(state["$"], "r1")

        # else binds to the innermost if.
        trace = drive(actions, reductions, "i i a e a".split())
        self.assertEqual(trace.count("r2"), 1)
        self.assertEqual(trace.count("r1"), 1)

    def test_accept_reduce(self):
        from slrtable.tests.specs import i

        table = slrtable.Table(i.cyclic)
        actions = table.action_table()

        self.assertEqual(actions["e1"], {"$": "ac"})
        self.assertEqual(len(table.conflicts), 1)
        conflict = table.conflicts[0]
        self.assertEqual(conflict.state, 1)
        self.assertEqual(conflict.symbol.name, "$")
        self.assertIsInstance(conflict.action, AcceptAction)
        self.assertEqual(repr(conflict.production), "A ::= S.")

    def test_determinism(self):
        from slrtable.tests.specs import b, c

        for grammar in (b.grammar, c.grammar):
            t1 = slrtable.Table(grammar)
            t2 = slrtable.Table(grammar)
            self.assertEqual(t1.action_table(), t2.action_table())
            self.assertEqual(t1.reductions(), t2.reductions())
            self.assertEqual(
                list(t1.action_table()["e0"]),
                list(t2.action_table()["e0"]),
            )

    def test_reordered(self):
        from slrtable.tests.specs import b

        t1 = slrtable.Table(b.grammar)
        t2 = slrtable.Table(b.reordered)
        self.assertEqual(len(t1.collection), len(t2.collection))
        self.assertEqual(
            sum(len(st) for st in t1.action_table().values()),
            sum(len(st) for st in t2.action_table().values()),
        )

    def test_referential_integrity(self):
        from slrtable.tests.specs import a, b, c, d

        for grammar in (a.grammar, b.grammar, c.grammar, d.grammar):
            actions, reductions = slrtable.build(grammar)
            for state in actions.values():
                for act in state.values():
                    if act.startswith("r"):
                        self.assertIn(act, reductions)
            for body, head in reductions.values():
                alternatives = [parse_alternative(s) for s in grammar[head]]
                self.assertIn(body, alternatives)
            self.assertEqual(
                len(reductions), sum(len(v) for v in grammar.values())
            )

    def test_accept(self):
        from slrtable.tests.specs import a

        table = slrtable.Table(a.grammar)
        accepts = [
            (state, sym)
            for state, row in table.action_table().items()
            for sym, act in row.items()
            if act == "ac"
        ]
        self.assertEqual(accepts, [("e1", "$")])
        self.assertEqual(table.action_table()["e0"]["E"], "e1")
        self.assertIsNone(table.action(0, "+"))
        self.assertIsNotNone(table.action(0, "id"))

    def test_goto(self):
        from slrtable.tests.specs import b

        table = slrtable.Table(b.grammar)
        gotos = table.goto()
        self.assertEqual(len(gotos), len(table.actions()))
        self.assertEqual(
            sorted(sym.name for sym in gotos[0]), ["E", "F", "T"]
        )
        self.assertEqual(table.start_sym().name, "E")

    def test_log_file(self):
        from slrtable.tests.specs import d

        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "table.log")
            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                table = slrtable.Table(d.grammar, logFile=path, verbose=True)
            with open(path) as f:
                log = f.read()

        self.assertIn("State 0: (start state)", log)
        self.assertIn("Follow set: {$, )}", log)
        self.assertIn("[F ::= * epsilon.]", log)
        self.assertIn("accept", log)
        self.assertEqual(log, "%r\n" % table)
        self.assertIn("slrtable.Table: Writing log to", out.getvalue())
        self.assertIn("0 shift/reduce conflicts", out.getvalue())


if __name__ == "__main__":
    unittest.main()
