"""
SLR(1) parsing table construction.
"""
from __future__ import annotations
from typing import (
    Dict,
    Iterable,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Sequence,
    Tuple,
)

import sys

from slrtable import interfaces
from slrtable.automaton import Collection
from slrtable.errors import ConflictError
from slrtable.grammar import (
    AcceptAction,
    Action,
    ActionState,
    Grammar,
    GotoState,
    Item,
    NontermSpec,
    Production,
    ReduceAction,
    ShiftAction,
    SymbolSpec,
    eoi,
)
from slrtable.interfaces import GrammarSource
from slrtable.sets import Sets
from slrtable.source import load_grammar


class Conflict(NamedTuple):
    """
    A shift/reduce conflict.  The shift (or accept) action always wins;
    production is the reduction that was discarded.
    """

    state: int
    symbol: SymbolSpec
    action: Action
    production: Production


class Table(interfaces.Table):
    """
    The Table class computes the SLR(1) parsing table of a grammar, along
    with the registry of the reductions that the table refers to.  All of
    the work is done by the constructor; if the grammar is not SLR(1)
    (there is a reduce/reduce conflict) ConflictError is raised and no table
    is produced.

    Shift/reduce conflicts are not errors: the shift is kept and the
    reduction discarded.  They are recorded in the conflicts attribute.

        table = Table({"E": ["E + T", "T"], "T": ["id"]})
        table.action_table()["e0"]["id"]    # "e3"
        table.reductions()["r3"]            # (("id",), "T")
    """

    def __init__(
        self,
        source: Grammar | GrammarSource | Mapping[str, Sequence[str]],
        logFile: Optional[str] = None,
        verbose: bool = False,
    ) -> None:
        """
        source : The grammar, either as a Grammar, a GrammarSource, or a
                 mapping of head names to alternative strings (see
                 MappingGrammarSource).

        logFile : The path of a file to store a human-readable copy of the
                  parsing table in.

        verbose : If true, print progress information while generating the
                  parsing table."""
        self._verbose = verbose

        if self._verbose:
            print("slrtable.Table: Reading grammar...")
        if isinstance(source, Grammar):
            self._grammar = source
        else:
            self._grammar = load_grammar(source)
        self._startProd = self._grammar.augment()

        # The registry must exist before any reduction is placed.
        self._reductions: Dict[int, Production] = {}
        for prod in self._grammar.productions:
            assert prod.seq is not None
            self._reductions[prod.seq] = prod

        if self._verbose:
            print("slrtable.Table: Computing FIRST and FOLLOW sets...")
        self._sets = Sets(self._grammar)
        self._collection = Collection(self._grammar, verbose)

        self._action: List[ActionState] = []
        self.conflicts: List[Conflict] = []
        self._lr()

        if logFile is not None:
            with open(logFile, "w+") as f:
                if self._verbose:
                    print("slrtable.Table: Writing log to '%s'..." % logFile)
                f.write("%r\n" % self)

        if self._verbose:
            print(self._summary())

    # ------------------------------------------------------------------------

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    @property
    def sets(self) -> Sets:
        return self._sets

    @property
    def collection(self) -> Collection:
        return self._collection

    def actions(self) -> List[ActionState]:
        return self._action

    def goto(self) -> List[GotoState]:
        """The non-terminal transitions of every state."""
        return [
            {
                sym: target
                for sym, target in gotos.items()
                if isinstance(sym, NontermSpec)
            }
            for gotos in self._collection.gotos
        ]

    def start_sym(self) -> NontermSpec:
        return self._grammar.userStartSym

    def action(self, state: int, symbol: str) -> Optional[Action]:
        """The action at (state, symbol), or None for a parse error."""
        for sym, action in self._action[state].items():
            if sym.name == symbol:
                return action
        return None

    def action_table(self) -> Dict[str, Dict[str, str]]:
        """
        The table, in the following form:

            {
                "e0": {"id": "e3", "E": "e1", "T": "e2"},
                "e1": {"+": "e4", "$": "ac"},
                "e2": {"+": "r2", "$": "r2"},
                ...
            }

        "eN" is a shift (or, for non-terminals, a goto) to state N, "rN" a
        reduction by production N, and "ac" accepts.  A missing entry is a
        parse error.
        """
        return {
            "e%d" % i: {sym.name: action.code() for sym, action in st.items()}
            for i, st in enumerate(self._action)
        }

    def reductions(self) -> Dict[str, Tuple[Tuple[str, ...], str]]:
        """
        The reductions the table refers to, numbered from 1 in declaration
        order, as "rN" : (body, head).  The empty alternative has the body
        ("epsilon",).
        """
        return {
            "r%d" % seq: (tuple(sym.name for sym in prod.rhs), prod.lhs.name)
            for seq, prod in self._reductions.items()
        }

    def production(self, seq: int) -> Production:
        return self._reductions[seq]

    # ------------------------------------------------------------------------

    def __repr__(self) -> str:
        lines = []

        lines.append("Tokens:")
        for token in self._grammar.tokens.values():
            lines.append("  %r" % token)

        lines.append("Non-terminals:")
        for nonterm in self._grammar.allNonterms():
            lines.append("  %r" % nonterm)
            lines.append(
                "    First set: %s" % _names(self._sets.firstSet(nonterm))
            )
            lines.append(
                "    Follow set: %s" % _names(self._sets.followSet(nonterm))
            )
            lines.append("    Productions:")
            for prod in nonterm.productions:
                if prod.seq is None:
                    lines.append("           %r" % prod)
                else:
                    lines.append("      r%-3d %r" % (prod.seq, prod))

        lines.append(self._summary())
        lines.append("Parsing tables:")
        for i, itemSet in enumerate(self._collection):
            lines.append("  %s" % ("=" * 78))
            lines.append("  State %d:%s" % (i, ("", " (start state)")[i == 0]))
            for item in itemSet:
                lines.append(
                    " %s%s" % (" " * (len("%d" % i) + 9), item.lr0__repr__())
                )
            lines.append("    Goto:")
            for sym, target in self._collection.gotos[i].items():
                if isinstance(sym, NontermSpec):
                    lines.append("    %15r : %d" % (sym, target))
            lines.append("    Action:")
            for sym, action in self._action[i].items():
                if isinstance(sym, NontermSpec):
                    continue
                conflict = "   "
                for c in self.conflicts:
                    if c.state == i and c.symbol == sym:
                        conflict = "XXX"
                        break
                if isinstance(action, ShiftAction):
                    lines.append(
                        "%s %15r : %-6s %d"
                        % (conflict, sym, "shift", action.nextState)
                    )
                elif isinstance(action, ReduceAction):
                    lines.append(
                        "%s %15r : %-6s %r"
                        % (conflict, sym, "reduce", action.production)
                    )
                else:
                    assert isinstance(action, AcceptAction)
                    lines.append("%s %15r : %-6s" % (conflict, sym, "accept"))

        return "\n".join(lines)

    def _summary(self) -> str:
        nnonterms = len(self._grammar.nonterms)
        nproductions = len(self._grammar.productions)
        nstates = len(self._action)
        nconflicts = len(self.conflicts)
        return (
            "slrtable.Table: %d non-terminal%s, %d production%s, "
            "%d state%s, %d shift/reduce conflict%s"
            % (
                nnonterms,
                ("s", "")[nnonterms == 1],
                nproductions,
                ("s", "")[nproductions == 1],
                nstates,
                ("s", "")[nstates == 1],
                nconflicts,
                ("s", "")[nconflicts == 1],
            )
        )

    # Compute the SLR(1) parsing table.
    def _lr(self) -> None:
        # The collection of sets of LR(0) items already exists.
        assert len(self._collection) > 0
        assert len(self._action) == 0

        if self._verbose:
            print(
                "slrtable.Table: Generating SLR(1) parsing "
                "table (%d state%s)... "
                % (
                    len(self._collection),
                    ("s", "")[len(self._collection) == 1],
                ),
                end=" ",
            )
            sys.stdout.flush()

        for i, itemSet in enumerate(self._collection):
            if self._verbose:
                sys.stdout.write(".")
                sys.stdout.flush()
            state: ActionState = {}
            self._action.append(state)
            for item in itemSet:
                sym = item.symbol
                # X ::= a*
                if sym is None:
                    self._reduce(i, state, item)
                # <S'> ::= Start * $.
                elif sym == eoi:
                    assert item.production is self._startProd
                    self._shift(i, state, eoi, AcceptAction())
                # X ::= a*Ab
                else:
                    target = self._collection.goto(i, sym)
                    assert target is not None
                    self._shift(i, state, sym, ShiftAction(target))

        if self._verbose:
            sys.stdout.write("\n")
            sys.stdout.flush()

    def _reduce(self, i: int, state: ActionState, item: Item) -> None:
        prod = item.production
        assert prod.seq is not None
        assert self._reductions[prod.seq] is prod
        action = ReduceAction(prod)
        for sym in sorted(self._sets.followSet(prod.lhs)):
            old = state.get(sym)
            if old is None:
                state[sym] = action
            elif isinstance(old, ReduceAction):
                if old != action:
                    if self._verbose:
                        sys.stdout.write("\n")
                    raise ConflictError(
                        "Grammar is not SLR(1): reduce/reduce conflict in "
                        "state %d on %r between %r and %r"
                        % (i, sym, old.production, prod),
                        state=i,
                        symbol=sym,
                        productions=(old.production, prod),
                    )
            else:
                # Shift/reduce conflict; the shift wins.
                self._conflict(Conflict(i, sym, old, prod))

    def _shift(
        self, i: int, state: ActionState, sym: SymbolSpec, action: Action
    ) -> None:
        old = state.get(sym)
        if isinstance(old, ReduceAction):
            # Shift/reduce conflict; the shift wins.
            self._conflict(Conflict(i, sym, action, old.production))
        state[sym] = action

    def _conflict(self, conflict: Conflict) -> None:
        self.conflicts.append(conflict)
        if self._verbose:
            sys.stdout.write("[%d:%r]" % (conflict.state, conflict.symbol))
            sys.stdout.flush()


def _names(syms: Iterable[SymbolSpec]) -> str:
    return "{%s}" % ", ".join(sym.name for sym in sorted(syms))


def build(
    source: Grammar | GrammarSource | Mapping[str, Sequence[str]],
) -> Tuple[Dict[str, Dict[str, str]], Dict[str, Tuple[Tuple[str, ...], str]]]:
    """
    Compute the SLR(1) table of a grammar and return (table, reductions),
    as produced by Table.action_table() and Table.reductions().
    """
    table = Table(source)
    return table.action_table(), table.reductions()
