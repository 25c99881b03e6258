"""
FIRST and FOLLOW set computation.
"""
from __future__ import annotations
from typing import Dict, FrozenSet, Iterable, List, Set, Tuple

from slrtable.errors import GrammarError
from slrtable.grammar import (
    START_NAME,
    EndOfInputSpec,
    EpsilonSpec,
    Grammar,
    NontermSpec,
    SymbolSpec,
    TokenSpec,
    classify,
    eoi,
    epsilon,
)


class Sets:
    """
    The Sets class computes the FIRST and FOLLOW sets of every non-terminal
    of a grammar.  The grammar is augmented with <S'> ::= Start $. first, so
    FOLLOW(Start) always contains $.  Both sets are computed once, by
    iterating until no set changes, and are never recomputed; a Sets
    instance belongs to exactly one grammar.

    The public query methods take symbol names and return sets of symbol
    names:

        sets = Sets(grammar)
        sets.first("E")     # frozenset({"(", "id"})
        sets.follow("E")    # frozenset({"$", "+", ")"})
    """

    def __init__(self, grammar: Grammar) -> None:
        self._grammar = grammar
        grammar.augment()
        self._firstSets: Dict[SymbolSpec, Set[SymbolSpec]] = {}
        self._followSets: Dict[SymbolSpec, Set[SymbolSpec]] = {}
        self._closures: Dict[str, List[Tuple[str, ...]]] = {}

        self._computeFirstSets()
        self._computeFollowSets()

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    # ------------------------------------------------------------------------
    # Queries by name.

    def first(self, symbol: str | SymbolSpec) -> FrozenSet[str]:
        return frozenset(sym.name for sym in self.firstSet(symbol))

    def follow(self, symbol: str | SymbolSpec) -> FrozenSet[str]:
        return frozenset(sym.name for sym in self.followSet(symbol))

    def firsts(self) -> Dict[str, FrozenSet[str]]:
        """All FIRST sets of the grammar's non-terminals, in grammar order."""
        return {name: self.first(nt)
                for name, nt in self._grammar.nonterms.items()}

    def follows(self) -> Dict[str, FrozenSet[str]]:
        """All FOLLOW sets of the grammar's non-terminals, in grammar
        order."""
        return {name: self.follow(nt)
                for name, nt in self._grammar.nonterms.items()}

    def closure(self, symbol: str | SymbolSpec) -> List[Tuple[str, ...]]:
        """
        The alternatives of a non-terminal, as sequences of symbol names,
        with epsilon removed.  An epsilon alternative therefore yields an
        empty sequence.
        """
        nonterm = self._nonterm(symbol)
        closure = self._closures.get(nonterm.name)
        if closure is None:
            closure = [
                tuple(sym.name for sym in prod.rhs if sym != epsilon)
                for prod in nonterm.productions
            ]
            self._closures[nonterm.name] = closure
        return list(closure)

    def closures(self) -> Dict[str, List[Tuple[str, ...]]]:
        return {name: self.closure(nt)
                for name, nt in self._grammar.nonterms.items()}

    # ------------------------------------------------------------------------
    # Queries by symbol.

    def firstSet(self, symbol: str | SymbolSpec) -> FrozenSet[SymbolSpec]:
        sym = self._symbol(symbol)
        if isinstance(sym, NontermSpec):
            return frozenset(self._firstSets[sym])
        # first(X) is X for terminals, epsilon and $.
        return frozenset((sym,))

    def followSet(self, symbol: str | SymbolSpec) -> FrozenSet[SymbolSpec]:
        return frozenset(self._followSets[self._nonterm(symbol)])

    def firstOf(self, syms: Iterable[SymbolSpec]) -> Set[SymbolSpec]:
        """
        Compute the first set of a string of symbols.  The result contains
        epsilon iff every symbol of the string can derive epsilon (in
        particular, if the string is empty).
        """
        result: Set[SymbolSpec] = set()
        for sym in syms:
            if isinstance(sym, NontermSpec):
                symFirst: Iterable[SymbolSpec] = self._firstSets[sym]
            else:
                symFirst = (sym,)
            hasEpsilon = False
            for elm in symFirst:
                if elm == epsilon:
                    hasEpsilon = True
                else:
                    result.add(elm)
            if not hasEpsilon:
                return result
        result.add(epsilon)
        return result

    # ------------------------------------------------------------------------

    def _symbol(self, symbol: str | SymbolSpec) -> SymbolSpec:
        if isinstance(symbol, SymbolSpec):
            if isinstance(symbol, NontermSpec):
                return self._nonterm(symbol)
            return symbol

        cls = classify(symbol)
        if cls is NontermSpec or symbol == START_NAME:
            return self._nonterm(symbol)
        elif cls is EpsilonSpec:
            return epsilon
        elif cls is EndOfInputSpec:
            return eoi
        token = self._grammar.tokens.get(symbol)
        if token is None:
            token = TokenSpec(symbol)
        return token

    def _nonterm(self, symbol: str | SymbolSpec) -> NontermSpec:
        name = symbol.name if isinstance(symbol, SymbolSpec) else symbol
        if name == START_NAME:
            assert self._grammar.startSym is not None
            return self._grammar.startSym
        nonterm = self._grammar.nonterms.get(name)
        if nonterm is None:
            raise GrammarError("Unknown non-terminal: %s" % name)
        return nonterm

    # Compute the first sets for all non-terminals.
    def _computeFirstSets(self) -> None:
        nonterms = list(self._grammar.allNonterms())
        for nonterm in nonterms:
            self._firstSets[nonterm] = set()

        # Repeat the following loop until no more symbols can be added to any
        # first set.  A left recursive alternative contributes nothing until
        # another alternative has made progress.
        done = False
        while not done:
            done = True
            for nonterm in nonterms:
                firstSet = self._firstSets[nonterm]
                for prod in nonterm.productions:
                    for elm in self.firstOf(prod.rhs):
                        if elm not in firstSet:
                            firstSet.add(elm)
                            done = False

    # Compute the follow sets for all non-terminals.
    def _computeFollowSets(self) -> None:
        for nonterm in self._grammar.allNonterms():
            self._followSets[nonterm] = set()

        # Repeat the following loop until no more symbols can be added to any
        # follow set.
        done = False
        while not done:
            done = True
            for prod in self._grammar.allProductions():
                for i, sym in enumerate(prod.rhs):
                    if not isinstance(sym, NontermSpec):
                        continue
                    followSet = self._followSets[sym]

                    # For A ::= aBb, merge first(b) into follow(B).  If b can
                    # derive epsilon (or is empty), merge follow(A) as well.
                    tail = self.firstOf(prod.rhs[i + 1:])
                    new = {elm for elm in tail if elm != epsilon}
                    if epsilon in tail and prod.lhs != sym:
                        new.update(self._followSets[prod.lhs])

                    if not new <= followSet:
                        followSet.update(new)
                        done = False
