"""
The classes in this module are used to compute the canonical collection of
LR(0) item sets, i.e. the states of the SLR(1) automaton.
"""
from __future__ import annotations
from typing import (
    Any,
    Dict,
    FrozenSet,
    Iterable,
    Iterator,
    List,
    Optional,
    Set,
)

import sys

from slrtable.grammar import (
    Grammar,
    GotoState,
    Item,
    NontermSpec,
    Production,
    SymbolSpec,
    eoi,
)


class ItemSet:
    """
    A set of LR(0) items.  The kernel items are the ones the set was
    created from; closure() adds the items for the productions of every
    non-terminal that follows a dot.  Items keep the order in which they
    were added, which fixes the order of outgoing transitions.

    Two item sets are equal when they contain the same items, regardless of
    order and of which items are kernel items.  Only closed item sets are
    ever compared.
    """

    def __init__(self, items: Iterable[Item]) -> None:
        self._kernel: List[Item] = []
        self._added: List[Item] = []
        self._members: Set[Item] = set()
        self._symMap: Dict[SymbolSpec, List[Item]] = {}
        self._key: Optional[FrozenSet[Item]] = None

        for item in items:
            self._append(self._kernel, item)

    def __repr__(self) -> str:
        kernel = ", ".join(i.lr0__repr__() for i in self._kernel)
        added = ", ".join(i.lr0__repr__() for i in self._added)
        return "ItemSet(kernel: %s, added: %s)" % (kernel, added)

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, item: Any) -> bool:
        return item in self._members

    def __iter__(self) -> Iterator[Item]:
        yield from self._kernel
        yield from self._added

    def __hash__(self) -> int:
        return hash(self.key())

    def __eq__(self, other: Any) -> bool:
        if type(other) is ItemSet:
            return self.key() == other.key()
        else:
            return NotImplemented

    def key(self) -> FrozenSet[Item]:
        if self._key is None:
            self._key = frozenset(self._members)
        return self._key

    @property
    def kernel(self) -> List[Item]:
        return list(self._kernel)

    def symbols(self) -> List[SymbolSpec]:
        """Distinct symbols that follow a dot, in order of appearance."""
        return list(self._symMap)

    def _append(self, items: List[Item], item: Item) -> bool:
        if item in self._members:
            return False
        items.append(item)
        self._members.add(item)
        self._key = None
        sym = item.symbol
        if sym is not None:
            if sym in self._symMap:
                self._symMap[sym].append(item)
            else:
                self._symMap[sym] = [item]
        return True

    # Calculate and merge the kernel's transitive closure.
    def closure(self) -> None:
        # Iterate over the items until no more can be added to the closure.
        worklist = list(self)
        i = 0
        while i < len(worklist):
            sym = worklist[i].symbol
            if isinstance(sym, NontermSpec):
                for prod in sym.productions:
                    tItem = prod.item(0)
                    if self._append(self._added, tItem):
                        worklist.append(tItem)
            i += 1

    # Calculate the goto set, given a particular symbol.
    def goto(self, sym: SymbolSpec) -> ItemSet | None:
        items = self._symMap.get(sym)
        if items:
            result = ItemSet(i.advance() for i in items)
            result.closure()
            return result
        else:
            return None


class Collection:
    """
    The canonical collection of LR(0) item sets of an augmented grammar.
    State 0 is the closure of {[<S'> ::= * Start $.]}; the remaining states
    are discovered breadth first by following goto() on every symbol that
    follows a dot.  States that are equal to an existing one are not added
    again; the existing state becomes the transition target instead.
    """

    def __init__(self, grammar: Grammar, verbose: bool = False) -> None:
        self._verbose = verbose
        self.itemSets: List[ItemSet] = []
        # gotos[i][X] is the state reached from state i on symbol X.
        self.gotos: List[GotoState] = []
        self._itemSetsHash: Dict[ItemSet, int] = {}

        self._items(grammar.augment())

    def __len__(self) -> int:
        return len(self.itemSets)

    def __getitem__(self, index: int) -> ItemSet:
        return self.itemSets[index]

    def __iter__(self) -> Iterator[ItemSet]:
        return iter(self.itemSets)

    def index(self, itemSet: ItemSet) -> Optional[int]:
        return self._itemSetsHash.get(itemSet)

    def goto(self, state: int, sym: SymbolSpec) -> Optional[int]:
        return self.gotos[state].get(sym)

    def _add(self, itemSet: ItemSet) -> int:
        index = len(self.itemSets)
        self.itemSets.append(itemSet)
        self.gotos.append({})
        self._itemSetsHash[itemSet] = index
        if self._verbose:
            sys.stdout.write("+")
            sys.stdout.flush()
        return index

    # Compute the collection of sets of LR(0) items.
    def _items(self, startProd: Production) -> None:
        if self._verbose:
            print(
                "slrtable.Table: Generating LR(0) itemset collection... ",
                end=" ",
            )

        # Add {[<S'> ::= * Start $.]} to itemSets.
        tItemSet = ItemSet((startProd.item(0),))
        tItemSet.closure()
        self._add(tItemSet)

        # itemSets grows while it is being processed.
        i = 0
        while i < len(self.itemSets):
            itemSet = self.itemSets[i]
            for sym in itemSet.symbols():
                # [<S'> ::= Start * $.] accepts rather than shifts.
                if sym == eoi:
                    continue
                gotoSet = itemSet.goto(sym)
                assert gotoSet is not None
                j = self._itemSetsHash.get(gotoSet)
                if j is None:
                    j = self._add(gotoSet)
                self.gotos[i][sym] = j
            i += 1

        if self._verbose:
            sys.stdout.write("\n")
            sys.stdout.flush()
