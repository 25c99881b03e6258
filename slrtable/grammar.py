# ============================================================================
# Copyright (c) 2007 Jason Evans <jasone@canonware.com>
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
# ============================================================================
"""
This module contains the classes that make up a grammar: symbols,
productions, LR(0) items and the parser actions stored in a table.
"""

from __future__ import annotations
from typing import (
    Any,
    Dict,
    Iterator,
    List,
    Optional,
    Tuple,
    Type,
)

import re

from mypy_extensions import mypyc_attr


@mypyc_attr(allow_interpreted_subclasses=True)
class SymbolSpec:
    """
    Base class of grammar symbols.  There are four kinds of symbols:
    non-terminals, terminals (tokens), and the two reserved symbols epsilon
    and end-of-input.  Two symbols are equal when they are of the same kind
    and have the same name.
    """

    def __init__(self, name: str) -> None:
        self.name = name

    def __hash__(self) -> int:
        return hash(self.name)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, SymbolSpec):
            return type(self) is type(other) and self.name == other.name
        else:
            return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, SymbolSpec):
            return self.name < other.name
        else:
            return NotImplemented

    def __repr__(self) -> str:
        return self.name

    __str__ = __repr__


class NontermSpec(SymbolSpec):
    nonterm_re = re.compile(r"\A[A-Z]")

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.productions: List[Production] = []


# AKA terminal symbol.
class TokenSpec(SymbolSpec):
    pass


# $.
class EndOfInputSpec(TokenSpec):
    def __init__(self) -> None:
        super().__init__("$")


eoi = EndOfInputSpec()


# epsilon.
class EpsilonSpec(TokenSpec):
    def __init__(self) -> None:
        super().__init__("epsilon")


epsilon = EpsilonSpec()

# Name of the synthetic start symbol added by Grammar.augment().
START_NAME = "<S'>"


def classify(name: str) -> Type[SymbolSpec]:
    """
    Return the symbol class a name belongs to.  epsilon and $ are matched
    literally; any other name is a non-terminal if it starts with an upper
    case letter, and a terminal otherwise.
    """
    if name == epsilon.name:
        return EpsilonSpec
    if name == eoi.name:
        return EndOfInputSpec
    if NontermSpec.nonterm_re.match(name):
        return NontermSpec
    return TokenSpec


class Production:
    """
    A production lhs ::= rhs.  The rhs is never empty; the empty
    alternative is represented by (epsilon,).  seq is the reduction number
    of the production, or None for the augmented start production.
    """

    def __init__(
        self,
        lhs: NontermSpec,
        rhs: Tuple[SymbolSpec, ...],
        seq: Optional[int] = None,
    ) -> None:
        assert len(rhs) > 0
        self.lhs = lhs
        self.rhs = rhs
        self.seq = seq

    def __hash__(self) -> int:
        return hash((self.lhs, self.rhs))

    def __eq__(self, other: Any) -> bool:
        if type(other) is Production:
            return self.lhs == other.lhs and self.rhs == other.rhs
        else:
            return NotImplemented

    def __repr__(self) -> str:
        return "%r ::= %s." % (
            self.lhs,
            " ".join(["%r" % elm for elm in self.rhs]),
        )

    @property
    def isEpsilon(self) -> bool:
        return self.rhs == (epsilon,)

    def item(self, dotPos: int) -> Item:
        return Item(self, dotPos)


class Item:
    """
    LR(0) item: a production with a cursor (the dot) at dotPos.
    """

    __slots__ = ("production", "dotPos", "_hash")

    def __init__(self, production: Production, dotPos: int) -> None:
        assert 0 <= dotPos <= len(production.rhs)
        self.production = production
        self.dotPos = dotPos
        self._hash = hash((production, dotPos))

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: Any) -> bool:
        if type(other) is Item:
            return (
                self.dotPos == other.dotPos
                and self.production == other.production
            )
        else:
            return NotImplemented

    def __repr__(self) -> str:
        return self.lr0__repr__()

    def lr0__repr__(self) -> str:
        strs = []
        strs.append("[%r ::=" % self.production.lhs)
        rhs = self.production.rhs
        for i in range(len(rhs)):
            if i == self.dotPos:
                strs.append(" *")
            strs.append(" %r" % rhs[i])
        if self.dotPos == len(rhs):
            strs.append(" *")
        strs.append(".]")
        return "".join(strs)

    @property
    def symbol(self) -> Optional[SymbolSpec]:
        """The symbol after the dot, or None if the item is complete."""
        if self.complete:
            return None
        return self.production.rhs[self.dotPos]

    @property
    def complete(self) -> bool:
        # An epsilon item is complete before its only symbol.
        return (
            self.dotPos == len(self.production.rhs)
            or self.production.isEpsilon
        )

    def advance(self) -> Item:
        assert not self.complete
        return Item(self.production, self.dotPos + 1)


class Grammar:
    """
    An ordered collection of non-terminals and their productions.  The
    first non-terminal is the start symbol.  Productions are numbered from 1
    in declaration order; augment() adds the synthetic start production,
    which does not take part in the numbering.
    """

    def __init__(
        self,
        nonterms: List[NontermSpec],
        tokens: Optional[List[TokenSpec]] = None,
    ) -> None:
        assert len(nonterms) > 0
        self.nonterms: Dict[str, NontermSpec] = {}
        for nonterm in nonterms:
            assert nonterm.name not in self.nonterms
            self.nonterms[nonterm.name] = nonterm
        self.tokens: Dict[str, TokenSpec] = {}
        for token in tokens or []:
            self.tokens[token.name] = token
        self.userStartSym = nonterms[0]

        self.productions: List[Production] = []
        for nonterm in nonterms:
            for prod in nonterm.productions:
                prod.seq = len(self.productions) + 1
                self.productions.append(prod)

        self.startSym: Optional[NontermSpec] = None
        self.startProd: Optional[Production] = None

    def __repr__(self) -> str:
        return "\n".join("%r" % prod for prod in self.allProductions())

    def augment(self) -> Production:
        """
        Add <S'> ::= Start $. and return it.  Calling augment() again returns
        the production added by the first call.
        """
        if self.startProd is None:
            self.startSym = NontermSpec(START_NAME)
            self.startProd = Production(
                self.startSym, (self.userStartSym, eoi)
            )
            self.startSym.productions.append(self.startProd)
        return self.startProd

    def allNonterms(self) -> Iterator[NontermSpec]:
        if self.startSym is not None:
            yield self.startSym
        yield from self.nonterms.values()

    def allProductions(self) -> Iterator[Production]:
        if self.startProd is not None:
            yield self.startProd
        yield from self.productions


class Action:
    """
    Abstract base class, subclassed by {Shift,Reduce,Accept}Action."""

    def __init__(self) -> None:
        pass

    def code(self) -> str:
        raise NotImplementedError


class ShiftAction(Action):
    """
    Shift action, with assocated nextState.  Shifts on non-terminals are
    the goto entries of the table."""

    def __init__(self, nextState: int) -> None:
        super().__init__()
        self.nextState = nextState

    def __repr__(self) -> str:
        return "[shift %r]" % self.nextState

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ShiftAction):
            return False
        if self.nextState != other.nextState:
            return False
        return True

    def code(self) -> str:
        return "e%d" % self.nextState


class ReduceAction(Action):
    """
    Reduce action, with associated production."""

    def __init__(self, production: Production) -> None:
        super().__init__()
        assert production.seq is not None
        self.production = production

    def __repr__(self) -> str:
        return "[reduce %r]" % self.production

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ReduceAction):
            return False
        if self.production != other.production:
            return False
        return True

    def code(self) -> str:
        seq = self.production.seq
        assert seq is not None
        return "r%d" % seq


class AcceptAction(Action):
    def __repr__(self) -> str:
        return "[accept]"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, AcceptAction)

    def code(self) -> str:
        return "ac"


ActionState = Dict[SymbolSpec, Action]
GotoState = Dict[SymbolSpec, int]
