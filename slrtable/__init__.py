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
The slrtable module generates SLR(1) shift-reduce parsing tables from
context-free grammars, for use by hand-written parser drivers.

A grammar is an ordered mapping from non-terminal names to lists of
alternatives.  Each alternative is a string of symbol names separated by
whitespace.  Names that start with an upper case letter are non-terminals,
anything else is a terminal, and the reserved name "epsilon" on its own
denotes the empty alternative.  The first non-terminal is the start symbol:

    grammar = {
        "E": ["E + T", "T"],
        "T": ["T * F", "F"],
        "F": ["( E )", "id"],
    }

Table generation proceeds in the usual way.  The grammar is augmented with
a synthetic start production <S'> ::= E $., the FIRST and FOLLOW sets of all
non-terminals are computed, the canonical collection of LR(0) item sets is
built, and finally shift, goto and accept actions are placed according to
the transitions of the LR(0) automaton, while reduce actions are placed on
the FOLLOW set of the reduced non-terminal:

    table = slrtable.Table(grammar)
    table.action_table()    # {"e0": {"(": "e4", "id": "e5", ...}, ...}
    table.reductions()      # {"r1": (("E", "+", "T"), "E"), ...}

A grammar for which two different reductions end up in the same table cell
is not SLR(1); ConflictError is raised in that case, and no table is
produced.  Shift/reduce conflicts are resolved in favor of shifting, and
are recorded in Table.conflicts.

The following classes and functions make up the public interface:

  Table : SLR(1) table generator.

  Sets : FIRST/FOLLOW set computation.

  Collection : Canonical collection of LR(0) item sets.

  MappingGrammarSource : Reads and validates a grammar mapping.

  build() : Shorthand for Table(grammar).action_table(), .reductions().
"""

from __future__ import annotations


__all__ = (
    "AnyException",
    "Collection",
    "ConflictError",
    "Grammar",
    "GrammarError",
    "GrammarFormatError",
    "GrammarSource",
    "ItemSet",
    "MappingGrammarSource",
    "Sets",
    "Table",
    "build",
    "load_grammar",
    "__version__",
)

from slrtable._version import __version__
from slrtable.automaton import Collection, ItemSet
from slrtable.errors import (
    AnyException,
    ConflictError,
    GrammarError,
    GrammarFormatError,
)
from slrtable.grammar import Grammar
from slrtable.interfaces import GrammarSource
from slrtable.sets import Sets
from slrtable.source import MappingGrammarSource, load_grammar
from slrtable.table import Table, build
