"""
The slrtable module implements the following exception classes:

  * AnyException
  * GrammarError
  * GrammarFormatError
  * ConflictError
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from slrtable.grammar import Production, SymbolSpec


# ============================================================================
# Begin exceptions.
#
class AnyException(Exception):
    """
    Top-level class for all exceptions thrown within the slrtable module.
    """


class GrammarError(AnyException):
    """
    Top level grammar exception class, from which we derive all exceptions
    that are caused by the grammar a table is being generated for.
    """


class GrammarFormatError(GrammarError):
    """
    Grammar format error.  GrammarFormatError arises when the grammar source
    detects a malformed grammar: symbol names that cannot be classified,
    empty alternatives, undefined non-terminals and the like.
    """


class ConflictError(GrammarError):
    """
    Reduce/reduce conflict.  ConflictError arises when two different
    productions would have to be reduced in the same state on the same
    lookahead, meaning that the grammar is not SLR(1).  No table is produced.
    """

    def __init__(
        self,
        message: str,
        state: Optional[int] = None,
        symbol: Optional[SymbolSpec] = None,
        productions: tuple[Production, ...] = (),
    ) -> None:
        super().__init__(message)
        self.state = state
        self.symbol = symbol
        self.productions = productions


#
# End exceptions.
# ============================================================================
