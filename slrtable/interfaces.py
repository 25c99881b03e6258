"""
This module declares several structural ("duck typing") interfaces
that objects or classes can implement to be used in the library
"""

from __future__ import annotations

import abc

from slrtable.grammar import (
    ActionState,
    NontermSpec,
    TokenSpec,
)


class Table(abc.ABC):
    @abc.abstractmethod
    def actions(self) -> list[ActionState]:
        raise NotImplementedError

    @abc.abstractmethod
    def start_sym(self) -> NontermSpec:
        raise NotImplementedError

    @abc.abstractmethod
    def action_table(self) -> dict[str, dict[str, str]]:
        raise NotImplementedError

    @abc.abstractmethod
    def reductions(self) -> dict[str, tuple[tuple[str, ...], str]]:
        raise NotImplementedError


class GrammarSource(abc.ABC):
    @abc.abstractmethod
    def get_tokens(self) -> list[TokenSpec]:
        raise NotImplementedError

    @abc.abstractmethod
    def get_nonterminals(self) -> tuple[list[NontermSpec], NontermSpec]:
        raise NotImplementedError
