"""
This module contains functionality for reading a grammar from an ordered
mapping of head names to alternative strings.
"""
from __future__ import annotations
from typing import Any, Dict, List, Mapping, Sequence, Tuple

import collections.abc

from slrtable.interfaces import GrammarSource
from slrtable.grammar import (
    START_NAME,
    EndOfInputSpec,
    EpsilonSpec,
    Grammar,
    NontermSpec,
    Production,
    SymbolSpec,
    TokenSpec,
    classify,
    epsilon,
)
from slrtable import introspection
from slrtable.errors import GrammarFormatError


class MappingGrammarSource(GrammarSource):
    """
    MappingGrammarSource reads a grammar of the following form:

        {
            "E": ["E + T", "T"],
            "T": ["T * F", "F"],
            "F": ["( E )", "id", "epsilon"],
        }

    Heads must be non-terminal names (first character is an upper case
    letter).  Each alternative is a single string of symbol names separated
    by whitespace; the reserved name "epsilon" on its own denotes the empty
    alternative.  The first head is the start symbol.
    """

    def __init__(self, grammar: Mapping[str, Sequence[str]]) -> None:
        if not isinstance(grammar, collections.abc.Mapping):
            raise GrammarFormatError(
                "Grammar must be a mapping of heads to alternatives, got %r"
                % type(grammar).__name__
            )
        if len(grammar) == 0:
            raise GrammarFormatError("Grammar has no productions")
        self.grammar = grammar
        self._cache_tokens: List[TokenSpec] | None = None
        self._cache_nonterminals: Tuple[
            List[NontermSpec], NontermSpec
        ] | None = None

    def get_tokens(self) -> List[TokenSpec]:
        if self._cache_tokens is None:
            self._load()
        assert self._cache_tokens is not None
        return self._cache_tokens

    def get_nonterminals(self) -> Tuple[List[NontermSpec], NontermSpec]:
        if self._cache_nonterminals is None:
            self._load()
        assert self._cache_nonterminals is not None
        return self._cache_nonterminals

    def _load(self) -> None:
        # Declare all heads first, so that alternatives may refer to
        # non-terminals that are defined further down.
        nonterms: Dict[str, NontermSpec] = {}
        for head, alternatives in self.grammar.items():
            self._checkHead(head, alternatives)
            nonterms[head] = NontermSpec(head)

        tokens: Dict[str, TokenSpec] = {}
        for head, alternatives in self.grammar.items():
            lhs = nonterms[head]
            for alternative in alternatives:
                rhs = self._parseAlternative(
                    head, alternative, nonterms, tokens
                )
                prod = Production(lhs, rhs)
                if prod in lhs.productions:
                    raise GrammarFormatError(
                        "Duplicate alternative for %s: %r"
                        % (head, alternative)
                    )
                lhs.productions.append(prod)

        result = list(nonterms.values())
        self._cache_tokens = list(tokens.values())
        self._cache_nonterminals = (result, result[0])

    def _checkHead(self, head: Any, alternatives: Any) -> None:
        if not isinstance(head, str):
            raise GrammarFormatError(
                "Head must be a string, got %r" % (head,)
            )
        if classify(head) is not NontermSpec:
            raise GrammarFormatError(
                "Head is not a non-terminal name "
                "(must start with an upper case letter): %r" % head
            )
        if isinstance(alternatives, str) or not isinstance(
            alternatives, collections.abc.Sequence
        ):
            raise GrammarFormatError(
                "Alternatives of %s must be a sequence of strings, got %r"
                % (head, alternatives)
            )
        if len(alternatives) == 0:
            raise GrammarFormatError("Non-terminal %s has no alternatives"
                                     % head)

    def _parseAlternative(
        self,
        head: str,
        alternative: Any,
        nonterms: Dict[str, NontermSpec],
        tokens: Dict[str, TokenSpec],
    ) -> Tuple[SymbolSpec, ...]:
        if not isinstance(alternative, str):
            raise GrammarFormatError(
                "Alternative of %s must be a string, got %r"
                % (head, alternative)
            )
        names = introspection.parse_alternative(alternative)
        if len(names) == 0:
            raise GrammarFormatError(
                "Empty alternative for %s (use %r for the empty string)"
                % (head, epsilon.name)
            )

        rhs: List[SymbolSpec] = []
        for name in names:
            cls = classify(name)
            if cls is EpsilonSpec:
                if len(names) != 1:
                    raise GrammarFormatError(
                        "%r must be the only symbol of an alternative: "
                        "%s ::= %s" % (epsilon.name, head, alternative)
                    )
                rhs.append(epsilon)
            elif cls is EndOfInputSpec or name == START_NAME:
                raise GrammarFormatError(
                    "Reserved symbol %r used in alternative: %s ::= %s"
                    % (name, head, alternative)
                )
            elif cls is NontermSpec:
                nonterm = nonterms.get(name)
                if nonterm is None:
                    raise GrammarFormatError(
                        "Undefined non-terminal %s in alternative: %s ::= %s"
                        % (name, head, alternative)
                    )
                rhs.append(nonterm)
            else:
                token = tokens.get(name)
                if token is None:
                    token = tokens[name] = TokenSpec(name)
                rhs.append(token)
        return tuple(rhs)


def load_grammar(
    source: GrammarSource | Mapping[str, Sequence[str]]
) -> Grammar:
    """
    Build a Grammar from either a GrammarSource or a mapping that
    MappingGrammarSource understands.
    """
    grammar_source: GrammarSource
    if isinstance(source, GrammarSource):
        grammar_source = source
    else:
        grammar_source = MappingGrammarSource(source)

    nonterms, startSym = grammar_source.get_nonterminals()
    tokens = grammar_source.get_tokens()
    # The start symbol comes first.
    ordered = [startSym] + [nt for nt in nonterms if nt is not startSym]
    return Grammar(ordered, tokens)
