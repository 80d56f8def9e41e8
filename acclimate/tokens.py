"""
Tokenizer and alias resolution.

The raw input is split once, globally, before any command is resolved:

    deploy api -r eu-west-1 --tag release candidate --force
    └──┬───┘   └─────────────────────┬─────────────────────┘
   positionals               option groups (by alias)

- positionals: every token before the first option-like token (anything
  starting with "-"), in order.
- aliased: for each alias token, the following non-alias tokens joined by a
  single space ("" when there are none). Aliases are kept as typed; resolution
  to canonical names happens per command node (resolve_aliases).
"""
from typing import NamedTuple


class Tokens(NamedTuple):
    positionals: tuple
    aliased: dict


def is_alias(token, /):
    """
    Whether `token` opens an option group ("-x", "--name", but not a bare "-").
    """
    return len(token) > 1 and token.startswith("-")


def tokenize(tokens, /):
    """
    Split raw tokens into positional tokens and alias → raw value groups.

    Tokens before the first token starting with "-" are positional; from there
    on every token belongs to an option group and is never reinterpreted as a
    positional. A repeated alias keeps its last value.
    """
    tokens = list(tokens)
    for index, token in enumerate(tokens):
        if token.startswith("-"):
            positionals, rest = tokens[:index], tokens[index:]
            break
    else:
        return Tokens(tuple(tokens), {})

    aliased = {}
    alias = None
    values = []
    for token in rest:
        if is_alias(token):
            if alias is not None:
                aliased[alias] = " ".join(values)
            alias = token
            values = []
        else:
            values.append(token)
    # Values before the first alias can only come from a leading bare "-",
    # which has no option to belong to.
    if alias is not None:
        aliased[alias] = " ".join(values)

    return Tokens(tuple(positionals), aliased)


def resolve_aliases(aliases, aliased, /):
    """
    Map every alias in `aliased` to its canonical option name.

    Aliases absent from the table are kept as they are (they may already be
    canonical, or belong to another command node).
    """
    return {aliases.get(alias, alias): value for alias, value in aliased.items()}


__all__ = (
    "Tokens",
    "is_alias",
    "tokenize",
    "resolve_aliases",
)
