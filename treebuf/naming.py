"""Canonical names for object fields and enum variants."""

from __future__ import annotations

_SEPARATORS = frozenset("-_ ")


def _ascii_lower(char: str) -> str:
    return char.lower() if char.isascii() else char


def _ascii_upper(char: str) -> str:
    return char.upper() if char.isascii() else char


def canonical_ident(name: str) -> str:
    """Return the camelCase form of ``name`` under which it is written to the wire.

    Leading and trailing characters that are not alphanumeric are dropped,
    separators (``-``, ``_`` and space) start a new word, as do digits and a
    capital following a lower-case letter.
    """
    end = len(name)
    while end and not name[end - 1].isalnum():
        end -= 1

    result: list[str] = []
    new_word = False
    found_real_char = False
    last_char = " "
    for char in name[:end]:
        if char in _SEPARATORS and found_real_char:
            new_word = True
        elif not found_real_char and not char.isalnum():
            continue
        elif char.isnumeric():
            found_real_char = True
            new_word = True
            result.append(char)
        elif new_word or (last_char != " " and last_char.islower() and char.isupper()):
            found_real_char = True
            new_word = False
            result.append(_ascii_upper(char))
        else:
            found_real_char = True
            last_char = char
            result.append(_ascii_lower(char))
    return "".join(result)