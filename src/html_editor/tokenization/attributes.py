"""Attribute-list parsing for tag substrings.

Splits the text between a tag name and the closing ``>`` (or ``/>``) into an
ordered list of ``(name, value)`` pairs. Supported forms are ``key``,
``key=value``, ``key="quoted value"`` and ``key='quoted value'``, with
optional whitespace around ``=``.
"""

import html
from typing import List, Tuple

QUOTE_CHARS = "\"'"


def parse_attributes(raw: str, decode_entities: bool = True) -> List[Tuple[str, str]]:
    """Parse a raw attribute substring.

    Args:
        raw: Text between the tag name and the end of the tag
        decode_entities: Decode character references inside values

    Returns:
        Attribute pairs in source order; duplicates are kept and a missing
        value is the empty string
    """
    attrs: List[Tuple[str, str]] = []
    length = len(raw)
    i = 0

    while i < length:
        while i < length and raw[i].isspace():
            i += 1
        if i >= length:
            break

        name_start = i
        while i < length and not raw[i].isspace() and raw[i] != "=":
            i += 1
        name = raw[name_start:i]
        if not name:
            # Stray "=" with no attribute name in front of it
            i += 1
            continue

        after_name = i
        while i < length and raw[i].isspace():
            i += 1
        if i >= length or raw[i] != "=":
            attrs.append((name, ""))
            i = after_name
            continue

        i += 1
        while i < length and raw[i].isspace():
            i += 1

        if i < length and raw[i] in QUOTE_CHARS:
            quote = raw[i]
            closing = raw.find(quote, i + 1)
            if closing == -1:
                value = raw[i + 1:]
                i = length
            else:
                value = raw[i + 1:closing]
                i = closing + 1
        else:
            value_start = i
            while i < length and not raw[i].isspace():
                i += 1
            value = raw[value_start:i]

        if decode_entities and "&" in value:
            value = html.unescape(value)
        attrs.append((name, value))

    return attrs
