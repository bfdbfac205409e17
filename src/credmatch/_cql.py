"""CQL rendering rules shared by every describable matcher.

CQL is the small boolean query language matchers render themselves into:

    expr        := "true" | comparison | conjunction
    conjunction := "(" expr (" && " expr)* ")"
    comparison  := "(" field " == " value ")" | "true" | "false"
    value       := "null" | string | char | number | qualified-enum-ref

Only a closed set of value kinds has a literal form. Anything else renders
as None, meaning "cannot be expressed in CQL".
"""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from numbers import Integral

from credmatch._types import Describable, MatcherError

_SHORT_ESCAPES = {
    "\\": "\\\\",
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


class Char(str):
    """A single character expected value, rendered as a ``'c'`` literal.

    Python has no character type, so plain one-letter strings still render
    as string literals. Wrap a value in Char to get a character literal.

    >>> Char("x") == "x"
    True
    """

    __slots__ = ()

    def __new__(cls, value: str) -> Char:
        if not isinstance(value, str) or len(value) != 1:
            msg = f"Char requires exactly one character, got {value!r}"
            raise MatcherError(msg)
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"Char({str.__repr__(self)})"


def escape_java(text: str, quote: str = '"') -> str:
    """Escape text for use between ``quote`` characters in a CQL literal.

    Backslash, the quote character and control characters get backslash
    escapes; anything outside printable ASCII becomes ``\\uXXXX`` (astral
    characters as a surrogate pair). The result reads back unchanged with
    any Java or JSON string-literal reader.
    """
    out: list[str] = []
    for ch in text:
        if ch == quote:
            out.append("\\" + ch)
        elif ch in _SHORT_ESCAPES:
            out.append(_SHORT_ESCAPES[ch])
        elif " " <= ch <= "~":
            out.append(ch)
        else:
            out.append(_unicode_escape(ch))
    return "".join(out)


def _unicode_escape(ch: str) -> str:
    code = ord(ch)
    if code > 0xFFFF:
        code -= 0x10000
        high = 0xD800 + (code >> 10)
        low = 0xDC00 + (code & 0x3FF)
        return f"\\u{high:04X}\\u{low:04X}"
    return f"\\u{code:04X}"


def string_literal(value: str) -> str:
    return '"' + escape_java(value) + '"'


def char_literal(value: str) -> str:
    """Render a character literal.

    Unlike a string literal, the single quote is escaped and the double
    quote is kept as is: ``'"'`` rather than Java's ``'\\"'``, and
    ``'\\''`` for a single quote. Both forms read back as the same character.
    """
    return "'" + escape_java(value, quote="'") + "'"


def describe_value(name: str, value: object) -> str | None:
    """Render ``name == value`` as a CQL comparison.

    Returns None when value has no CQL literal form (composites, complex
    numbers, fractions, non-finite floats, arbitrary objects).

    Booleans render bare (``true``/``false``) rather than as a comparison.
    Check order matters: bool and IntEnum are ints, StrEnum and Char are
    strs.
    """
    match value:
        case None:
            return f"({name} == null)"
        case bool():
            return "true" if value else "false"
        case Enum():
            cls = type(value)
            return f"({name} == {cls.__module__}.{cls.__qualname__}.{value.name})"
        case Char():
            return f"({name} == {char_literal(value)})"
        case str():
            return f"({name} == {string_literal(value)})"
        case Integral():
            return f"({name} == {int(value)})"
        case float() if math.isfinite(value):
            return f"({name} == {float(value)!r})"
        case Decimal() if value.is_finite():
            return f"({name} == {value})"
        case _:
            return None


def describe(matcher: object) -> str | None:
    """Describe any matcher, treating non-describable matchers as None."""
    if isinstance(matcher, Describable):
        return matcher.describe()
    return None
