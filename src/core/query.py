"""Construcción de filtros `field eq 'literal'` con escape.

Por qué un builder:
- Los nombres de configuración y los ids no se interpolan a mano: cada
  literal se cita y las comillas simples internas se duplican (regla OData).
- Los nombres de campo se validan para que nunca puedan inyectar operadores.

Gramática soportada (subset OData)::

    expr   := term (" and " term)*
    term   := field " eq " literal
    literal:= "'" (char | "''")* "'"
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_TERM_RE = re.compile(r"\s*([A-Za-z_][A-Za-z0-9_]*)\s+eq\s+'((?:[^']|'')*)'\s*")


def quote_literal(value: str) -> str:
    """Cita un literal de texto duplicando comillas simples."""

    if not isinstance(value, str):
        raise TypeError(f"filter literal must be a string, got {type(value).__name__}")
    return "'" + value.replace("'", "''") + "'"


def _check_field(name: str) -> str:
    if not _FIELD_RE.match(name):
        raise ValueError(f"invalid field name in filter: {name!r}")
    return name


@dataclass(frozen=True)
class FilterExpression:
    """Conjunción de igualdades campo/valor."""

    terms: tuple[tuple[str, str], ...]

    @classmethod
    def eq(cls, field: str, value: str) -> FilterExpression:
        return cls(terms=((_check_field(field), value),))

    def and_(self, other: FilterExpression) -> FilterExpression:
        return FilterExpression(terms=self.terms + other.terms)

    def render(self) -> str:
        return " and ".join(f"{name} eq {quote_literal(value)}" for name, value in self.terms)

    def __str__(self) -> str:
        return self.render()


def parse_filter(text: str) -> FilterExpression:
    """Inverso de `FilterExpression.render` (para stores locales)."""

    terms: list[tuple[str, str]] = []
    for chunk in _split_and(text):
        match = _TERM_RE.fullmatch(chunk)
        if match is None:
            raise ValueError(f"unsupported filter term: {chunk!r}")
        terms.append((match.group(1), match.group(2).replace("''", "'")))
    if not terms:
        raise ValueError("empty filter expression")
    return FilterExpression(terms=tuple(terms))


def _split_and(text: str) -> list[str]:
    # Separa por " and " solo fuera de literales.
    parts: list[str] = []
    buf: list[str] = []
    in_literal = False
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "'":
            in_literal = not in_literal
            buf.append(ch)
            i += 1
            continue
        if not in_literal and text.startswith(" and ", i):
            parts.append("".join(buf))
            buf = []
            i += len(" and ")
            continue
        buf.append(ch)
        i += 1
    tail = "".join(buf)
    if tail.strip():
        parts.append(tail)
    return parts


def odata_params(select: Sequence[str], filter_expression: str) -> dict[str, str]:
    """Parámetros `$select` / `$filter` para la Web API (httpx los codifica)."""

    return {
        "$select": ",".join(_check_field(f) for f in select),
        "$filter": filter_expression,
    }
