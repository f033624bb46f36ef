"""Contrato del record store.

Por qué Protocol:
- El Core solo necesita "dame los registros de esta tabla que cumplen este
  filtro"; Dataverse, un JSON local o un stub de test sirven igual.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class RecordStore(Protocol):
    """Consulta genérica de registros.

    Reglas de diseño:
    - `query` es asíncrono porque típicamente hará I/O (HTTP).
    - `filter_expression` usa la gramática `field eq 'literal'` de `core.query`.
    - Cualquier excepción se propaga; el resolver la envuelve.
    """

    async def query(
        self,
        table: str,
        filter_expression: str,
        select: Sequence[str],
    ) -> list[dict[str, Any]]:
        ...
