"""Normalización de identificadores (GUIDs) del host."""

from __future__ import annotations

from core.errors import InvalidIdentifier


def normalize_identifier(value: object) -> str:
    """Quita las llaves de un GUID tipo `{1234-abcd}`.

    Falla con `InvalidIdentifier` si no es texto o queda vacío.
    """

    if not isinstance(value, str) or not value:
        raise InvalidIdentifier(value)
    cleaned = value.replace("{", "").replace("}", "")
    if not cleaned.strip():
        raise InvalidIdentifier(value)
    return cleaned
