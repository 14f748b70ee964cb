"""Conversión entre el texto de la pantalla y valores numéricos."""

import math
import re

from mpmath import mp


class DisplayParseError(ValueError):
    """El texto de la pantalla no representa un número."""


_NUMBER_RE = re.compile(
    r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$"
)

_SPECIAL_VALUES = {
    "NaN": math.nan,
    "∞": math.inf,
    "-∞": -math.inf,
}

SIGNIFICANT_DIGITS = 15


def parse_display(text: str) -> float:
    """Convierte el texto mostrado en un float.

    Acepta lo que teclea el usuario ("3", "3.", ".5") y lo que produce
    format_result ("1.0e+20", "∞", "NaN").

    Raises:
        DisplayParseError: el texto no es un número.
    """
    if text is None:
        raise DisplayParseError("Pantalla vacía")

    stripped = text.strip()
    if not stripped:
        raise DisplayParseError("Pantalla vacía")

    if stripped in _SPECIAL_VALUES:
        return _SPECIAL_VALUES[stripped]

    if not _NUMBER_RE.fullmatch(stripped):
        raise DisplayParseError(f"No es un número: {stripped}")

    return float(stripped)


def format_result(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if value == math.inf:
        return "∞"
    if value == -math.inf:
        return "-∞"
    if value == int(value) and abs(value) < 1e15:
        return str(int(value))
    return mp.nstr(mp.mpf(value), n=SIGNIFICANT_DIGITS)
