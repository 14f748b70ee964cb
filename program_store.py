"""
Persistencia del programa de la calculadora en JSON.

El programa se guarda como una lista al estilo "property list": números
para los operandos y cadenas para los símbolos. Los operandos no finitos
(inf, -inf, nan) no tienen representación JSON estándar y se guardan como
{"operand": "inf"} para no confundirlos con símbolos.

Formato de archivo:
    {"version": 1, "program": [3.0, "+", 4.0, "="]}
"""

import json
import logging
import math
from pathlib import Path

from calculator_engine import Operand, Symbol

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

_NON_FINITE = {
    "inf": math.inf,
    "-inf": -math.inf,
    "nan": math.nan,
}


class ProgramFormatError(ValueError):
    """El programa guardado no tiene un formato válido."""


def _encode_operand(value: float):
    if math.isnan(value):
        return {"operand": "nan"}
    if math.isinf(value):
        return {"operand": "inf" if value > 0 else "-inf"}
    return value


def program_to_plist(program) -> list:
    items = []
    for entry in program:
        if isinstance(entry, Operand):
            items.append(_encode_operand(entry.value))
        elif isinstance(entry, Symbol):
            items.append(entry.symbol)
        else:
            raise ProgramFormatError(f"Entrada desconocida: {entry!r}")
    return items


def program_from_plist(items) -> tuple:
    if not isinstance(items, list):
        raise ProgramFormatError("El programa debe ser una lista")

    program = []
    for index, item in enumerate(items):
        # bool es subclase de int y no cuenta como operando
        if isinstance(item, bool):
            raise ProgramFormatError(f"Elemento {index} no válido: {item!r}")
        if isinstance(item, (int, float)):
            try:
                value = float(item)
            except OverflowError as exc:
                raise ProgramFormatError(f"Operando demasiado grande en {index}") from exc
            program.append(Operand(value))
        elif isinstance(item, str):
            program.append(Symbol(item))
        elif isinstance(item, dict) and set(item) == {"operand"}:
            encoded = item["operand"]
            if encoded not in _NON_FINITE:
                raise ProgramFormatError(f"Operando no válido en {index}: {encoded!r}")
            program.append(Operand(_NON_FINITE[encoded]))
        else:
            raise ProgramFormatError(f"Elemento {index} no válido: {item!r}")
    return tuple(program)


def save_program(path, program):
    path = Path(path)
    document = {"version": FORMAT_VERSION, "program": program_to_plist(program)}
    path.write_text(
        json.dumps(document, ensure_ascii=False, indent=2, allow_nan=False),
        encoding="utf-8",
    )
    logger.info("Programa guardado en %s (%d entradas)", path, len(document["program"]))


def load_program(path) -> tuple:
    """Lee un programa guardado con save_program.

    Raises:
        FileNotFoundError: el archivo no existe.
        ProgramFormatError: JSON inválido o estructura inesperada.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ProgramFormatError("El archivo no está en UTF-8") from exc
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProgramFormatError(f"JSON inválido: {exc.msg}") from exc
    except ValueError as exc:
        # p. ej. enteros por encima del límite de dígitos del intérprete
        raise ProgramFormatError(f"JSON inválido: {exc}") from exc

    if not isinstance(document, dict) or "program" not in document:
        raise ProgramFormatError("Falta la clave 'program'")
    version = document.get("version")
    if version != FORMAT_VERSION:
        raise ProgramFormatError(f"Versión no soportada: {version!r}")

    program = program_from_plist(document["program"])
    logger.info("Programa cargado de %s (%d entradas)", path, len(program))
    return program
