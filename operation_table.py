"""Tabla de operaciones de la calculadora.

Cada símbolo del teclado se asocia a una variante de Operation:
constante, operación unaria, operación binaria o igual. La tabla se
construye una sola vez al importar el módulo y se expone de solo lectura.

La aritmética sigue IEEE-754: dividir por cero, la raíz de un negativo
o el coseno de infinito producen inf/NaN en lugar de lanzar excepciones.
"""

import math
import operator
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Union


@dataclass(frozen=True)
class Constant:
    value: float


@dataclass(frozen=True)
class UnaryOperation:
    function: Callable[[float], float]


@dataclass(frozen=True)
class BinaryOperation:
    function: Callable[[float, float], float]


@dataclass(frozen=True)
class Equals:
    pass


Operation = Union[Constant, UnaryOperation, BinaryOperation, Equals]


# ── Funciones con semántica IEEE-754 ────────────────────────────

def divide(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        # El signo del cero del divisor decide el signo del infinito
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def square_root(x: float) -> float:
    if x < 0:
        return math.nan
    return math.sqrt(x)


def cosine(x: float) -> float:
    if math.isinf(x):
        return math.nan
    return math.cos(x)


# ── Construcción de la tabla ────────────────────────────────────

def build_operation_table() -> Mapping[str, Operation]:
    """Devuelve la tabla símbolo → operación, de solo lectura."""
    return MappingProxyType({
        "π": Constant(math.pi),
        "e": Constant(math.e),
        "√": UnaryOperation(square_root),
        "cos": UnaryOperation(cosine),
        "+": BinaryOperation(operator.add),
        "−": BinaryOperation(operator.sub),
        "×": BinaryOperation(operator.mul),
        "÷": BinaryOperation(divide),
        "=": Equals(),
    })


OPERATIONS = build_operation_table()
