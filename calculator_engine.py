"""
Motor de cálculo de la calculadora de acumulador.

Este módulo provee la clase CalculatorEngine, que mantiene un valor
acumulado y le aplica constantes y operadores. Las operaciones binarias
encadenadas se resuelven estrictamente de izquierda a derecha, sin
precedencia: "3 + 4 × 5 =" da 35.

Cada llamada queda registrada en un programa reproducible que se puede
exportar y volver a ejecutar desde un estado limpio.

Contrato de interfaz:
    - set_operand(value: float)
    - perform_operation(symbol: str)
    - clear()
    - result: propiedad de solo lectura
    - program: propiedad de lectura/escritura (tupla de Operand | Symbol)
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Union

from operation_table import (
    OPERATIONS,
    BinaryOperation,
    Constant,
    Equals,
    UnaryOperation,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Operand:
    value: float


@dataclass(frozen=True)
class Symbol:
    symbol: str


ProgramEntry = Union[Operand, Symbol]


@dataclass(frozen=True)
class PendingBinaryOperation:
    function: Callable[[float, float], float]
    first_operand: float


class CalculatorEngine:
    """Acumulador con operaciones pendientes y registro del programa."""

    def __init__(self):
        self._operations = OPERATIONS
        self._accumulator = 0.0
        self._pending: PendingBinaryOperation | None = None
        self._program: list[ProgramEntry] = []

    # ── Entradas ─────────────────────────────────────────────────

    def set_operand(self, value: float):
        """Fija el acumulador y registra el operando en el programa."""
        self._accumulator = float(value)
        self._program.append(Operand(self._accumulator))

    def perform_operation(self, symbol: str):
        """Aplica el símbolo al acumulador.

        El símbolo se registra siempre en el programa, aunque no esté en
        la tabla; en ese caso no cambia nada más.
        """
        self._program.append(Symbol(symbol))
        operation = self._operations.get(symbol)
        if operation is None:
            logger.debug("Símbolo desconocido ignorado: %r", symbol)
            return

        if isinstance(operation, Constant):
            self._accumulator = operation.value
        elif isinstance(operation, UnaryOperation):
            self._accumulator = operation.function(self._accumulator)
        elif isinstance(operation, BinaryOperation):
            self._execute_pending_binary_operation()
            self._pending = PendingBinaryOperation(
                function=operation.function,
                first_operand=self._accumulator,
            )
        elif isinstance(operation, Equals):
            self._execute_pending_binary_operation()

    def _execute_pending_binary_operation(self):
        if self._pending is None:
            return
        pending = self._pending
        self._accumulator = pending.function(pending.first_operand, self._accumulator)
        self._pending = None

    def clear(self):
        """Vuelve al estado inicial: acumulador 0.0, sin pendiente, programa vacío."""
        self._accumulator = 0.0
        self._pending = None
        self._program.clear()

    # ── Programa ─────────────────────────────────────────────────

    @property
    def program(self) -> tuple[ProgramEntry, ...]:
        """Copia inmutable del registro de llamadas desde el último clear()."""
        return tuple(self._program)

    @program.setter
    def program(self, entries: Iterable[ProgramEntry]):
        """Limpia el motor y reproduce las entradas en orden.

        Las entradas que no son Operand ni Symbol se ignoran.
        """
        # Se materializa antes de limpiar por si entries es el propio log
        entries = list(entries)
        self.clear()
        for entry in entries:
            if isinstance(entry, Operand):
                self.set_operand(entry.value)
            elif isinstance(entry, Symbol):
                self.perform_operation(entry.symbol)
            else:
                logger.debug("Entrada de programa ignorada: %r", entry)

    # ── Lectura ──────────────────────────────────────────────────

    @property
    def result(self) -> float:
        return self._accumulator

    @property
    def is_pending(self) -> bool:
        """True si una operación binaria espera su segundo operando."""
        return self._pending is not None
