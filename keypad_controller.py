"""
Controlador del teclado de la calculadora.

Traduce pulsaciones de botones en llamadas al motor y mantiene el texto
de la pantalla. No depende de tkinter: la pantalla es cualquier objeto
con get()/set(texto), por ejemplo un tk.StringVar.
"""

from pathlib import Path

from calculator_engine import CalculatorEngine
from display_text import DisplayParseError, format_result, parse_display
from program_store import ProgramFormatError, load_program, save_program


class KeypadController:
    """Estado de escritura de la pantalla y puente hacia el motor.

    Modelo de operación:
        1. Los dígitos se acumulan en la pantalla mientras is_typing es True
        2. Al pulsar un operador, el texto se convierte en operando
        3. Se ejecuta la operación y la pantalla muestra engine.result
    """

    MAX_DIGITS = 16     # caracteres máximos tecleados en la pantalla

    def __init__(self, display_var, engine: CalculatorEngine | None = None,
                 program_path=None):
        self.display = display_var
        self.engine = engine if engine is not None else CalculatorEngine()
        self.program_path = Path(program_path) if program_path else None
        self.is_typing = False
        self._saved_program = None
        self.display.set("0")

    # ── Dígitos ──────────────────────────────────────────────────

    def touch_digit(self, digit: str):
        if len(digit) != 1 or digit not in "0123456789.":
            raise ValueError(f"Dígito no válido: {digit!r}")

        if not self.is_typing:
            self.display.set("0." if digit == "." else digit)
            self.is_typing = True
            return

        current = self.display.get()
        if digit == "." and "." in current:
            return
        if len(current) >= self.MAX_DIGITS:
            return
        # Evita ceros a la izquierda ("007")
        if current == "0" and digit != ".":
            self.display.set(digit)
            return
        self.display.set(current + digit)

    def backspace(self):
        if not self.is_typing:
            return
        current = self.display.get()[:-1]
        if not current:
            self.display.set("0")
            self.is_typing = False
            return
        self.display.set(current)

    # ── Operaciones ──────────────────────────────────────────────

    def touch_operation(self, symbol: str):
        """Envía el operando tecleado (si lo hay) y aplica el símbolo.

        Raises:
            DisplayParseError: el texto de la pantalla no es un número.
                El motor no se modifica y la pantalla muestra el error.
        """
        if self.is_typing:
            try:
                operand = parse_display(self.display.get())
            except DisplayParseError as exc:
                self.is_typing = False
                self.display.set(f"Error: {exc}")
                raise
            self.engine.set_operand(operand)
            self.is_typing = False

        self.engine.perform_operation(symbol)
        self.show_result()

    def clear(self):
        self.engine.clear()
        self.is_typing = False
        self.display.set("0")

    # ── Instantánea del programa ─────────────────────────────────

    def save_program(self):
        """Guarda el programa actual en memoria y, si hay program_path, en disco.

        Raises:
            OSError: no se pudo escribir el archivo. La instantánea en
                memoria sí queda guardada.
        """
        self._saved_program = self.engine.program
        if self.program_path is None:
            return
        try:
            save_program(self.program_path, self._saved_program)
        except OSError as exc:
            self.is_typing = False
            self.display.set(f"Error: {exc.strerror or exc}")
            raise

    def restore_program(self):
        """Reproduce el último programa guardado.

        Con program_path se lee el archivo si existe; si no, se usa la
        instantánea en memoria. Sin ninguno de los dos no hace nada.

        Raises:
            ProgramFormatError: el archivo no es válido. El motor no se
                modifica y la pantalla muestra el error.
        """
        program = self._saved_program
        if self.program_path is not None and self.program_path.exists():
            try:
                program = load_program(self.program_path)
            except ProgramFormatError as exc:
                self.is_typing = False
                self.display.set(f"Error: {exc}")
                raise
        if program is None:
            return
        self._saved_program = program
        self.engine.program = program
        self.is_typing = False
        self.show_result()

    @property
    def has_saved_program(self) -> bool:
        if self._saved_program is not None:
            return True
        return self.program_path is not None and self.program_path.exists()

    def show_result(self):
        self.display.set(format_result(self.engine.result))
