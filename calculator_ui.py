"""
Interfaz gráfica de la calculadora de acumulador.

Usa tkinter. Toda la lógica de pantalla vive en KeypadController;
aquí solo se construyen los widgets y se conectan los eventos.
"""

import logging
import tkinter as tk
from tkinter import font as tkfont

from calculator_engine import CalculatorEngine
from display_text import DisplayParseError
from keypad_controller import KeypadController
from program_store import ProgramFormatError

logger = logging.getLogger(__name__)


class CalculatorApp:
    """Ventana principal de la calculadora."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "func":       "#45475A",
        "func_fg":    "#CDD6F4",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "result_fg":  "#A6E3A1",
    }

    # ── Definiciones del teclado ─────────────────────────────────
    #  Cada fila es una lista de (texto, acción, tipo_color)
    #  acción: "digit:<d>", "op:<símbolo>", "clear", "backspace",
    #          "save", "restore"

    KEYPAD = [
        [("Guardar", "save", "special"), ("Restaurar", "restore", "special")],

        [("π", "op:π", "func"), ("e", "op:e", "func"),
         ("√", "op:√", "func"), ("cos", "op:cos", "func")],

        [("AC", "clear", "special"), ("⌫", "backspace", "special"),
         ("÷", "op:÷", "op")],

        [("7", "digit:7", "num"), ("8", "digit:8", "num"),
         ("9", "digit:9", "num"), ("×", "op:×", "op")],

        [("4", "digit:4", "num"), ("5", "digit:5", "num"),
         ("6", "digit:6", "num"), ("−", "op:−", "op")],

        [("1", "digit:1", "num"), ("2", "digit:2", "num"),
         ("3", "digit:3", "num"), ("+", "op:+", "op")],

        [("0", "digit:0", "num"), (".", "digit:.", "num"),
         ("=", "op:=", "equals")],
    ]

    # Teclas del teclado físico → símbolo del motor
    KEY_OPERATIONS = {
        "+": "+",
        "-": "−",
        "*": "×",
        "/": "÷",
        "=": "=",
    }

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, engine: CalculatorEngine | None = None,
                 program_path=None):
        self.root = root
        self.root.title("Calculadora")
        self.root.configure(bg=self.C["bg"])
        self.root.resizable(False, False)

        self.display_var = tk.StringVar(value="0")
        self.controller = KeypadController(self.display_var, engine, program_path)

        self._init_fonts()
        self._create_display()
        self._create_keypad()
        self._bind_keyboard()

    @property
    def engine(self) -> CalculatorEngine:
        return self.controller.engine

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_result = tkfont.Font(family="Consolas", size=24, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=15)
        self._f_small  = tkfont.Font(family="Segoe UI", size=11)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        tk.Label(
            frame, textvariable=self.display_var,
            font=self._f_result, bg=self.C["display_bg"],
            fg=self.C["result_fg"], anchor="e",
        ).pack(fill="x", pady=(4, 4))

    # ── Teclado ──────────────────────────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        max_cols = max(len(row) for row in self.KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            spans = self._compute_spans(len(row_def), max_cols)
            col_pos = 0
            for idx, (text, action, kind) in enumerate(row_def):
                font = self._f_small if kind == "special" and len(text) > 2 else self._f_btn
                btn = tk.Button(
                    frame, text=text, font=font,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda a=action: self._on_key(a),
                )
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=8)
                col_pos += spans[idx]

        for r in range(len(self.KEYPAD)):
            frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        # Asignar columnas extra al último botón (generalmente '=')
        spans[-1] += extra
        return spans

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)
        self.root.bind("<Return>", lambda _e: self._on_key("op:="))
        self.root.bind("<KP_Enter>", lambda _e: self._on_key("op:="))
        self.root.bind("<Escape>", lambda _e: self._on_key("clear"))
        self.root.bind("<BackSpace>", lambda _e: self._on_key("backspace"))

    def _on_keypress(self, event):
        char = event.char
        if char and char in "0123456789.":
            self._on_key(f"digit:{char}")
        elif char in self.KEY_OPERATIONS:
            self._on_key(f"op:{self.KEY_OPERATIONS[char]}")

    # ── Acciones ─────────────────────────────────────────────────

    def _on_key(self, action: str):
        try:
            if action.startswith("digit:"):
                self.controller.touch_digit(action[6:])
            elif action.startswith("op:"):
                self.controller.touch_operation(action[3:])
            elif action == "clear":
                self.controller.clear()
            elif action == "backspace":
                self.controller.backspace()
            elif action == "save":
                self.controller.save_program()
            elif action == "restore":
                self.controller.restore_program()
        except DisplayParseError as exc:
            # La pantalla ya muestra el error
            logger.warning("Entrada no válida: %s", exc)
        except ProgramFormatError as exc:
            logger.warning("Programa guardado no válido: %s", exc)
        except OSError as exc:
            logger.error("No se pudo guardar el programa: %s", exc)
