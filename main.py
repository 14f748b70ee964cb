"""Punto de entrada de la calculadora.

Uso:
    python main.py                 # calculadora vacía
    python main.py programa.json   # reproduce un programa guardado y guarda en él
"""

import logging
import sys
import tkinter as tk

from calculator_engine import CalculatorEngine
from calculator_ui import CalculatorApp
from logging_setup import setup_logger
from program_store import ProgramFormatError, load_program


WINDOW_GEOMETRY = "360x520"
WINDOW_MIN_SIZE = (320, 480)
LOG_LEVEL = logging.INFO
PROGRAM_PATH = "programa_calculadora.json"   # destino de Guardar si no se pasa archivo


def build_engine(program_path: str | None = None) -> CalculatorEngine:
    engine = CalculatorEngine()
    if program_path:
        engine.program = load_program(program_path)
    return engine


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    # Los módulos registran con su propio nombre y propagan al raíz
    setup_logger(None, LOG_LEVEL)
    logger = logging.getLogger("calculadora")
    logger.debug("Argumentos: %s", argv)

    program_path = argv[0] if argv else None
    try:
        engine = build_engine(program_path)
    except (OSError, ProgramFormatError) as exc:
        raise SystemExit(f"No se pudo cargar el programa: {exc}")

    root = tk.Tk()
    root.geometry(WINDOW_GEOMETRY)
    root.minsize(*WINDOW_MIN_SIZE)
    app = CalculatorApp(root, engine=engine, program_path=program_path or PROGRAM_PATH)
    if program_path:
        app.controller.show_result()
    root.mainloop()


if __name__ == "__main__":
    main()
