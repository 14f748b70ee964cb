from calculator_engine import CalculatorEngine, Operand, Symbol
from display_text import format_result
import math
import re
import sys


_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


def _run(sequence: str) -> CalculatorEngine:
	"""Ejecuta una secuencia separada por espacios: números y símbolos."""
	engine = CalculatorEngine()
	for token in sequence.split():
		if _NUMBER_RE.fullmatch(token):
			engine.set_operand(float(token))
		else:
			engine.perform_operation(token)
	return engine


def _replayed(engine: CalculatorEngine) -> CalculatorEngine:
	captured = engine.program
	engine.clear()
	engine.program = captured
	return engine


def inspect_sequence(sequence: str) -> None:
	"""Imprime el estado del motor tras cada llamada de la secuencia."""
	engine = CalculatorEngine()

	print("Sequence inspection")
	print(f"sequence:       {sequence}")

	for i, token in enumerate(sequence.split(), start=1):
		if _NUMBER_RE.fullmatch(token):
			engine.set_operand(float(token))
			call = f"set_operand({token})"
		else:
			engine.perform_operation(token)
			call = f"perform_operation({token!r})"
		pending = " (pending)" if engine.is_pending else ""
		print(f"  {i}. {call:<28} -> {format_result(engine.result)}{pending}")

	print(f"program length: {len(engine.program)}")
	print(f"final result:   {format_result(engine.result)}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	checks.append(("operand sets result", _run("42.5").result == 42.5))
	checks.append(("π ignores prior accumulator", _run("9 π").result == math.pi))
	checks.append(("e constant", _run("e").result == math.e))
	checks.append(("simple addition", _run("3 + 4 =").result == 7))

	chained = _run("3 + 4 + 5 =")
	expected_actual.append(("3 + 4 + 5 =", "12", format_result(chained.result)))
	checks.append(("chained addition folds left to right", chained.result == 12))

	no_precedence = _run("3 + 4 × 5 =")
	expected_actual.append(("3 + 4 × 5 =", "35", format_result(no_precedence.result)))
	checks.append(("no operator precedence", no_precedence.result == 35))

	checks.append((
		"operator then equals reuses accumulator",
		_run("3 + =").result == 6,
	))
	checks.append(("equals without pending is a no-op", _run("8 =").result == 8))
	checks.append(("unary applies immediately", _run("16 √").result == 4))
	checks.append(("cos of zero", _run("0 cos").result == 1))

	div_zero = _run("1 ÷ 0 =")
	expected_actual.append(("1 ÷ 0 =", "∞", format_result(div_zero.result)))
	checks.append(("divide by zero gives infinity", div_zero.result == math.inf))
	checks.append(("zero over zero gives NaN", math.isnan(_run("0 ÷ 0 =").result)))
	checks.append(("sqrt of negative gives NaN", math.isnan(_run("-1 √").result)))

	unknown = _run("5 ?")
	checks.append(("unknown symbol keeps result", unknown.result == 5))
	checks.append((
		"unknown symbol is logged",
		unknown.program == (Operand(5.0), Symbol("?")),
	))

	cleared = _run("3 + 4 =")
	cleared.clear()
	checks.append(("clear resets result", cleared.result == 0.0))
	checks.append(("clear empties program", cleared.program == ()))
	pending = _run("3 +")
	pending.clear()
	pending.perform_operation("=")
	checks.append(("clear drops pending", pending.result == 0.0 and not pending.is_pending))

	for sequence in ("3 + 4 + 5 =", "2 × π = cos", "9 √ + ? 1 =", "7 ÷ 2 −", "1 + 2 × 3 − 4 ÷ 5 ="):
		original = _run(sequence)
		before = original.result
		replayed = _replayed(original)
		same = replayed.result == before or (math.isnan(before) and math.isnan(replayed.result))
		checks.append((f"replay reproduces '{sequence}'", same))
		checks.append((
			f"replay keeps program length for '{sequence}'",
			len(replayed.program) == len(sequence.split()),
		))

	failed = [name for name, ok in checks if not ok]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_program_checks.py
	#   python regression_program_checks.py --inspect "3 + 4 × 5 ="
	if "--inspect" in sys.argv:
		try:
			sequence = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing sequence after --inspect")

		inspect_sequence(sequence)
	else:
		run_regressions()
