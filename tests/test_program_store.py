import json
import math

import pytest

from calculator_engine import CalculatorEngine, Operand, Symbol
from program_store import (
    ProgramFormatError,
    load_program,
    program_from_plist,
    program_to_plist,
    save_program,
)


def test_program_to_plist():
    program = (Operand(3.0), Symbol("+"), Operand(4.0), Symbol("="))
    assert program_to_plist(program) == [3.0, "+", 4.0, "="]


def test_non_finite_operands_are_wrapped():
    program = (Operand(math.inf), Operand(-math.inf), Operand(math.nan))
    assert program_to_plist(program) == [
        {"operand": "inf"}, {"operand": "-inf"}, {"operand": "nan"},
    ]


def test_program_from_plist():
    assert program_from_plist([3, "×", 0.5, "="]) == (
        Operand(3.0), Symbol("×"), Operand(0.5), Symbol("="),
    )


def test_program_from_plist_non_finite():
    program = program_from_plist([{"operand": "-inf"}, {"operand": "nan"}])
    assert program[0] == Operand(-math.inf)
    assert math.isnan(program[1].value)


@pytest.mark.parametrize("items", [
    "3 +",
    [True],
    [None],
    [[1]],
    [{"operand": "huge"}],
    [{"operand": "inf", "extra": 1}],
])
def test_program_from_plist_rejects_bad_items(items):
    with pytest.raises(ProgramFormatError):
        program_from_plist(items)


def test_program_to_plist_rejects_unknown_entries():
    with pytest.raises(ProgramFormatError):
        program_to_plist(["+"])


def test_save_and_load_round_trip(tmp_path):
    engine = CalculatorEngine()
    for call in (2, "×", "π", "=", "?", "÷", 0, "="):
        if isinstance(call, str):
            engine.perform_operation(call)
        else:
            engine.set_operand(call)

    path = tmp_path / "programa.json"
    save_program(path, engine.program)

    restored = CalculatorEngine()
    restored.program = load_program(path)
    assert restored.program == engine.program
    assert restored.result == engine.result == math.inf


def test_saved_file_format(tmp_path):
    path = tmp_path / "programa.json"
    save_program(path, (Operand(1.5), Symbol("√")))
    document = json.loads(path.read_text(encoding="utf-8"))
    assert document == {"version": 1, "program": [1.5, "√"]}


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_program(tmp_path / "no_existe.json")


@pytest.mark.parametrize("content", [
    "{not json",
    "[1, 2]",
    '{"version": 1}',
    '{"version": 2, "program": []}',
    '{"version": 1, "program": {"a": 1}}',
])
def test_load_rejects_malformed_files(tmp_path, content):
    path = tmp_path / "programa.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ProgramFormatError):
        load_program(path)


def test_load_rejects_operand_too_large_for_float(tmp_path):
    path = tmp_path / "programa.json"
    path.write_text('{"version": 1, "program": [' + "9" * 400 + ', "="]}', encoding="utf-8")
    with pytest.raises(ProgramFormatError, match="demasiado grande en 0"):
        load_program(path)


def test_load_rejects_non_utf8_file(tmp_path):
    path = tmp_path / "programa.json"
    path.write_bytes(b'\xff\xfe{"version": 1, "program": []}')
    with pytest.raises(ProgramFormatError):
        load_program(path)


def test_program_from_plist_rejects_huge_integer():
    with pytest.raises(ProgramFormatError):
        program_from_plist([10 ** 400])
