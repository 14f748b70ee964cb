import pytest

from calculator_engine import CalculatorEngine, Operand, Symbol
from display_text import DisplayParseError
from keypad_controller import KeypadController
from program_store import ProgramFormatError, load_program


class _FakeVar:
    def __init__(self):
        self.v = ""

    def set(self, x):
        self.v = x

    def get(self):
        return self.v


def _press(controller, keys):
    for key in keys.split():
        if all(c in "0123456789." for c in key):
            for c in key:
                controller.touch_digit(c)
        else:
            controller.touch_operation(key)


@pytest.fixture
def controller():
    return KeypadController(_FakeVar())


def test_starts_showing_zero(controller):
    assert controller.display.get() == "0"
    assert not controller.is_typing


def test_typing_digits(controller):
    _press(controller, "123")
    assert controller.display.get() == "123"
    assert controller.is_typing


def test_leading_decimal_point(controller):
    controller.touch_digit(".")
    controller.touch_digit("5")
    assert controller.display.get() == "0.5"


def test_second_decimal_point_ignored(controller):
    _press(controller, "1.2.3")
    assert controller.display.get() == "1.23"


def test_leading_zero_replaced(controller):
    _press(controller, "0 ")
    controller.touch_digit("0")
    controller.touch_digit("7")
    assert controller.display.get() == "7"


def test_max_digits(controller):
    for _ in range(KeypadController.MAX_DIGITS + 5):
        controller.touch_digit("9")
    assert len(controller.display.get()) == KeypadController.MAX_DIGITS


def test_invalid_digit_rejected(controller):
    with pytest.raises(ValueError):
        controller.touch_digit("a")
    with pytest.raises(ValueError):
        controller.touch_digit("")


def test_addition_shows_result(controller):
    _press(controller, "3 + 4 =")
    assert controller.display.get() == "7"
    assert controller.engine.result == 7


def test_chained_operations(controller):
    _press(controller, "3 + 4 + ")
    assert controller.display.get() == "7"
    _press(controller, "5 =")
    assert controller.display.get() == "12"


def test_constant_and_unary(controller):
    _press(controller, "π")
    assert controller.display.get() == "3.14159265358979"
    _press(controller, "16 √")
    assert controller.display.get() == "4"


def test_digit_after_result_starts_new_number(controller):
    _press(controller, "2 × 3 = 5")
    assert controller.display.get() == "5"


def test_operator_without_typing_does_not_set_operand(controller):
    _press(controller, "3 + =")
    assert controller.display.get() == "6"
    assert controller.engine.program == (Operand(3.0), Symbol("+"), Symbol("="))


def test_divide_by_zero_shows_infinity(controller):
    _press(controller, "1 ÷ 0 =")
    assert controller.display.get() == "∞"


def test_unparseable_display_raises_and_keeps_engine(controller):
    _press(controller, "3 +")
    controller.touch_digit("4")
    controller.display.set("4x")
    with pytest.raises(DisplayParseError):
        controller.touch_operation("=")
    assert controller.display.get().startswith("Error: ")
    assert not controller.is_typing
    assert controller.engine.program == (Operand(3.0), Symbol("+"))


def test_clear(controller):
    _press(controller, "3 + 4")
    controller.clear()
    assert controller.display.get() == "0"
    assert controller.engine.result == 0.0
    assert controller.engine.program == ()
    assert not controller.is_typing


def test_backspace(controller):
    _press(controller, "12")
    controller.backspace()
    assert controller.display.get() == "1"
    controller.backspace()
    assert controller.display.get() == "0"
    assert not controller.is_typing


def test_backspace_ignored_after_result(controller):
    _press(controller, "12 + 3 =")
    controller.backspace()
    assert controller.display.get() == "15"


def test_save_and_restore_program(controller):
    _press(controller, "3 + 4 =")
    controller.save_program()
    assert controller.has_saved_program
    controller.clear()
    _press(controller, "9")
    controller.restore_program()
    assert controller.display.get() == "7"
    assert controller.engine.result == 7
    assert not controller.is_typing


def test_restore_without_snapshot_is_noop(controller):
    _press(controller, "8")
    controller.restore_program()
    assert controller.display.get() == "8"
    assert not controller.has_saved_program


def test_uses_given_engine():
    engine = CalculatorEngine()
    engine.set_operand(5)
    controller = KeypadController(_FakeVar(), engine)
    _press(controller, "+ 1 =")
    assert engine.result == 6


def test_save_program_writes_file(tmp_path):
    path = tmp_path / "programa.json"
    controller = KeypadController(_FakeVar(), program_path=path)
    _press(controller, "2 × 3 =")
    controller.save_program()
    assert load_program(path) == controller.engine.program


def test_restore_program_reads_file(tmp_path):
    path = tmp_path / "programa.json"
    writer = KeypadController(_FakeVar(), program_path=path)
    _press(writer, "9 √ + 1 =")
    writer.save_program()

    reader = KeypadController(_FakeVar(), program_path=path)
    assert reader.has_saved_program
    _press(reader, "5")
    reader.restore_program()
    assert reader.display.get() == "4"
    assert reader.engine.program == writer.engine.program


def test_restore_without_file_uses_memory_snapshot(tmp_path):
    controller = KeypadController(_FakeVar(), program_path=tmp_path / "no_existe.json")
    assert not controller.has_saved_program
    controller.restore_program()
    assert controller.display.get() == "0"


def test_restore_invalid_file_keeps_engine(tmp_path):
    path = tmp_path / "programa.json"
    path.write_text("{not json", encoding="utf-8")
    controller = KeypadController(_FakeVar(), program_path=path)
    _press(controller, "3 +")
    with pytest.raises(ProgramFormatError):
        controller.restore_program()
    assert controller.display.get().startswith("Error: ")
    assert controller.engine.program == (Operand(3.0), Symbol("+"))
