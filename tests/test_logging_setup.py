import logging

from logging_setup import setup_logger


def test_setup_logger_sets_level_and_single_handler():
    logger = setup_logger("calculadora.test", logging.DEBUG)
    setup_logger("calculadora.test", logging.DEBUG)
    console = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
    assert logger.level == logging.DEBUG
    assert len(console) == 1


def test_unknown_symbol_is_logged_at_debug(caplog):
    from calculator_engine import CalculatorEngine

    engine = CalculatorEngine()
    with caplog.at_level(logging.DEBUG, logger="calculator_engine"):
        engine.perform_operation("?")
    assert "Símbolo desconocido" in caplog.text
