"""Ejecuta el script de regresión de teclas dentro de la suite."""

import pytest

from regression_key_checks import inspect_key_states, run_regressions


def test_regressions_pass(capsys: pytest.CaptureFixture[str]) -> None:
    run_regressions()
    assert "All regression checks passed." in capsys.readouterr().out


def test_inspect_prints_every_key(capsys: pytest.CaptureFixture[str]) -> None:
    inspect_key_states("2 + 3 =")
    out = capsys.readouterr().out
    assert "last history: 2 + 3 = 5" in out
    assert "expr='2 +'" in out
