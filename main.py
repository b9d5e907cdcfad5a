"""Punto de entrada de la calculadora."""

import logging
import tkinter as tk

from calculator_engine import CalculatorEngine
from calculator_session import CalculatorSession
from calculator_ui import CalculatorApp


USE_MPMATH_BACKEND = False
MPMATH_DIGITS = 30
DEFAULT_ANGLE_MODE = "deg"
LOG_LEVEL = logging.WARNING


def build_session() -> CalculatorSession:
    if USE_MPMATH_BACKEND:
        from mpmath_provider import MPMathProvider

        provider = MPMathProvider(digits=MPMATH_DIGITS)
    else:
        provider = None
    engine = CalculatorEngine(provider=provider, angle_mode=DEFAULT_ANGLE_MODE)
    return CalculatorSession(engine=engine)


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    root = tk.Tk()
    root.geometry("440x760")
    root.minsize(400, 700)
    CalculatorApp(root, session=build_session())
    root.mainloop()


if __name__ == "__main__":
    main()
