"""Evaluación del texto canónico producido por ``NotationTranslator``.

No se usa ``eval``: un intérprete descendente recursivo recorre los
tokens y solo conoce los operadores aritméticos, los paréntesis, los
literales numéricos y los nombres del espacio del proveedor.
"""

import contextlib
import math
import operator

from notation_translator import LPAREN, NAME, NUMBER, OP, RPAREN, tokenize


FACTORIAL_LIMIT = 170


class PythonMathProvider:
    """Provee funciones y constantes matemáticas en un namespace seguro."""

    def working_precision(self):
        return contextlib.nullcontext()

    def number(self, text: str):
        return float(text)

    def ensure_real(self, value):
        if isinstance(value, complex):
            raise ValueError("Resultado complejo")
        return value

    def to_float(self, value) -> float:
        return float(self.ensure_real(value))

    def power(self, base, exponent):
        return operator.pow(base, exponent)

    @staticmethod
    def _factorial(x):
        if not math.isfinite(x):
            raise ValueError("factorial no admite infinito o NaN")
        n = math.floor(x)
        if n < 0 or n > FACTORIAL_LIMIT:
            raise ValueError(f"factorial fuera de rango: {n}")
        return float(math.factorial(n))

    def build_namespace(self) -> dict:
        return {
            "sin": math.sin,
            "cos": math.cos,
            "tan": math.tan,
            "sqrt": math.sqrt,
            "log": math.log,
            "log10": math.log10,
            "factorial": self._factorial,
            "pi": math.pi,
            "e": math.e,
        }


class FormulaEvaluator:
    """Interpreta aritmética canónica y devuelve su valor numérico.

    Gramática::

        expression := term (("+" | "-") term)*
        term       := factor (("*" | "/") factor)*
        factor     := ("+" | "-") factor | power
        power      := primary ("**" factor)?
        primary    := NUMBER | NAME | NAME "(" expression ")" | "(" expression ")"

    Raises:
        ValueError: sintaxis inválida, nombre desconocido o dominio.
        ZeroDivisionError: división por cero.
        OverflowError: resultado demasiado grande.
    """

    MAX_DEPTH = 100

    _ADDITIVE = {"+": operator.add, "-": operator.sub}
    _MULTIPLICATIVE = {"*": operator.mul, "/": operator.truediv}
    _UNARY = {"+": operator.pos, "-": operator.neg}

    def __init__(self, provider=None):
        self._provider = provider if provider is not None else PythonMathProvider()
        self._tokens = []
        self._pos = 0
        self._depth = 0
        self._namespace = {}

    def evaluate(self, expression: str) -> float:
        if not isinstance(expression, str) or not expression.strip():
            raise ValueError("Expresión vacía")

        self._tokens = tokenize(expression)
        self._pos = 0
        self._depth = 0
        with self._provider.working_precision():
            self._namespace = self._provider.build_namespace()
            value = self._expression()
            if self._peek() is not None:
                raise ValueError(f"Error de sintaxis cerca de '{self._peek().text}'")
            return self._provider.to_float(value)

    # ── Cursor ───────────────────────────────────────────────────

    def _peek(self):
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _advance(self):
        tok = self._peek()
        if tok is None:
            raise ValueError("Expresión incompleta")
        self._pos += 1
        return tok

    def _expect(self, kind: str):
        tok = self._advance()
        if tok.kind != kind:
            raise ValueError(f"Se esperaba '{kind}' y se encontró '{tok.text}'")
        return tok

    def _peek_op(self, table):
        tok = self._peek()
        if tok is not None and tok.kind == OP and tok.text in table:
            return tok.text
        return None

    # ── Reglas ───────────────────────────────────────────────────

    def _expression(self):
        self._depth += 1
        if self._depth > self.MAX_DEPTH:
            raise ValueError("Expresión demasiado anidada")

        value = self._term()
        while True:
            op = self._peek_op(self._ADDITIVE)
            if op is None:
                break
            self._advance()
            value = self._ADDITIVE[op](value, self._term())

        self._depth -= 1
        return value

    def _term(self):
        value = self._factor()
        while True:
            op = self._peek_op(self._MULTIPLICATIVE)
            if op is None:
                break
            self._advance()
            value = self._MULTIPLICATIVE[op](value, self._factor())
        return value

    def _factor(self):
        op = self._peek_op(self._UNARY)
        if op is not None:
            self._advance()
            self._depth += 1
            if self._depth > self.MAX_DEPTH:
                raise ValueError("Expresión demasiado anidada")
            value = self._UNARY[op](self._factor())
            self._depth -= 1
            return value
        return self._power()

    def _power(self):
        base = self._primary()
        if self._peek_op({"**"}) is None:
            return base
        self._advance()
        self._depth += 1
        if self._depth > self.MAX_DEPTH:
            raise ValueError("Expresión demasiado anidada")
        exponent = self._factor()
        self._depth -= 1
        # Base negativa con exponente fraccionario da un complejo.
        return self._provider.ensure_real(self._provider.power(base, exponent))

    def _primary(self):
        tok = self._advance()

        if tok.kind == NUMBER:
            return self._provider.number(tok.text)

        if tok.kind == LPAREN:
            value = self._expression()
            self._expect(RPAREN)
            return value

        if tok.kind == NAME:
            return self._name(tok.text)

        raise ValueError(f"Token no permitido: '{tok.text}'")

    def _name(self, name: str):
        if name not in self._namespace:
            raise ValueError(f"Identificador no permitido: {name}")

        target = self._namespace[name]
        nxt = self._peek()
        if callable(target):
            if nxt is None or nxt.kind != LPAREN:
                raise ValueError(f"Falta '(' después de {name}")
            self._advance()
            argument = self._expression()
            self._expect(RPAREN)
            return self._provider.ensure_real(target(argument))

        if nxt is not None and nxt.kind == LPAREN:
            raise ValueError(f"{name} no es una función")
        return target
