"""Fórmulas financieras: interés simple, compuesto y cuota fija.

Las tasas se reciben en porcentaje (``5`` significa 5 % por periodo).
"""

import math

from result_formatter import PLACEHOLDER_TEXT, format_result


def _parse(*raw_values):
    values = []
    for raw in raw_values:
        try:
            number = float(raw)
        except (TypeError, ValueError):
            return None
        if math.isnan(number):
            return None
        values.append(number)
    return values


def simple_interest(principal: float, rate_percent: float, periods: float):
    amount = principal * (1 + rate_percent / 100 * periods)
    return amount, amount - principal


def compound_interest(principal: float, rate_percent: float, periods: float):
    amount = principal * math.pow(1 + rate_percent / 100, periods)
    return amount, amount - principal


def amortized_payment(present_value: float, rate_percent: float, periods: float) -> float:
    rate = rate_percent / 100
    if rate == 0:
        raise ZeroDivisionError("La tasa no puede ser cero")
    growth = math.pow(1 + rate, periods)
    return present_value * (rate * growth) / (growth - 1)


def describe_simple(principal, rate_percent, periods) -> str:
    values = _parse(principal, rate_percent, periods)
    if values is None:
        return PLACEHOLDER_TEXT
    amount, interest = simple_interest(*values)
    return f"Monto A = {format_result(amount)} — Interés J = {format_result(interest)}"


def describe_compound(principal, rate_percent, periods) -> str:
    values = _parse(principal, rate_percent, periods)
    if values is None:
        return PLACEHOLDER_TEXT
    try:
        amount, interest = compound_interest(*values)
    except (ValueError, OverflowError):
        return PLACEHOLDER_TEXT
    return f"Monto A = {format_result(amount)} — Interés J = {format_result(interest)}"


def describe_payment(present_value, rate_percent, periods) -> str:
    values = _parse(present_value, rate_percent, periods)
    if values is None:
        return PLACEHOLDER_TEXT
    try:
        payment = amortized_payment(*values)
    except (ValueError, ZeroDivisionError, OverflowError):
        return PLACEHOLDER_TEXT
    return f"Cuota PMT = {format_result(payment)}"
