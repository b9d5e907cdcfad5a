"""Pruebas de la máquina de estados de entrada."""

import pytest

from calculator_engine import CalculatorEngine
from calculator_session import CalculatorSession, RenderState
from history_store import HistoryEntry


@pytest.fixture
def session() -> CalculatorSession:
    return CalculatorSession()


def press(session: CalculatorSession, keys: str) -> CalculatorSession:
    session.press_sequence(keys.split())
    return session


class TestOperandEntry:
    """Transiciones de dígitos, separador decimal y retroceso."""

    def test_digits_replace_the_zero_placeholder(self, session: CalculatorSession) -> None:
        press(session, "0 0 7")
        assert session.buffer == "7"
        press(session, "8")
        assert session.buffer == "78"

    def test_decimal_separator_only_once(self, session: CalculatorSession) -> None:
        press(session, "1 , , 2")
        assert session.buffer == "1,2"

    def test_decimal_on_placeholder(self, session: CalculatorSession) -> None:
        press(session, ",")
        assert session.buffer == "0,"

    def test_point_key_is_an_alias_for_the_separator(self, session: CalculatorSession) -> None:
        press(session, "3 . 5")
        assert session.buffer == "3,5"

    def test_backspace(self, session: CalculatorSession) -> None:
        press(session, "1 2 3 ⌫")
        assert session.buffer == "12"
        press(session, "⌫ ⌫ ⌫")
        assert session.buffer == "0"

    def test_backspace_never_touches_the_expression(self, session: CalculatorSession) -> None:
        press(session, "2 + 5 ⌫")
        assert session.expression == "2 +"
        assert session.buffer == "0"

    def test_backspace_on_error(self, session: CalculatorSession) -> None:
        press(session, "1 ÷ 0 = ⌫")
        assert session.buffer == "0"

    def test_digit_after_error_starts_a_new_operand(self, session: CalculatorSession) -> None:
        press(session, "1 ÷ 0 = 7")
        assert session.buffer == "7"


class TestExpressionBuilding:
    """Confirmación de operadores, constantes y paréntesis."""

    def test_operator_commits_the_buffer(self, session: CalculatorSession) -> None:
        press(session, "1 2 +")
        assert session.expression == "12 +"
        assert session.buffer == "0"

    def test_operator_aliases(self, session: CalculatorSession) -> None:
        press(session, "2 * 3 /")
        assert session.expression == "2 × 3 ÷"

    def test_operator_after_error_restarts_from_zero(self, session: CalculatorSession) -> None:
        press(session, "1 ÷ 0 = +")
        assert session.expression == "0 +"

    def test_equals_on_a_pending_operator_uses_zero(self, session: CalculatorSession) -> None:
        press(session, "2 + =")
        assert session.buffer == "2"
        assert session.history[0].lhs == "2 + 0"

    def test_constants_start_an_operand(self, session: CalculatorSession) -> None:
        press(session, "2 × π =")
        assert session.history[0].lhs == "2 × π"
        assert session.buffer == "6.28318530718"

    def test_euler_constant(self, session: CalculatorSession) -> None:
        press(session, "e =")
        assert session.buffer == "2.718281828459"

    def test_parentheses(self, session: CalculatorSession) -> None:
        press(session, "( 2 + 3 ) × 4 =")
        assert session.history[0].lhs == "( 2 + 3 ) × 4"
        assert session.buffer == "20"

    def test_implicit_multiplication_before_parenthesis(self, session: CalculatorSession) -> None:
        press(session, "2 ( 3 ) =")
        assert session.buffer == "6"

    def test_power(self, session: CalculatorSession) -> None:
        press(session, "2 ^ 8 =")
        assert session.buffer == "256"

    def test_committed_decimals_use_the_canonical_point(self, session: CalculatorSession) -> None:
        press(session, "1 , 5 ×")
        assert session.expression == "1.5 ×"
        assert session.render_state().expression == "1,5 ×"
        press(session, "2 , 5 =")
        assert session.history[0].lhs == "1.5 × 2,5"
        assert session.render_state().buffer == "3,75"

    def test_results_in_exponential_notation_can_be_reused(self, session: CalculatorSession) -> None:
        session.set_buffer("1.00000000e+12")
        press(session, "× 2 =")
        assert session.buffer == "2.00000000e+12"


class TestEquals:
    """Evaluación con '=', manejo de fallos y registro en el historial."""

    def test_two_plus_three(self, session: CalculatorSession) -> None:
        press(session, "2 + 3 =")
        assert session.expression == ""
        assert session.buffer == "5"
        assert session.history.entries() == [HistoryEntry("2 + 3", "5")]

    def test_failure_shows_error_and_records_nothing(self, session: CalculatorSession) -> None:
        press(session, "1 ÷ 0 =")
        assert session.buffer == "Error"
        assert session.expression == ""
        assert len(session.history) == 0

    def test_history_capacity(self, session: CalculatorSession) -> None:
        for i in range(55):
            session.press("C")
            press(session, " ".join(str(i)) + " =")
        assert len(session.history) == 50
        assert session.history[0].lhs == "54"
        assert session.history[49].lhs == "5"

    def test_clear_is_idempotent(self, session: CalculatorSession) -> None:
        press(session, "2 + 3 C C")
        assert session.buffer == "0"
        assert session.expression == ""

    def test_long_power_chain_shows_error(self, session: CalculatorSession) -> None:
        session.press_sequence(["1", "^"] * 600 + ["1", "="])
        assert session.buffer == "Error"
        assert session.expression == ""
        press(session, "2 + 3 =")
        assert session.buffer == "5"

    def test_evaluated_text_cannot_reach_other_names(self, session: CalculatorSession) -> None:
        session.memory.add(3.0)
        for text in ["__import__('os')", "memory", "history", "self"]:
            session.set_buffer(text)
            session.press("=")
            assert session.buffer == "Error"
        assert session.memory.value == 3.0


class TestImmediateFunctions:
    """Funciones, factorial y porcentaje aplicados al buffer."""

    def test_square_root_and_logs(self, session: CalculatorSession) -> None:
        press(session, "9 √")
        assert session.buffer == "3"
        press(session, "C 1 0 0 log")
        assert session.buffer == "2"
        press(session, "C 1 ln")
        assert session.buffer == "0"

    def test_factorial(self, session: CalculatorSession) -> None:
        press(session, "5 !")
        assert session.buffer == "120"
        press(session, "C 1 7 1 !")
        assert session.buffer == "Error"

    def test_functions_leave_the_expression_untouched(self, session: CalculatorSession) -> None:
        press(session, "2 + 1 7 1 !")
        assert session.expression == "2 +"
        assert session.buffer == "Error"

    def test_percent(self, session: CalculatorSession) -> None:
        press(session, "5 0 %")
        assert session.buffer == "0.5"
        assert session.render_state().buffer == "0,5"

    def test_trig_follows_the_angle_mode(self, session: CalculatorSession) -> None:
        press(session, "9 0 sin")
        assert session.buffer == "1"
        assert session.toggle_angle_mode() == "rad"
        press(session, "C 9 0 sin")
        assert session.buffer == "0.893996663601"

    def test_angle_mode_is_not_reset_by_calculation(self, session: CalculatorSession) -> None:
        session.angle_mode = "rad"
        press(session, "2 + 3 = C")
        assert session.angle_mode == "rad"

    def test_invalid_angle_mode(self, session: CalculatorSession) -> None:
        with pytest.raises(ValueError):
            session.angle_mode = "grad"
        assert session.angle_mode == "deg"


class TestMemoryAndHistory:
    """Operaciones externas de memoria e historial."""

    def test_memory_add_recall_subtract(self, session: CalculatorSession) -> None:
        press(session, "5")
        session.memory_add()
        session.memory_add()
        press(session, "C 3")
        session.memory_subtract()
        assert session.memory.value == 7.0
        press(session, "C")
        session.memory_recall()
        assert session.buffer == "7"
        assert session.render_state().memory == "M: 7"

    def test_memory_indicator_is_localized(self, session: CalculatorSession) -> None:
        press(session, "2 , 5")
        session.memory_add()
        assert session.render_state().memory == "M: 2,5"

    def test_invalid_buffer_leaves_memory_unchanged(self, session: CalculatorSession) -> None:
        press(session, "1 ÷ 0 =")
        session.memory_add()
        assert session.memory.value == 0
        assert session.render_state().memory == ""

    def test_memory_clear(self, session: CalculatorSession) -> None:
        press(session, "4")
        session.memory_add()
        session.memory_clear()
        assert session.memory.value == 0

    def test_select_history_overwrites_the_buffer(self, session: CalculatorSession) -> None:
        press(session, "2 + 3 = C 9 × 9 =")
        session.select_history(1)
        assert session.buffer == "5"
        assert session.expression == ""

    def test_set_buffer_ignores_empty_text(self, session: CalculatorSession) -> None:
        session.set_buffer("42")
        session.set_buffer("")
        assert session.buffer == "42"

    def test_clear_history(self, session: CalculatorSession) -> None:
        press(session, "2 + 3 =")
        session.clear_history()
        assert len(session.history) == 0


class TestRenderSink:
    """Notificaciones enviadas al receptor de pantalla."""

    def test_every_transition_is_rendered(self) -> None:
        states: list[RenderState] = []
        session = CalculatorSession(render_sink=states.append)
        press(session, "2 + 3 =")
        assert len(states) == 4
        assert states[-1] == RenderState(
            buffer="5",
            expression="",
            memory="",
            history=[HistoryEntry("2 + 3", "5")],
        )

    def test_unknown_keys_are_ignored(self) -> None:
        states: list[RenderState] = []
        session = CalculatorSession(render_sink=states.append)
        session.press("foo")
        assert states == []
        assert session.buffer == "0"

    def test_custom_engine(self) -> None:
        session = CalculatorSession(engine=CalculatorEngine(angle_mode="rad"))
        assert session.angle_mode == "rad"
