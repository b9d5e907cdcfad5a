from calculator_engine import CalculatorEngine
from calculator_session import CalculatorSession
import sys


def _walk(keys: str, *, angle_mode: str = "deg"):
	session = CalculatorSession(engine=CalculatorEngine(angle_mode=angle_mode))
	states = []

	for key in keys.split():
		session.press(key)
		state = session.render_state()
		states.append((key, state.expression, state.buffer))

	return session, states


def inspect_key_states(keys: str, *, angle_mode: str = "deg") -> None:
	"""Imprime expresión y buffer tras cada tecla de la secuencia."""
	session, states = _walk(keys, angle_mode=angle_mode)

	print("Key inspection")
	print(f"keys:       {keys}")
	print(f"angle mode: {angle_mode}")
	for key, expression, buffer in states:
		print(f"  {key:>4}  expr={expression!r:<24} buffer={buffer!r}")

	if len(session.history):
		entry = session.history[0]
		print(f"last history: {entry.lhs} = {entry.rhs}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	session, _ = _walk("2 + 3 =")
	checks.append(("2 + 3 = clears the expression", session.expression == ""))
	checks.append(("2 + 3 = records one history entry", len(session.history) == 1))
	expected_actual.append(("2 + 3 = left-hand side", "2 + 3", session.history[0].lhs))
	expected_actual.append(("2 + 3 = buffer", "5", session.buffer))

	session, _ = _walk("1 , 5 × 2 , 5 =")
	expected_actual.append(("1,5 × 2,5 display", "3,75", session.render_state().buffer))

	session, _ = _walk("5 !")
	expected_actual.append(("5!", "120", session.buffer))

	session, _ = _walk("1 7 1 !")
	expected_actual.append(("171!", "Error", session.buffer))

	session, _ = _walk("5 0 %")
	expected_actual.append(("50% display", "0,5", session.render_state().buffer))

	session, _ = _walk("9 0 sin")
	expected_actual.append(("sin 90 (deg)", "1", session.buffer))

	session, _ = _walk("9 0 sin", angle_mode="rad")
	checks.append(("sin 90 (rad) starts with 0.89", session.buffer.startswith("0.89")))

	session, _ = _walk("2 × π =")
	expected_actual.append(("2 × π", "6.28318530718", session.buffer))

	session, _ = _walk("1 ÷ 0 =")
	checks.append(("1 ÷ 0 shows the error sentinel", session.buffer == "Error"))
	checks.append(("1 ÷ 0 records no history", len(session.history) == 0))

	session, _ = _walk("1 ÷ 0 = + 2 =")
	expected_actual.append(("operator after error restarts from zero", "2", session.buffer))

	session, _ = _walk("( 2 + 3 ) × 4 =")
	expected_actual.append(("( 2 + 3 ) × 4", "( 2 + 3 ) × 4", session.history[0].lhs))
	expected_actual.append(("( 2 + 3 ) × 4 result", "20", session.buffer))

	session, _ = _walk("2 ( 3 ) =")
	expected_actual.append(("implicit multiplication 2 ( 3 )", "6", session.buffer))

	session, _ = _walk("2 ^ 1 0 =")
	expected_actual.append(("2 ^ 10", "1024", session.buffer))

	session, _ = _walk("1 2 ⌫ ⌫")
	checks.append(("backspace down to the zero placeholder", session.buffer == "0"))

	failed = [name for name, ok in checks if not ok]
	failed += [label for label, expected, actual in expected_actual if expected != actual]
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
	#   python regression_key_checks.py
	#   python regression_key_checks.py --inspect "2 × ( 3 + 4 ) ="
	#   python regression_key_checks.py --inspect "9 0 sin" --angle rad
	if "--inspect" in sys.argv:
		try:
			keys = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing key sequence after --inspect")

		angle_mode = "deg"
		if "--angle" in sys.argv:
			try:
				angle_mode = sys.argv[sys.argv.index("--angle") + 1]
			except IndexError:
				raise SystemExit("Invalid value for --angle")
			if angle_mode not in ("deg", "rad"):
				raise SystemExit("Invalid value for --angle")

		inspect_key_states(keys, angle_mode=angle_mode)
	else:
		run_regressions()
