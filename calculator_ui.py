"""
Interfaz gráfica de la calculadora.

Usa tkinter. La interfaz solo traduce eventos (clics y teclado) a
teclas lógicas de ``CalculatorSession`` y dibuja el ``RenderState``
que la sesión le entrega; todo el cálculo es síncrono.
"""

import tkinter as tk
from tkinter import font as tkfont
from tkinter import ttk

import financial
import programmer
import unit_converter
from calculator_session import CalculatorSession


# ═════════════════════════════════════════════════════════════════
#  Teclado físico → teclas lógicas
# ═════════════════════════════════════════════════════════════════

KEYSYM_MAP = {
    "Return": "=",
    "KP_Enter": "=",
    "BackSpace": "⌫",
    "Escape": "C",
    "Delete": "C",
}

CHAR_MAP = {
    "*": "×",
    "/": "÷",
    ".": ",",
    ",": ",",
    "=": "=",
}

PASSTHROUGH_CHARS = set("0123456789+-()%^!")


def map_key_event(keysym: str, char: str):
    """Devuelve la tecla lógica de un evento de teclado, o ``None``."""
    if keysym in KEYSYM_MAP:
        return KEYSYM_MAP[keysym]
    if char in CHAR_MAP:
        return CHAR_MAP[char]
    if char and char in PASSTHROUGH_CHARS:
        return char
    return None


# ═════════════════════════════════════════════════════════════════
#  Aplicación principal
# ═════════════════════════════════════════════════════════════════

class CalculatorApp:
    """Ventana principal de la calculadora."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "func":       "#45475A",
        "func_fg":    "#CDD6F4",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "toggle_on":  "#A6E3A1",
        "expr_fg":    "#BAC2DE",
        "result_fg":  "#A6E3A1",
    }

    SCIENCE_KEYS = ["sin", "cos", "tan", "ln", "log", "√", "!", "%"]

    # ── Definiciones del teclado principal ────────────────────────
    #  Cada fila es una lista de (texto, tecla lógica, tipo_color)

    KEYPAD = [
        [("π", "π", "func"), ("e", "e", "func"), ("(", "(", "func"),
         (")", ")", "func"), ("^", "^", "func")],

        [("C", "C", "special"), ("⌫", "⌫", "special"),
         ("÷", "÷", "op")],

        [("7", "7", "num"), ("8", "8", "num"), ("9", "9", "num"),
         ("×", "×", "op")],

        [("4", "4", "num"), ("5", "5", "num"), ("6", "6", "num"),
         ("-", "-", "op")],

        [("1", "1", "num"), ("2", "2", "num"), ("3", "3", "num"),
         ("+", "+", "op")],

        [("0", "0", "num"), (",", ",", "num"), ("=", "=", "equals")],
    ]

    COPY_LABEL = "Copiar"
    COPIED_LABEL = "¡Copiado!"
    COPIED_RESET_MS = 1200

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, session: CalculatorSession = None):
        self.root = root
        self.root.title("Calculadora")
        self.root.configure(bg=self.C["bg"])

        self.session = session if session is not None else CalculatorSession()

        self._init_fonts()
        notebook = ttk.Notebook(self.root)
        notebook.pack(fill="both", expand=True)

        calc_tab = tk.Frame(notebook, bg=self.C["bg"])
        notebook.add(calc_tab, text="Calculadora")
        self._create_display(calc_tab)
        self._create_toggle_bar(calc_tab)
        self._create_science_panel(calc_tab)
        self._create_keypad(calc_tab)
        self._create_history(calc_tab)

        self._create_units_tab(notebook)
        self._create_financial_tab(notebook)
        self._create_programmer_tab(notebook)

        self._bind_keyboard()
        self.session.render_sink = self._render
        self._render(self.session.render_state())

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_expr   = tkfont.Font(family="Consolas", size=14)
        self._f_result = tkfont.Font(family="Consolas", size=24, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=15)
        self._f_func   = tkfont.Font(family="Segoe UI", size=12)
        self._f_small  = tkfont.Font(family="Segoe UI", size=11)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self, parent):
        frame = tk.Frame(parent, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        self.expr_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.expr_var, font=self._f_expr,
            bg=self.C["display_bg"], fg=self.C["expr_fg"], anchor="e",
        ).pack(fill="x")

        self.value_var = tk.StringVar(value="0")
        tk.Label(
            frame, textvariable=self.value_var, font=self._f_result,
            bg=self.C["display_bg"], fg=self.C["result_fg"], anchor="e",
        ).pack(fill="x")

        self.memory_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.memory_var, font=self._f_small,
            bg=self.C["display_bg"], fg=self.C["expr_fg"], anchor="w",
        ).pack(fill="x")

    # ── Barra de modo angular, memoria y copia ───────────────────

    def _create_toggle_bar(self, parent):
        frame = tk.Frame(parent, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=(2, 2))

        self.angle_btn = tk.Button(
            frame, text=self.session.angle_mode.upper(), font=self._f_small,
            width=6, bg=self.C["toggle_on"], fg=self.C["bg"],
            activebackground=self.C["toggle_on"], relief="flat",
            command=self._toggle_angle,
        )
        self.angle_btn.pack(side="left", padx=(0, 4))

        memory_actions = [
            ("MC", self.session.memory_clear),
            ("MR", self.session.memory_recall),
            ("M+", self.session.memory_add),
            ("M−", self.session.memory_subtract),
        ]
        for text, command in memory_actions:
            tk.Button(
                frame, text=text, font=self._f_small, width=4,
                bg=self.C["func"], fg=self.C["func_fg"],
                activebackground=self.C["special"], relief="flat",
                command=command,
            ).pack(side="left", padx=1)

        self.copy_btn = tk.Button(
            frame, text=self.COPY_LABEL, font=self._f_small,
            bg=self.C["func"], fg=self.C["func_fg"],
            activebackground=self.C["special"], relief="flat",
            cursor="hand2", command=self._copy_result, padx=8,
        )
        self.copy_btn.pack(side="right")

    # ── Panel de funciones científicas ───────────────────────────

    def _create_science_panel(self, parent):
        frame = tk.Frame(parent, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=2)
        for col, key in enumerate(self.SCIENCE_KEYS):
            frame.columnconfigure(col, weight=1, uniform="sci")
            tk.Button(
                frame, text=key, font=self._f_func,
                bg=self.C["func"], fg=self.C["func_fg"],
                activebackground=self.C["special"], relief="flat",
                command=lambda k=key: self.session.press(k),
            ).grid(row=0, column=col, sticky="nsew", padx=2, pady=2, ipady=6)

    # ── Teclado numérico / operadores ────────────────────────────

    def _create_keypad(self, parent):
        frame = tk.Frame(parent, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        max_cols = max(len(row) for row in self.KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            spans = self._compute_spans(len(row_def), max_cols)
            col_pos = 0
            for idx, (text, key, kind) in enumerate(row_def):
                tk.Button(
                    frame, text=text, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda k=key: self.session.press(k),
                ).grid(row=r, column=col_pos, columnspan=spans[idx],
                       sticky="nsew", padx=2, pady=2, ipady=8)
                col_pos += spans[idx]
            frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        # Asignar columnas extra al último botón (generalmente '=')
        spans[-1] += extra
        return spans

    # ── Historial ────────────────────────────────────────────────

    def _create_history(self, parent):
        frame = tk.Frame(parent, bg=self.C["bg"])
        frame.pack(fill="both", padx=6, pady=(0, 6))

        self.history_list = tk.Listbox(
            frame, height=5, font=self._f_small, activestyle="none",
            bg=self.C["display_bg"], fg=self.C["expr_fg"], relief="flat",
        )
        self.history_list.pack(side="left", fill="both", expand=True)
        self.history_list.bind("<<ListboxSelect>>", self._on_history_select)

        tk.Button(
            frame, text="Limpiar", font=self._f_small,
            bg=self.C["special"], fg=self.C["special_fg"], relief="flat",
            command=self.session.clear_history,
        ).pack(side="right", padx=(6, 0))

    def _on_history_select(self, _event):
        selection = self.history_list.curselection()
        if selection:
            self.session.select_history(selection[0])

    # ── Pestañas auxiliares ──────────────────────────────────────

    def _labeled_entry(self, parent, row: int, label: str) -> tk.Entry:
        tk.Label(parent, text=label, font=self._f_small).grid(
            row=row, column=0, sticky="w", padx=6, pady=2)
        entry = tk.Entry(parent, font=self._f_small, width=14)
        entry.grid(row=row, column=1, sticky="ew", padx=6, pady=2)
        return entry

    def _create_units_tab(self, notebook):
        tab = tk.Frame(notebook)
        notebook.add(tab, text="Unidades")

        self.unit_cat = ttk.Combobox(
            tab, values=list(unit_converter.UNIT_DEFINITIONS), state="readonly")
        self.unit_cat.grid(row=0, column=0, columnspan=2, sticky="ew", padx=6, pady=4)
        self.unit_cat.current(0)
        self.unit_from = ttk.Combobox(tab, state="readonly", width=6)
        self.unit_from.grid(row=1, column=0, padx=6)
        self.unit_to = ttk.Combobox(tab, state="readonly", width=6)
        self.unit_to.grid(row=1, column=1, padx=6)
        self.unit_value = self._labeled_entry(tab, 2, "Valor")
        self.unit_out = tk.StringVar(value="—")
        tk.Label(tab, textvariable=self.unit_out, font=self._f_func).grid(
            row=3, column=0, columnspan=2, pady=6)
        tk.Button(tab, text="⇄", command=self._swap_units).grid(
            row=1, column=2, padx=4)

        self.unit_cat.bind("<<ComboboxSelected>>", lambda _e: self._populate_units())
        for widget in (self.unit_from, self.unit_to):
            widget.bind("<<ComboboxSelected>>", lambda _e: self._compute_units())
        self.unit_value.bind("<KeyRelease>", lambda _e: self._compute_units())
        self._populate_units()

    def _populate_units(self):
        units = unit_converter.units_for(self.unit_cat.get())
        self.unit_from.config(values=units)
        self.unit_to.config(values=units)
        self.unit_from.current(0)
        self.unit_to.current(1)
        self._compute_units()

    def _swap_units(self):
        source, target = self.unit_from.get(), self.unit_to.get()
        self.unit_from.set(target)
        self.unit_to.set(source)
        self._compute_units()

    def _compute_units(self):
        self.unit_out.set(unit_converter.describe_conversion(
            self.unit_value.get(), self.unit_cat.get(),
            self.unit_from.get(), self.unit_to.get(),
        ))

    def _create_financial_tab(self, notebook):
        tab = tk.Frame(notebook)
        notebook.add(tab, text="Financiera")

        self.fin_principal = self._labeled_entry(tab, 0, "Capital / VP")
        self.fin_rate = self._labeled_entry(tab, 1, "Tasa % por periodo")
        self.fin_periods = self._labeled_entry(tab, 2, "Periodos")
        self.fin_out = tk.StringVar(value="—")

        actions = [
            ("Simple", financial.describe_simple),
            ("Compuesto", financial.describe_compound),
            ("Cuota", financial.describe_payment),
        ]
        for col, (text, describe) in enumerate(actions):
            tk.Button(
                tab, text=text, font=self._f_small,
                command=lambda d=describe: self.fin_out.set(d(
                    self.fin_principal.get(), self.fin_rate.get(),
                    self.fin_periods.get(),
                )),
            ).grid(row=3, column=col, padx=4, pady=6)
        tk.Label(tab, textvariable=self.fin_out, font=self._f_small).grid(
            row=4, column=0, columnspan=3, pady=6)

    def _create_programmer_tab(self, notebook):
        tab = tk.Frame(notebook)
        notebook.add(tab, text="Programador")

        self.prog_input = self._labeled_entry(tab, 0, "Número")
        self.prog_out = tk.StringVar(value="—")
        tk.Button(tab, text="Convertir", command=self._parse_bases).grid(
            row=0, column=2, padx=4)
        tk.Label(tab, textvariable=self.prog_out, font=self._f_small,
                 justify="left").grid(row=1, column=0, columnspan=3, pady=6)

        self.bw_a = self._labeled_entry(tab, 2, "A")
        self.bw_op = ttk.Combobox(
            tab, values=programmer.BITWISE_OPERATIONS, state="readonly", width=5)
        self.bw_op.grid(row=3, column=1, sticky="w", padx=6)
        self.bw_op.current(0)
        self.bw_b = self._labeled_entry(tab, 4, "B")
        self.bw_out = tk.StringVar(value="—")
        tk.Button(tab, text="Calcular", command=self._run_bitwise).grid(
            row=4, column=2, padx=4)
        tk.Label(tab, textvariable=self.bw_out, font=self._f_small).grid(
            row=5, column=0, columnspan=3, pady=6)

    def _parse_bases(self):
        bases = programmer.describe_bases(self.prog_input.get())
        self.prog_out.set("\n".join(
            f"{name.upper()}  {value}" for name, value in bases.items()))

    def _run_bitwise(self):
        self.bw_out.set(programmer.describe_bitwise(
            self.bw_a.get(), self.bw_op.get(), self.bw_b.get()))

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)

    def _on_keypress(self, event):
        # Las pestañas auxiliares tienen sus propios campos de texto.
        if isinstance(event.widget, (tk.Entry, ttk.Combobox)):
            return None
        key = map_key_event(event.keysym, event.char)
        if key is None:
            return None
        self.session.press(key)
        return "break"

    # ── Acciones ─────────────────────────────────────────────────

    def _toggle_angle(self):
        mode = self.session.toggle_angle_mode()
        self.angle_btn.config(text=mode.upper())

    def _copy_result(self):
        self.root.clipboard_clear()
        self.root.clipboard_append(self.session.buffer)
        self.copy_btn.config(text=self.COPIED_LABEL)
        self.root.after(
            self.COPIED_RESET_MS,
            lambda: self.copy_btn.config(text=self.COPY_LABEL),
        )

    def _render(self, state):
        self.value_var.set(state.buffer)
        self.expr_var.set(state.expression or " ")
        self.memory_var.set(state.memory)
        self.history_list.delete(0, tk.END)
        for entry in state.history:
            self.history_list.insert(tk.END, f"{entry.lhs} = {entry.rhs}")
