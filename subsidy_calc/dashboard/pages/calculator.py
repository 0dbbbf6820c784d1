"""Subsidy calculator page — payments with and without the subsidy."""

import dash
from dash import html, dcc, callback, Input, Output, State, no_update
import httpx

from subsidy_calc.config import settings
from subsidy_calc.dashboard.components import build_results

dash.register_page(__name__, path="/", name="Калькулятор")

BTN_STYLE = {
    "padding": "0.75rem 2rem",
    "fontSize": "1rem",
    "backgroundColor": "#1a1a2e",
    "color": "white",
    "border": "none",
    "cursor": "pointer",
}

FIELD_STYLE = {"width": "100%", "padding": "0.5rem", "fontSize": "0.95rem"}


def _field(label: str, component):
    return html.Div([html.Label(label), component], style={"flex": "1"})


layout = html.Div([
    html.H2("Калькулятор субсидий"),
    html.P("Сравнение ежемесячного платежа по ставке банка и по ставке с учетом субсидии."),

    html.Div([
        _field("ID программы (необязательно)",
               dcc.Input(id="program-id", type="number", min=1, style=FIELD_STYLE)),
        html.Button("Загрузить условия", id="load-program-btn", style=BTN_STYLE),
    ], style={"display": "flex", "gap": "1rem", "alignItems": "flex-end", "marginBottom": "1rem"}),
    html.Div(id="program-status", style={"marginBottom": "1rem"}),

    html.Div([
        _field("Сумма кредита (₸)",
               dcc.Input(id="loan-amount", type="number", value=50_000_000, min=1, style=FIELD_STYLE)),
        _field("Срок кредита (мес.)",
               dcc.Input(id="loan-term", type="number", value=60, min=1, max=360, step=1, style=FIELD_STYLE)),
        _field("Ставка банка (%)",
               dcc.Input(id="bank-rate", type="number", value=20.5, min=0, max=100, step=0.1, style=FIELD_STYLE)),
        _field("Субсидия (п.п.)",
               dcc.Input(id="subsidy-rate", type="number", value=8.2, min=0, step=0.1, style=FIELD_STYLE)),
    ], style={"display": "flex", "gap": "1rem", "marginBottom": "1.5rem"}),

    html.Button("Рассчитать", id="calculate-btn", style=BTN_STYLE),

    html.Div(id="calculator-results", style={"marginTop": "2rem"}),
    dcc.Graph(id="balance-chart", style={"display": "none"}),
])


@callback(
    [
        Output("bank-rate", "value"),
        Output("subsidy-rate", "value"),
        Output("loan-term", "max"),
        Output("program-status", "children"),
    ],
    Input("load-program-btn", "n_clicks"),
    State("program-id", "value"),
    prevent_initial_call=True,
)
def load_program(n_clicks, program_id):
    """Pre-fill the form with a program's default rates via the API."""
    if not program_id:
        return no_update, no_update, no_update, ""
    try:
        resp = httpx.get(
            f"{settings.api_base_url}/api/calculator/program/{int(program_id)}/data",
            timeout=10.0,
        )
        resp.raise_for_status()
        data = resp.json()["data"]
    except httpx.HTTPError as e:
        return no_update, no_update, no_update, html.Div(f"Ошибка: {e}", style={"color": "red"})

    return (
        data["bankRate"] if data["bankRate"] is not None else no_update,
        data["subsidyRate"] if data["subsidyRate"] is not None else no_update,
        data["maxLoanTermMonths"] or settings.max_loan_term_months,
        html.Div(f"Программа: {data['programTitle']}"),
    )


@callback(
    [
        Output("calculator-results", "children"),
        Output("balance-chart", "figure"),
        Output("balance-chart", "style"),
    ],
    Input("calculate-btn", "n_clicks"),
    [
        State("loan-amount", "value"),
        State("loan-term", "value"),
        State("bank-rate", "value"),
        State("subsidy-rate", "value"),
    ],
)
def run_calculation(n_clicks, amount, term, bank_rate, subsidy_rate):
    children, figure = build_results(amount, term, bank_rate, subsidy_rate)
    if figure is None:
        return children, no_update, {"display": "none"}
    return children, figure, {"display": "block"}
