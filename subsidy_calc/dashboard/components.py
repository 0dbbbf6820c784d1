"""Layout builders for the calculator page.

Kept apart from the page module so they can be used without a running Dash app.
"""

from decimal import Decimal

from dash import html
import plotly.graph_objects as go

from subsidy_calc.engine.errors import CalculatorValidationError, InvalidTerm
from subsidy_calc.engine.formatting import format_currency, format_percentage, to_decimal
from subsidy_calc.engine.schedule import generate_schedule, yearly_schedule_summary
from subsidy_calc.engine.subsidy import calculate, term_range_message
from subsidy_calc.models.calculator import CalculationInput, CalculationResult, ScheduleEntry

BEFORE_COLOR = "#e94560"
AFTER_COLOR = "#2ecc71"

CARD_STYLE = {
    "flex": "1",
    "padding": "1rem",
    "border": "1px solid #ddd",
    "borderRadius": "6px",
    "textAlign": "center",
}


def _card(label: str, value: str, color: str = "#1a1a2e"):
    return html.Div([
        html.Div(label, style={"fontSize": "0.85rem", "color": "#666"}),
        html.Div(value, style={"fontSize": "1.4rem", "fontWeight": "bold", "color": color}),
    ], style=CARD_STYLE)


def build_summary(result: CalculationResult):
    return html.Div([
        html.Div([
            _card("Платеж без субсидии", format_currency(result.monthly_payment_before), BEFORE_COLOR),
            _card("Платеж с субсидией", format_currency(result.monthly_payment_after), AFTER_COLOR),
            _card("Экономия в месяц", format_currency(result.monthly_savings)),
            _card("Экономия за весь срок", format_currency(result.total_savings)),
        ], style={"display": "flex", "gap": "1rem", "marginBottom": "1rem"}),
        html.Div([
            _card("Эффективная ставка", format_percentage(result.effective_rate)),
            _card("Переплата без субсидии", format_currency(result.total_interest_before)),
            _card("Переплата с субсидией", format_currency(result.total_interest_after)),
        ], style={"display": "flex", "gap": "1rem", "marginBottom": "2rem"}),
    ], id="summary-cards")


def balance_chart(entries: list[ScheduleEntry]) -> go.Figure:
    months = [e.month for e in entries]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=months, y=[float(e.balance_before) for e in entries],
        mode="lines",
        name="Без субсидии",
        line=dict(color=BEFORE_COLOR, width=3),
    ))
    fig.add_trace(go.Scatter(
        x=months, y=[float(e.balance_after) for e in entries],
        mode="lines",
        name="С субсидией",
        line=dict(color=AFTER_COLOR, width=3),
    ))
    fig.update_layout(
        title="Остаток долга",
        xaxis_title="Месяц",
        yaxis_title="Остаток (₸)",
        hovermode="x unified",
    )
    return fig


def yearly_table(yearly: list[dict[str, Decimal]]):
    headers = ["Год", "Выплаты без субсидии", "Выплаты с субсидией", "Экономия", "Остаток с субсидией"]
    rows = [
        html.Tr([
            html.Td(str(int(y["year"]))),
            html.Td(format_currency(y["payment_before"])),
            html.Td(format_currency(y["payment_after"])),
            html.Td(format_currency(y["savings"])),
            html.Td(format_currency(y["balance_after"])),
        ])
        for y in yearly
    ]
    return html.Table(
        [html.Thead(html.Tr([html.Th(h) for h in headers])), html.Tbody(rows)],
        style={"width": "100%", "borderCollapse": "collapse"},
    )


def _whole_months(term) -> int:
    # dcc.Input type="number" hands back floats for typed decimals
    if not float(term).is_integer():
        raise InvalidTerm(term_range_message())
    return int(term)


def build_results(amount, term, bank_rate, subsidy_rate):
    """Form values -> results layout, or an inline error message."""
    if amount is None or term is None or bank_rate is None or subsidy_rate is None:
        return html.Div(
            "Заполните все поля калькулятора.",
            style={"color": "red", "padding": "1rem"},
        ), None

    try:
        calc_input = CalculationInput(
            loan_amount=to_decimal(amount),
            loan_term_months=_whole_months(term),
            bank_rate=to_decimal(bank_rate),
            subsidy_rate=to_decimal(subsidy_rate),
        )
        result = calculate(calc_input)
        entries = generate_schedule(calc_input)
    except CalculatorValidationError as e:
        return html.Div(e.message, style={"color": "red", "padding": "1rem"}), None

    children = html.Div([
        build_summary(result),
        html.H3("График погашения по годам"),
        yearly_table(yearly_schedule_summary(entries)),
    ])
    return children, balance_chart(entries)
