"""Plotly Dash application — calculator dashboard.

Run with ``python -m subsidy_calc.dashboard.app``; the API must be reachable at
``settings.api_base_url`` for program lookups.
"""

import logging

from dash import Dash, html, dcc, page_container

from subsidy_calc.config import settings

logging.basicConfig(level=settings.log_level)

NAV_BG = "#1a1a2e"
CONTENT_STYLE = {"maxWidth": "1100px", "margin": "0 auto", "padding": "0 1rem"}

app = Dash(
    __name__,
    use_pages=True,
    suppress_callback_exceptions=True,
    title="Калькулятор субсидий",
)
server = app.server


def _navbar():
    return html.Header(
        html.Div([
            html.Span("Поддержка бизнеса", style={"fontSize": "1.4rem", "fontWeight": "bold"}),
            dcc.Link("Калькулятор субсидий", href="/", style={"color": "white"}),
        ], style={**CONTENT_STYLE, "display": "flex", "justifyContent": "space-between",
                  "alignItems": "center"}),
        style={"backgroundColor": NAV_BG, "color": "white", "padding": "1rem 0", "marginBottom": "2rem"},
    )


def _footer():
    return html.Footer(
        f"Расчет носит справочный характер. Данные программ: {settings.api_base_url}",
        style={**CONTENT_STYLE, "color": "#888", "fontSize": "0.8rem", "marginTop": "3rem"},
    )


app.layout = html.Div([
    _navbar(),
    html.Main(page_container, style=CONTENT_STYLE),
    _footer(),
])


if __name__ == "__main__":
    app.run(debug=settings.debug, port=8050)
