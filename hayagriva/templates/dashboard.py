from __future__ import annotations

from hayagriva.core.fragments import CodeWriter, ImportSet
from hayagriva.core.protocol import AppType
from hayagriva.templates.base import (
    CARD_DECLARATIONS,
    AppTemplate,
    TemplateContext,
    palette_for,
    write_card_grid_rule,
)

STATS = [
    {"label": "Total Users", "value": "12,345", "trend": "+12%", "positive": True},
    {"label": "Revenue", "value": "$48,294", "trend": "+8%", "positive": True},
    {"label": "Conversion", "value": "3.2%", "trend": "-1%", "positive": False},
]

TREND = [
    {"name": "Jan", "value": 400},
    {"name": "Feb", "value": 300},
    {"name": "Mar", "value": 200},
    {"name": "Apr", "value": 278},
    {"name": "May", "value": 189},
    {"name": "Jun", "value": 239},
]

ACTIVITY = [
    {"id": 1, "event": "New signup", "user": "asha@example.com", "date": "2024-06-01"},
    {"id": 2, "event": "Plan upgraded", "user": "ravi@example.com", "date": "2024-06-02"},
    {"id": 3, "event": "Report exported", "user": "meera@example.com", "date": "2024-06-03"},
]


class DashboardTemplate(AppTemplate):
    app_type = AppType.DASHBOARD
    loading_label = "dashboard"
    handled_features = frozenset({"Analytics"})

    def add_imports(self, ctx: TemplateContext, imports: ImportSet) -> None:
        imports.add(
            "recharts",
            [
                "LineChart",
                "Line",
                "XAxis",
                "YAxis",
                "CartesianGrid",
                "Tooltip",
                "Legend",
                "ResponsiveContainer",
            ],
        )

    def write_state(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.blank()
        w.const_array("stats", STATS)
        w.blank()
        w.const_array("trend", TREND)
        w.blank()
        w.const_array("activity", ACTIVITY)

    def write_main(self, ctx: TemplateContext, w: CodeWriter) -> None:
        with w.element("div", 'className="dashboard-header"'):
            w.leaf("h2", "Dashboard Overview")
            with w.element("div", 'className="dashboard-actions"'):
                w.leaf("Button", "Export")
                w.leaf("Button", "Refresh", 'variant="outline"')

        with w.element("div", 'className="card-grid stats-grid"'):
            with w.each("stats", "stat"):
                with w.element("div", 'key={stat.label} className="stat-card"'):
                    w.leaf("h3", "{stat.label}")
                    w.leaf("p", "{stat.value}", 'className="stat-value"')
                    w.leaf("span", "{stat.trend}", "className={stat.positive ? 'trend positive' : 'trend negative'}")

        stroke = palette_for(ctx.design.color_theme).primary
        with w.element("div", 'className="chart-container"'):
            w.leaf("h3", "Monthly Trend")
            with w.element("ResponsiveContainer", 'width="100%" height={300}'):
                with w.element("LineChart", "data={trend} margin={{ top: 5, right: 30, left: 20, bottom: 5 }}"):
                    w.void("CartesianGrid", 'strokeDasharray="3 3"')
                    w.void("XAxis", 'dataKey="name"')
                    w.void("YAxis")
                    w.void("Tooltip")
                    w.void("Legend")
                    w.void("Line", f'type="monotone" dataKey="value" stroke="{stroke}" activeDot={{{{ r: 8 }}}}')

        with w.element("div", 'className="data-table"'):
            w.leaf("h3", "Recent Activity")
            with w.element("table"):
                with w.element("thead"):
                    with w.element("tr"):
                        for heading in ("Event", "User", "Date"):
                            w.leaf("th", heading)
                with w.element("tbody"):
                    with w.each("activity", "row"):
                        with w.element("tr", "key={row.id}"):
                            w.leaf("td", "{row.event}")
                            w.leaf("td", "{row.user}")
                            w.leaf("td", "{row.date}")

    def write_styles(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.rule(
            ".dashboard-header",
            {"display": "flex", "justify-content": "space-between", "align-items": "center", "margin-bottom": "2rem"},
        )
        w.blank()
        w.rule(".dashboard-actions", {"display": "flex", "gap": "8px"})
        w.blank()
        write_card_grid_rule(w, ".stats-grid")
        w.rule(".stat-card", CARD_DECLARATIONS)
        w.blank()
        w.rule(".stat-value", {"font-size": "2rem", "font-weight": "600", "margin": "0.5rem 0"})
        w.blank()
        w.rule(".trend", {"font-size": "0.875rem"})
        w.blank()
        w.rule(".trend.positive", {"color": "#38b000"})
        w.blank()
        w.rule(".trend.negative", {"color": "#d90429"})
        w.blank()
        w.rule(".chart-container, .data-table", dict(CARD_DECLARATIONS, **{"margin-bottom": "1.5rem"}))
        w.blank()
        w.rule(".data-table table", {"width": "100%", "border-collapse": "collapse"})
        w.blank()
        w.rule(
            ".data-table th, .data-table td",
            {"text-align": "left", "padding": "0.5rem", "border-bottom": "1px solid var(--color-border)"},
        )
        w.blank()


template = DashboardTemplate()
