from __future__ import annotations

from hayagriva.core.fragments import CodeWriter
from hayagriva.core.protocol import AppType
from hayagriva.templates.base import CARD_DECLARATIONS, AppTemplate, TemplateContext, write_card_grid_rule


class GenericTemplate(AppTemplate):
    """Fallback layout: a welcome banner and one card per requested feature."""

    app_type = AppType.GENERIC
    loading_label = "app"

    def write_state(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.blank()
        w.const_array("featureList", list(ctx.features))

    def write_main(self, ctx: TemplateContext, w: CodeWriter) -> None:
        with w.element("div", 'className="welcome-section"'):
            w.leaf("h2", f"Welcome to {ctx.app_name}")
            w.leaf("p", "Your application is ready. Start by adding components and features.")

        with w.element("div", 'className="features-section"'):
            w.leaf("h2", "Features")
            with w.element("div", 'className="card-grid features-grid"'):
                with w.each("featureList", "feature"):
                    with w.element("div", 'key={feature} className="feature-card"'):
                        w.leaf("h3", "{feature}")
                        w.leaf("p", "Implement your {feature} functionality here.")

    def write_styles(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.rule(".welcome-section", {"text-align": "center", "margin-bottom": "3rem"})
        w.blank()
        write_card_grid_rule(w, ".features-grid", "250px")
        w.rule(".feature-card", CARD_DECLARATIONS)
        w.blank()


template = GenericTemplate()
