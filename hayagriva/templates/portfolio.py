from __future__ import annotations

from hayagriva.core.fragments import CodeWriter
from hayagriva.core.protocol import AppType
from hayagriva.templates.base import CARD_DECLARATIONS, AppTemplate, TemplateContext, write_card_grid_rule

PROJECTS = [
    {"id": 1, "title": "Weather Station", "summary": "Live readings from a home sensor network.", "tag": "IoT"},
    {"id": 2, "title": "Recipe Finder", "summary": "Search recipes by what is already in the fridge.", "tag": "Web"},
    {"id": 3, "title": "Trail Log", "summary": "Offline-first hiking journal with route maps.", "tag": "Mobile"},
]


class PortfolioTemplate(AppTemplate):
    app_type = AppType.PORTFOLIO
    loading_label = "portfolio"

    def write_state(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.line("const [contact, setContact] = useState({ name: '', email: '', message: '' });")
        w.line("const [sent, setSent] = useState(false);")
        w.blank()
        w.const_array("projects", PROJECTS)

    def write_handlers(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.blank()
        with w.block("const handleContactSubmit = (event) => {", "};"):
            w.line("event.preventDefault();")
            w.line("setSent(true);")

    def write_main(self, ctx: TemplateContext, w: CodeWriter) -> None:
        with w.element("section", 'className="hero"'):
            w.leaf("h2", "Selected Work")
            w.leaf("p", "Design and engineering projects, built with care.")

        with w.element("div", 'className="card-grid project-grid"'):
            with w.each("projects", "project"):
                with w.element("div", 'key={project.id} className="project-card"'):
                    w.leaf("div", "", 'className="project-thumb"')
                    w.leaf("h3", "{project.title}")
                    w.leaf("p", "{project.summary}")
                    w.leaf("span", "{project.tag}", 'className="project-tag"')

        with w.element("section", 'className="contact-section" id="contact"'):
            w.leaf("h2", "Contact")
            w.ternary(
                "sent",
                lambda w: w.leaf(
                    "p",
                    "Thanks, {contact.name || 'friend'}. I will be in touch soon.",
                    'className="contact-thanks"',
                ),
                lambda w: self._write_contact_form(ctx, w),
            )

    @staticmethod
    def _write_contact_form(ctx: TemplateContext, w: CodeWriter) -> None:
        with w.element("form", 'className="contact-form" onSubmit={handleContactSubmit}'):
            w.void(
                "Input",
                'placeholder="Your name" value={contact.name} '
                "onChange={(e) => setContact({ ...contact, name: e.target.value })}"
                + ctx.aria('aria-label="Your name"'),
            )
            w.void(
                "Input",
                'type="email" placeholder="Email" value={contact.email} '
                "onChange={(e) => setContact({ ...contact, email: e.target.value })}"
                + ctx.aria('aria-label="Email"'),
            )
            w.void(
                "textarea",
                'placeholder="Message" value={contact.message} '
                "onChange={(e) => setContact({ ...contact, message: e.target.value })}"
                + ctx.aria('aria-label="Message"'),
            )
            w.leaf("Button", "Send", 'type="submit"')

    def write_styles(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.rule(".hero", {"text-align": "center", "padding": "3rem 1rem", "margin-bottom": "2rem"})
        w.blank()
        write_card_grid_rule(w, ".project-grid", "260px")
        w.rule(".project-card", CARD_DECLARATIONS)
        w.blank()
        w.rule(
            ".project-thumb",
            {
                "height": "140px",
                "border-radius": "4px",
                "background": "linear-gradient(135deg, var(--color-primary), var(--color-secondary))",
                "margin-bottom": "1rem",
            },
        )
        w.blank()
        w.rule(
            ".project-tag",
            {"font-size": "0.75rem", "padding": "2px 8px", "border-radius": "12px", "background-color": "var(--color-muted)"},
        )
        w.blank()
        w.rule(".contact-form", {"display": "flex", "flex-direction": "column", "gap": "0.75rem", "max-width": "480px"})
        w.blank()
        w.rule(
            ".contact-form textarea",
            {"min-height": "120px", "padding": "0.5rem", "border": "1px solid var(--color-border)", "border-radius": "4px"},
        )
        w.blank()


template = PortfolioTemplate()
