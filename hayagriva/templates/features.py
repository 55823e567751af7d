"""
Cross-cutting feature panels.

A panel contributes state, handlers, markup and styles for one feature tag.
Templates render every panel whose tag is present unless they handle the
feature natively (e.g. the store template owns search and checkout).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Collection, Dict, Optional, Sequence, Tuple

from hayagriva.core.fragments import CodeWriter

if TYPE_CHECKING:
    from hayagriva.templates.base import TemplateContext

Writer = Callable[["TemplateContext", CodeWriter], None]


def _noop(ctx: "TemplateContext", w: CodeWriter) -> None:
    pass


@dataclass(frozen=True)
class FeaturePanel:
    tag: str
    css_class: str
    markup: Writer
    state: Writer = _noop
    handlers: Writer = _noop
    styles: Optional[Dict[str, Dict[str, str]]] = None

    def write_state(self, ctx: "TemplateContext", w: CodeWriter) -> None:
        self.state(ctx, w)

    def write_handlers(self, ctx: "TemplateContext", w: CodeWriter) -> None:
        self.handlers(ctx, w)

    def write_markup(self, ctx: "TemplateContext", w: CodeWriter) -> None:
        with w.element("div", f'className="feature-panel {self.css_class}"'):
            self.markup(ctx, w)

    def write_styles(self, ctx: "TemplateContext", w: CodeWriter) -> None:
        for selector, declarations in (self.styles or {}).items():
            w.rule(selector, declarations)
            w.blank()


# -- search ----------------------------------------------------------

def _search_markup(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.leaf("h3", "Search")
    w.void(
        "Input",
        'placeholder="Search..." value={query} onChange={(e) => setQuery(e.target.value)}'
        + ctx.aria('aria-label="Search"'),
    )
    w.line("{query && <p className=\"search-hint\">Showing results for: {query}</p>}")


# -- payments --------------------------------------------------------

def _payments_state(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.line("const [plan, setPlan] = useState('free');")


def _payments_handlers(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.blank()
    w.line("const handleUpgrade = () => setPlan('pro');")


def _payments_markup(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.leaf("h3", "Billing")
    w.leaf("p", "Current plan: {plan}")
    w.leaf("Button", "Upgrade to Pro", "onClick={handleUpgrade} disabled={plan === 'pro'}")


# -- messaging -------------------------------------------------------

def _messaging_state(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.line("const [messages, setMessages] = useState([]);")
    w.line("const [draft, setDraft] = useState('');")


def _messaging_handlers(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.blank()
    with w.block("const sendMessage = () => {", "};"):
        w.line("if (!draft.trim()) return;")
        w.line("setMessages([...messages, { id: messages.length + 1, text: draft }]);")
        w.line("setDraft('');")


def _messaging_markup(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.leaf("h3", "Messages")
    with w.element("ul", 'className="message-list"'):
        with w.each("messages", "message"):
            w.leaf("li", "{message.text}", "key={message.id}")
    with w.element("div", 'className="message-composer"'):
        w.void(
            "Input",
            'placeholder="Write a message..." value={draft} onChange={(e) => setDraft(e.target.value)}'
            + ctx.aria('aria-label="Message"'),
        )
        w.leaf("Button", "Send", "onClick={sendMessage}")


# -- file uploads ----------------------------------------------------

def _uploads_state(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.line("const [files, setFiles] = useState([]);")


def _uploads_handlers(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.blank()
    w.line("const handleUpload = (event) => setFiles(Array.from(event.target.files || []));")


def _uploads_markup(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.leaf("h3", "Uploads")
    w.void("input", 'type="file" multiple onChange={handleUpload}' + ctx.aria('aria-label="Upload files"'))
    with w.element("ul", 'className="file-list"'):
        with w.each("files", "file"):
            w.leaf("li", "{file.name}", "key={file.name}")


# -- maps ------------------------------------------------------------

def _maps_state(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.line("const [coords, setCoords] = useState(null);")


def _maps_handlers(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.blank()
    with w.block("const locateMe = () => {", "};"):
        w.line("if (!navigator.geolocation) return;")
        with w.block("navigator.geolocation.getCurrentPosition((position) => {", "});"):
            w.line("setCoords({ lat: position.coords.latitude, lng: position.coords.longitude });")


def _maps_markup(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.leaf("h3", "Location")
    w.leaf("div", "Map view", 'className="map-placeholder"' + ctx.aria('role="img" aria-label="Map"'))
    w.leaf("Button", "Locate me", 'variant="outline" onClick={locateMe}')
    w.line("{coords && <p>Lat {coords.lat.toFixed(3)}, Lng {coords.lng.toFixed(3)}</p>}")


# -- documents -------------------------------------------------------

def _documents_handlers(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.blank()
    w.line("const exportReport = () => window.print();")


def _documents_markup(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.leaf("h3", "Reports")
    w.leaf("p", "Export the current view as a printable PDF.")
    w.leaf("Button", "Export PDF", 'variant="outline" onClick={exportReport}')


# -- analytics -------------------------------------------------------

def _analytics_state(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.line("const [visits] = useState(1280);")


def _analytics_markup(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.leaf("h3", "Analytics")
    w.leaf("p", "{visits}", 'className="stat-value"')
    w.leaf("span", "Visits this month", 'className="stat-label"')


# -- theming ---------------------------------------------------------

ACCENTS: Tuple[Tuple[str, str], ...] = (
    ("default", "Default"),
    ("warm", "Warm"),
    ("cool", "Cool"),
)


def _theming_state(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.line("const [accent, setAccent] = useState('default');")


def _theming_markup(ctx: "TemplateContext", w: CodeWriter) -> None:
    w.leaf("h3", "Appearance")
    with w.element(
        "select",
        "value={accent} onChange={(e) => setAccent(e.target.value)}" + ctx.aria('aria-label="Accent colour"'),
    ):
        for value, label in ACCENTS:
            w.leaf("option", label, f'value="{value}"')
    w.leaf("p", "Accent: {accent}", 'className="accent-preview"')


PANELS: Tuple[FeaturePanel, ...] = (
    FeaturePanel("Search & Filtering", "search-panel", _search_markup),
    FeaturePanel(
        "Payments",
        "payments-panel",
        _payments_markup,
        state=_payments_state,
        handlers=_payments_handlers,
    ),
    FeaturePanel(
        "Messaging",
        "messaging-panel",
        _messaging_markup,
        state=_messaging_state,
        handlers=_messaging_handlers,
        styles={
            ".message-list": {"list-style": "none", "padding": "0", "max-height": "160px", "overflow-y": "auto"},
            ".message-composer": {"display": "flex", "gap": "8px"},
        },
    ),
    FeaturePanel(
        "File Uploads",
        "uploads-panel",
        _uploads_markup,
        state=_uploads_state,
        handlers=_uploads_handlers,
        styles={".file-list": {"font-size": "0.875rem", "padding-left": "1.25rem"}},
    ),
    FeaturePanel(
        "Maps & Location",
        "maps-panel",
        _maps_markup,
        state=_maps_state,
        handlers=_maps_handlers,
        styles={
            ".map-placeholder": {
                "height": "160px",
                "border-radius": "8px",
                "background-color": "var(--color-muted)",
                "display": "flex",
                "align-items": "center",
                "justify-content": "center",
                "margin-bottom": "0.75rem",
            },
        },
    ),
    FeaturePanel("Document Generation", "documents-panel", _documents_markup, handlers=_documents_handlers),
    FeaturePanel("Analytics", "analytics-panel", _analytics_markup, state=_analytics_state),
    FeaturePanel("Theming", "theming-panel", _theming_markup, state=_theming_state),
)

PANELS_BY_TAG: Dict[str, FeaturePanel] = {panel.tag: panel for panel in PANELS}

PANEL_STYLES: Dict[str, Dict[str, str]] = {
    ".feature-panels": {
        "display": "grid",
        "grid-template-columns": "repeat(auto-fill, minmax(260px, 1fr))",
        "gap": "1.5rem",
        "margin-top": "2rem",
    },
    ".feature-panel": {
        "background-color": "var(--color-surface)",
        "border": "1px solid var(--color-border)",
        "border-radius": "8px",
        "padding": "1.25rem",
    },
    ".feature-panel h3": {"margin-top": "0"},
}


def panels_for(features: Sequence[str], exclude: Collection[str] = ()) -> Tuple[FeaturePanel, ...]:
    """Panels for `features`, in feature order."""
    return tuple(
        PANELS_BY_TAG[tag] for tag in features if tag in PANELS_BY_TAG and tag not in exclude
    )


def write_panel_base_styles(w: CodeWriter) -> None:
    for selector, declarations in PANEL_STYLES.items():
        w.rule(selector, declarations)
        w.blank()
