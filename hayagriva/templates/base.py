from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Sequence, Tuple

from hayagriva.core.fragments import CodeWriter, ImportSet
from hayagriva.core.lexicon import layout_for
from hayagriva.core.protocol import (
    AppType,
    DesignPreferences,
    GenerationOptions,
    TemplateFragments,
)
from hayagriva.templates import features as feature_panels


@dataclass(frozen=True)
class Palette:
    primary: str
    secondary: str
    background: str = "#ffffff"
    text: str = "#333333"
    surface: str = "#ffffff"
    muted: str = "#f8f9fa"
    border: str = "#e2e8f0"
    dark_background: str = "#121212"
    dark_text: str = "#f0f0f0"
    dark_surface: str = "#2a2a2a"
    dark_muted: str = "#1e1e1e"
    dark_border: str = "#333333"


DEFAULT_PALETTE = Palette(primary="#4361ee", secondary="#3a0ca3")

PALETTES: Dict[str, Palette] = {
    "blue": Palette(primary="#1e88e5", secondary="#0d47a1"),
    "green": Palette(primary="#43a047", secondary="#1b5e20"),
    "purple": Palette(primary="#8e24aa", secondary="#4a148c"),
    "orange": Palette(primary="#fb8c00", secondary="#e65100"),
    "red": Palette(primary="#e53935", secondary="#b71c1c"),
}


def palette_for(color_theme: Optional[str]) -> Palette:
    if color_theme is None:
        return DEFAULT_PALETTE
    return PALETTES.get(color_theme, DEFAULT_PALETTE)


TOAST_FEATURES = frozenset({"Authentication", "Notifications"})


def uses_toast(features: Sequence[str]) -> bool:
    return any(tag in TOAST_FEATURES for tag in features)


@dataclass(frozen=True)
class TemplateContext:
    app_name: str
    app_type: AppType
    features: Tuple[str, ...]
    design: DesignPreferences
    options: GenerationOptions

    def has(self, tag: str) -> bool:
        return tag in self.features

    @property
    def pages(self) -> Tuple[str, ...]:
        return layout_for(self.app_type).pages

    @property
    def accessible(self) -> bool:
        return self.options.accessibility or self.has("Accessibility")

    @property
    def responsive(self) -> bool:
        return self.design.responsive and self.options.responsive

    @property
    def dark_mode(self) -> bool:
        return self.design.dark_mode

    def aria(self, attr: str) -> str:
        """`attr` when accessibility markup is on, else empty."""
        return f" {attr}" if self.accessible else ""


class AppTemplate:
    """
    Base template: every app gets the same header/nav, loading state and
    footer; subclasses fill in the main content and its styles.

    Instances are the registry's template functions:
    template(app_name, features, design, options) -> TemplateFragments.
    """

    app_type: AppType = AppType.GENERIC
    loading_label: str = "app"
    # Feature panels the subclass renders itself instead of the shared panel.
    handled_features: FrozenSet[str] = frozenset()

    def __call__(
        self,
        app_name: str,
        features: Sequence[str],
        design: DesignPreferences,
        options: Optional[GenerationOptions] = None,
    ) -> TemplateFragments:
        ctx = TemplateContext(
            app_name=app_name,
            app_type=self.app_type,
            features=tuple(features),
            design=design,
            options=options or GenerationOptions(),
        )
        imports = ImportSet()
        self.add_imports(ctx, imports)
        return TemplateFragments(
            imports=imports.render(),
            body=self.render_component(ctx),
            styles=self.render_styles(ctx),
        )

    # -- hooks -------------------------------------------------------

    def add_imports(self, ctx: TemplateContext, imports: ImportSet) -> None:
        pass

    def write_state(self, ctx: TemplateContext, w: CodeWriter) -> None:
        pass

    def write_handlers(self, ctx: TemplateContext, w: CodeWriter) -> None:
        pass

    def write_main(self, ctx: TemplateContext, w: CodeWriter) -> None:
        raise NotImplementedError

    def write_styles(self, ctx: TemplateContext, w: CodeWriter) -> None:
        pass

    # -- assembly ----------------------------------------------------

    def panels(self, ctx: TemplateContext) -> Tuple[feature_panels.FeaturePanel, ...]:
        return feature_panels.panels_for(ctx.features, exclude=self.handled_features)

    def render_component(self, ctx: TemplateContext) -> str:
        w = CodeWriter()
        panels = self.panels(ctx)
        with w.block(f"const {ctx.app_name} = () => {{", "};"):
            self._write_common_state(ctx, w)
            self.write_state(ctx, w)
            for panel in panels:
                panel.write_state(ctx, w)
            w.blank()
            with w.block("useEffect(() => {", "}, []);"):
                w.line("const timer = setTimeout(() => setLoading(false), 1200);")
                w.line("return () => clearTimeout(timer);")
            self._write_common_handlers(ctx, w)
            self.write_handlers(ctx, w)
            for panel in panels:
                panel.write_handlers(ctx, w)
            w.blank()
            with w.block("return (", ");"):
                self._write_shell(ctx, w, panels)
        w.blank()
        w.line(f"export default {ctx.app_name};")
        return w.render()

    def _write_common_state(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.line("const [loading, setLoading] = useState(true);")
        if ctx.dark_mode:
            w.line("const [darkMode, setDarkMode] = useState(false);")
        if ctx.has("Authentication"):
            w.line("const [user, setUser] = useState(null);")
        if ctx.has("Notifications"):
            w.line("const [notifications, setNotifications] = useState(3);")
        if uses_toast(ctx.features):
            w.line("const { toast } = useToast();")
        if ctx.has("Search & Filtering"):
            w.line("const [query, setQuery] = useState('');")

    def _write_common_handlers(self, ctx: TemplateContext, w: CodeWriter) -> None:
        if ctx.dark_mode:
            w.blank()
            with w.block("const toggleDarkMode = () => {", "};"):
                w.line("setDarkMode(!darkMode);")
                w.line("document.body.classList.toggle('dark-mode');")
        if ctx.has("Authentication"):
            w.blank()
            with w.block("const handleLogin = () => {", "};"):
                w.line("setUser({ name: 'Guest' });")
                w.line("toast({ title: 'Signed in', description: 'Welcome back!' });")
            w.blank()
            with w.block("const handleLogout = () => {", "};"):
                w.line("setUser(null);")
                w.line("toast({ title: 'Signed out' });")
        if ctx.has("Notifications"):
            w.blank()
            with w.block("const clearNotifications = () => {", "};"):
                w.line("setNotifications(0);")
                w.line("toast({ title: 'Notifications cleared' });")

    def _root_class(self, ctx: TemplateContext) -> str:
        if ctx.dark_mode:
            return f"className={{`app app-{ctx.app_type.value} ${{darkMode ? 'dark' : 'light'}}`}}"
        return f'className="app app-{ctx.app_type.value}"'

    def _write_shell(
        self,
        ctx: TemplateContext,
        w: CodeWriter,
        panels: Tuple[feature_panels.FeaturePanel, ...],
    ) -> None:
        with w.element("div", self._root_class(ctx)):
            w.leaf("style", "{styles}")
            if ctx.accessible:
                w.leaf("a", "Skip to content", 'className="skip-link" href="#main-content"')
            self._write_header(ctx, w)
            with w.element("main", 'className="content-area" id="main-content"'):
                w.ternary(
                    "loading",
                    lambda w: self._write_loading(ctx, w),
                    lambda w: self._write_loaded(ctx, w, panels),
                )
            with w.element("footer", 'className="app-footer"'):
                w.leaf("p", f"&copy; {{new Date().getFullYear()}} {ctx.app_name}. All rights reserved.")

    def _write_header(self, ctx: TemplateContext, w: CodeWriter) -> None:
        with w.element("header", 'className="app-header"'):
            with w.element("div", 'className="logo-area"'):
                w.leaf("h1", ctx.app_name)
            with w.element("nav", 'className="app-nav"' + ctx.aria('aria-label="Main navigation"')):
                for page in ctx.pages:
                    w.leaf("a", page, f'href="#{page.lower()}"')
            if not (ctx.dark_mode or ctx.has("Authentication") or ctx.has("Notifications")):
                return
            with w.element("div", 'className="header-actions"'):
                if ctx.has("Notifications"):
                    w.leaf(
                        "Button",
                        "Alerts ({notifications})",
                        'variant="ghost" className="notification-bell" onClick={clearNotifications}'
                        + ctx.aria('aria-label="Notifications"'),
                    )
                if ctx.dark_mode:
                    w.leaf(
                        "button",
                        "{darkMode ? 'Light' : 'Dark'}",
                        'className="theme-toggle" onClick={toggleDarkMode}'
                        + ctx.aria('aria-label="Toggle dark mode"'),
                    )
                if ctx.has("Authentication"):
                    w.ternary(
                        "user",
                        lambda w: self._write_signed_in(w),
                        lambda w: w.leaf("Button", "Sign in", "onClick={handleLogin}"),
                    )

    @staticmethod
    def _write_signed_in(w: CodeWriter) -> None:
        with w.element("div", 'className="user-badge"'):
            w.leaf("span", "{user.name}")
            w.leaf("Button", "Sign out", 'variant="outline" onClick={handleLogout}')

    def _write_loading(self, ctx: TemplateContext, w: CodeWriter) -> None:
        with w.element("div", 'className="loading-container"' + ctx.aria('role="status"')):
            w.leaf("div", "", 'className="loader"')
            w.leaf("p", f"Loading your {self.loading_label}...")

    def _write_loaded(
        self,
        ctx: TemplateContext,
        w: CodeWriter,
        panels: Tuple[feature_panels.FeaturePanel, ...],
    ) -> None:
        with w.fragment():
            self.write_main(ctx, w)
            if panels:
                with w.element("section", 'className="feature-panels"'):
                    for panel in panels:
                        panel.write_markup(ctx, w)

    def render_styles(self, ctx: TemplateContext) -> str:
        w = CodeWriter()
        self.write_styles(ctx, w)
        panels = self.panels(ctx)
        if panels:
            feature_panels.write_panel_base_styles(w)
        for panel in panels:
            panel.write_styles(ctx, w)
        return w.render().strip("\n")


def write_card_grid_rule(w: CodeWriter, selector: str, min_width: str = "240px") -> None:
    w.rule(
        selector,
        {
            "display": "grid",
            "grid-template-columns": f"repeat(auto-fill, minmax({min_width}, 1fr))",
            "gap": "1.5rem",
            "margin-bottom": "2rem",
        },
    )
    w.blank()


CARD_DECLARATIONS: Dict[str, str] = {
    "background-color": "var(--color-surface)",
    "border-radius": "8px",
    "padding": "1.5rem",
    "box-shadow": "var(--shadow)",
}
