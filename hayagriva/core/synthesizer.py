"""
Requirements -> source bundle.

The bundle is one text artifact made of four sections in a fixed order:
header comment, imports, component body, stylesheet. The stylesheet is kept
in a `styles` template literal and rendered by the component through a
<style> element, so the artifact stays a single self-contained module.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import FrozenSet, Optional, Sequence

from hayagriva.core.fragments import CodeWriter, FragmentBuilder, ImportSet
from hayagriva.core.lexicon import FEATURE_VOCABULARY
from hayagriva.core.protocol import (
    BASIC_UI,
    AppRequirements,
    BundleMetadata,
    DesignPreferences,
    GenerationOptions,
    SynthesizedBundle,
)
from hayagriva.templates.base import Palette, palette_for, uses_toast
from hayagriva.templates.registry import TEMPLATES, resolve

logger = logging.getLogger(__name__)

SUPPORTED_FRAMEWORK = "react"
BOOTSTRAP_CSS = "bootstrap/dist/css/bootstrap.min.css"


def base_imports(features: Sequence[str], options: GenerationOptions) -> ImportSet:
    imports = ImportSet()
    imports.add("react", ["useState", "useEffect"], default="React")
    imports.add("@/components/ui/button", ["Button"])
    imports.add("@/components/ui/input", ["Input"])
    if uses_toast(features):
        imports.add("@/components/ui/use-toast", ["useToast"])
    if options.css_framework == "bootstrap":
        imports.side_effect(BOOTSTRAP_CSS)
    return imports


def build_imports(
    requirements: AppRequirements,
    options: GenerationOptions,
    template_imports: str = "",
) -> ImportSet:
    """Base imports with the template's import lines merged in per module."""
    return base_imports(requirements.features, options).merge(ImportSet.parse(template_imports))


def imported_names() -> FrozenSet[str]:
    """Every name a generated module can bind through its imports, across all registered templates."""
    return _imported_names(tuple(TEMPLATES.items()))


@lru_cache(maxsize=8)
def _imported_names(templates: tuple) -> FrozenSet[str]:
    features = (BASIC_UI,) + FEATURE_VOCABULARY
    design = DesignPreferences(dark_mode=True)
    options = GenerationOptions(css_framework="bootstrap")
    imports = base_imports(features, options)
    for _, template in templates:
        imports.merge(ImportSet.parse(template("App", features, design, options).imports))
    return frozenset(imports.bound_names())


def _palette_vars(palette: Palette, dark: bool = False) -> dict:
    if dark:
        return {
            "--color-background": palette.dark_background,
            "--color-text": palette.dark_text,
            "--color-surface": palette.dark_surface,
            "--color-muted": palette.dark_muted,
            "--color-border": palette.dark_border,
            "--shadow": "0 2px 10px rgba(0, 0, 0, 0.4)",
        }
    return {
        "--color-primary": palette.primary,
        "--color-secondary": palette.secondary,
        "--color-background": palette.background,
        "--color-text": palette.text,
        "--color-surface": palette.surface,
        "--color-muted": palette.muted,
        "--color-border": palette.border,
        "--shadow": "0 2px 10px rgba(0, 0, 0, 0.05)",
    }


def build_base_stylesheet(requirements: AppRequirements, options: GenerationOptions) -> str:
    design = requirements.design
    w = CodeWriter()
    palette = palette_for(design.color_theme)

    w.rule(":root", _palette_vars(palette))
    w.blank()
    if design.dark_mode:
        w.rule("body.dark-mode,\n.app.dark", _palette_vars(palette, dark=True))
        w.blank()

    w.rule("*", {"box-sizing": "border-box"})
    w.blank()
    w.rule(
        "body",
        {
            "margin": "0",
            "font-family": "-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif",
            "background-color": "var(--color-background)",
            "color": "var(--color-text)",
        },
    )
    w.blank()
    w.rule(
        ".app",
        {
            "min-height": "100vh",
            "display": "flex",
            "flex-direction": "column",
            "background-color": "var(--color-background)",
            "color": "var(--color-text)",
            "transition": "background-color 0.3s ease, color 0.3s ease",
        },
    )
    w.blank()
    w.rule(
        ".app-header",
        {
            "display": "flex",
            "justify-content": "space-between",
            "align-items": "center",
            "padding": "1rem 2rem",
            "background-color": "var(--color-surface)",
            "box-shadow": "var(--shadow)",
        },
    )
    w.blank()
    w.rule(".logo-area h1", {"margin": "0", "font-size": "1.5rem", "color": "var(--color-primary)"})
    w.blank()
    w.rule(".app-nav", {"display": "flex", "gap": "1rem"})
    w.blank()
    w.rule(".app-nav a", {"color": "inherit", "text-decoration": "none"})
    w.blank()
    w.rule(".app-nav a:hover", {"color": "var(--color-primary)"})
    w.blank()
    w.rule(".header-actions", {"display": "flex", "align-items": "center", "gap": "0.75rem"})
    w.blank()
    w.rule(".content-area", {"flex": "1", "padding": "2rem", "max-width": "1200px", "width": "100%", "margin": "0 auto"})
    w.blank()
    w.rule(
        ".loading-container",
        {"display": "flex", "flex-direction": "column", "align-items": "center", "justify-content": "center", "height": "300px"},
    )
    w.blank()
    w.rule(
        ".loader",
        {
            "border": "4px solid var(--color-muted)",
            "border-top": "4px solid var(--color-primary)",
            "border-radius": "50%",
            "width": "40px",
            "height": "40px",
            "animation": "spin 1s linear infinite",
        },
    )
    w.blank()
    with w.block("@keyframes spin {", "}"):
        w.rule("0%", {"transform": "rotate(0deg)"})
        w.rule("100%", {"transform": "rotate(360deg)"})
    w.blank()
    w.rule(
        ".app-footer",
        {"text-align": "center", "padding": "1.5rem", "border-top": "1px solid var(--color-border)", "font-size": "0.875rem"},
    )
    w.blank()

    if design.dark_mode:
        w.rule(
            ".theme-toggle",
            {
                "background": "none",
                "border": "1px solid var(--color-border)",
                "border-radius": "4px",
                "padding": "0.25rem 0.75rem",
                "color": "inherit",
                "cursor": "pointer",
            },
        )
        w.blank()
    if requirements.has_feature("Authentication"):
        w.rule(".user-badge", {"display": "flex", "align-items": "center", "gap": "0.5rem"})
        w.blank()

    if options.accessibility or requirements.has_feature("Accessibility"):
        w.rule(".skip-link", {"position": "absolute", "left": "-9999px"})
        w.blank()
        w.rule(
            ".skip-link:focus",
            {
                "left": "1rem",
                "top": "1rem",
                "padding": "0.5rem 1rem",
                "background-color": "var(--color-primary)",
                "color": "#ffffff",
                "z-index": "100",
            },
        )
        w.blank()
        w.rule(
            "a:focus-visible,\nbutton:focus-visible,\ninput:focus-visible",
            {"outline": "2px solid var(--color-primary)", "outline-offset": "2px"},
        )
        w.blank()

    if design.responsive and options.responsive:
        with w.block("@media (max-width: 768px) {", "}"):
            w.rule(".app-header", {"flex-direction": "column", "gap": "0.75rem", "padding": "1rem"})
            w.rule(".content-area", {"padding": "1rem"})
            w.rule(".card-grid", {"grid-template-columns": "1fr"})
            w.rule(".header-actions", {"width": "100%", "justify-content": "center"})
            w.rule(".feature-panels", {"grid-template-columns": "1fr"})
        w.blank()

    return w.render().strip("\n")


def build_header(
    requirements: AppRequirements,
    options: GenerationOptions,
    generated_at: datetime,
    prompt: str = "",
) -> str:
    lines = [
        "/**",
        f" * {requirements.app_name}",
        f" * Generated by Hayagriva on {generated_at.isoformat()}",
        f" * App type: {requirements.app_type.value}",
        f" * Features: {', '.join(requirements.features)}",
        f" * Framework: {SUPPORTED_FRAMEWORK} ({options.css_framework})",
    ]
    if prompt.strip():
        lines.append(" *")
        lines.append(" * Prompt:")
        for text in prompt.strip().splitlines():
            text = text.replace("*/", "* /")
            lines.append(f" *   {text}".rstrip())
    lines.append(" */")
    return "\n".join(lines)


def _styles_literal(stylesheet: str) -> str:
    return "const styles = `\n" + stylesheet + "\n`;"


def synthesize(
    requirements: AppRequirements,
    options: Optional[GenerationOptions] = None,
    *,
    prompt: str = "",
    generated_at: Optional[datetime] = None,
) -> SynthesizedBundle:
    """
    Build the source bundle for `requirements`.

    With `generated_at` fixed the result is byte-identical across calls; it
    defaults to the current UTC time.
    """
    options = options or GenerationOptions()
    if options.framework != SUPPORTED_FRAMEWORK:
        logger.warning(
            "Framework %r has no templates yet; generating %s instead",
            options.framework,
            SUPPORTED_FRAMEWORK,
        )
    generated_at = generated_at or datetime.now(timezone.utc)

    template = resolve(requirements.app_type)
    fragments = template(
        requirements.app_name,
        requirements.features,
        requirements.design,
        options,
    )

    imports = build_imports(requirements, options, fragments.imports).render()

    stylesheet = build_base_stylesheet(requirements, options)
    if fragments.styles:
        stylesheet = f"{stylesheet}\n\n{fragments.styles}"

    builder = FragmentBuilder()
    builder.add("header", build_header(requirements, options, generated_at, prompt))
    builder.add("imports", imports)
    builder.add("body", fragments.body)
    builder.add("styles", _styles_literal(stylesheet))

    source_text = f"{imports}\n\n{fragments.body}\n"
    logger.debug(
        "Synthesized %s (%s): %d sections",
        requirements.app_name,
        requirements.app_type.value,
        len(builder.sections),
    )
    return SynthesizedBundle(
        app_name=requirements.app_name,
        source_text=source_text,
        stylesheet_text=stylesheet + "\n",
        text=builder.render(),
        metadata=BundleMetadata(
            app_type=requirements.app_type,
            features=requirements.features,
            generated_at=generated_at,
            framework=SUPPORTED_FRAMEWORK,
            css_framework=options.css_framework,
        ),
    )
