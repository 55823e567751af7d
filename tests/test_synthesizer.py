import pytest

from hayagriva.core.extractor import extract
from hayagriva.core.protocol import AppType, GenerationOptions, TemplateFragments
from hayagriva.core.sandbox import Sandbox
from hayagriva.core.synthesizer import imported_names, synthesize
from hayagriva.templates.registry import TEMPLATES

PROMPT = "Build a dashboard app with dark mode and authentication"


def test_synthesis_is_byte_identical_with_fixed_time(fixed_time):
    req = extract(PROMPT)
    first = synthesize(req, prompt=PROMPT, generated_at=fixed_time)
    second = synthesize(req, prompt=PROMPT, generated_at=fixed_time)
    assert first.text == second.text
    assert first == second


def test_sections_appear_in_fixed_order(fixed_time):
    text = synthesize(extract(PROMPT), generated_at=fixed_time).text
    header = text.index("/**")
    imports = text.index("import React, { useState, useEffect } from 'react';")
    body = text.index("const DashboardApp = () => {")
    styles = text.index("const styles = `")
    assert header < imports < body < styles
    assert fixed_time.isoformat() in text


@pytest.mark.parametrize("app_type", [t.value for t in AppType])
def test_full_bundle_is_balanced(app_type, fixed_time):
    req = extract(f"Build a {app_type} with dark mode, login, chat, uploads, maps, reports and a red theme")
    bundle = synthesize(req, generated_at=fixed_time)
    sandbox = Sandbox()
    assert sandbox.run_check(bundle.text) is None
    assert sandbox.run_check(bundle.source_text) is None
    assert sandbox.run_check(bundle.stylesheet_text, tags=False) is None


def test_dark_rules_only_with_dark_mode(fixed_time):
    dark = synthesize(extract("a blog with dark mode"), generated_at=fixed_time)
    light = synthesize(extract("a blog"), generated_at=fixed_time)
    assert ".app.dark" in dark.stylesheet_text
    assert "toggleDarkMode" in dark.text
    assert ".app.dark" not in light.stylesheet_text
    assert "toggleDarkMode" not in light.text


def test_media_query_needs_design_and_option(fixed_time):
    media = "@media (max-width: 768px)"
    req = extract("a blog")
    assert media in synthesize(req, generated_at=fixed_time).stylesheet_text
    off = synthesize(req, GenerationOptions(responsive=False), generated_at=fixed_time)
    assert media not in off.stylesheet_text
    fixed = synthesize(extract("a fixed-width blog"), generated_at=fixed_time)
    assert media not in fixed.stylesheet_text


def test_palette_follows_color_theme(fixed_time):
    green = synthesize(extract("a blog with a green theme"), generated_at=fixed_time)
    default = synthesize(extract("a blog"), generated_at=fixed_time)
    assert "--color-primary: #43a047;" in green.stylesheet_text
    assert "--color-primary: #4361ee;" in default.stylesheet_text


def test_conditional_imports(fixed_time):
    toast = "import { useToast } from '@/components/ui/use-toast';"
    bootstrap = "import 'bootstrap/dist/css/bootstrap.min.css';"
    with_auth = synthesize(extract("a blog with login"), generated_at=fixed_time).text
    plain = synthesize(extract("a blog"), generated_at=fixed_time).text
    assert toast in with_auth
    assert toast not in plain
    assert bootstrap not in plain
    styled = synthesize(extract("a blog"), GenerationOptions(css_framework="bootstrap"), generated_at=fixed_time)
    assert bootstrap in styled.text
    assert styled.text.count("from 'react';") == 1


def test_prompt_cannot_close_the_header_comment(fixed_time):
    prompt = "Build a blog */ alert(1); /*"
    text = synthesize(extract(prompt), prompt=prompt, generated_at=fixed_time).text
    assert text.count("*/") == 1
    assert "Build a blog * / alert(1); /*" in text


def test_other_frameworks_fall_back_to_react(fixed_time):
    bundle = synthesize(extract("a blog"), GenerationOptions(framework="vue"), generated_at=fixed_time)
    assert bundle.metadata.framework == "react"
    assert "import React" in bundle.text


def test_metadata(fixed_time):
    req = extract(PROMPT)
    meta = synthesize(req, GenerationOptions(css_framework="chakra"), generated_at=fixed_time).metadata
    assert meta.app_type is AppType.DASHBOARD
    assert meta.features == req.features
    assert meta.generated_at == fixed_time
    assert meta.css_framework == "chakra"


def test_template_imports_merge_into_base_imports(monkeypatch, fixed_time):
    def blog_with_memo(app_name, features, design, options=None):
        return TemplateFragments(
            imports="import React, { useMemo } from 'react';\nimport { Button } from '@/components/ui/button';",
            body=f"export default function {app_name}() {{\n  return <div />;\n}}",
            styles="",
        )

    monkeypatch.setitem(TEMPLATES, AppType.BLOG, blog_with_memo)
    text = synthesize(extract("a blog"), generated_at=fixed_time).text
    assert text.count("from 'react';") == 1
    assert "import React, { useState, useEffect, useMemo } from 'react';" in text
    assert text.count("from '@/components/ui/button';") == 1


def test_imported_names_cover_every_template():
    names = imported_names()
    assert {"React", "useState", "Button", "Input", "useToast", "LineChart", "ResponsiveContainer"} <= names


def test_imported_names_follow_registered_templates(monkeypatch):
    def with_extra_import(app_name, features, design, options=None):
        return TemplateFragments(imports="import { Calendar } from 'react-calendar';", body="", styles="")

    monkeypatch.setitem(TEMPLATES, AppType.GENERIC, with_extra_import)
    assert "Calendar" in imported_names()
