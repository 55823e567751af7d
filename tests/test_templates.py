import pytest

from hayagriva.core.lexicon import FEATURE_VOCABULARY
from hayagriva.core.protocol import BASIC_UI, AppType, DesignPreferences, GenerationOptions
from hayagriva.core.sandbox import Sandbox
from hayagriva.templates import blog, ecommerce, generic
from hayagriva.templates.registry import TEMPLATES, register, resolve

ALL_FEATURES = (BASIC_UI,) + FEATURE_VOCABULARY
PLAIN = DesignPreferences()
DARK = DesignPreferences(dark_mode=True, color_theme="purple")


def test_every_app_type_has_a_template():
    assert set(TEMPLATES) == set(AppType)


def test_unknown_type_resolves_to_generic():
    assert resolve("unknown-type") is resolve("generic")
    assert resolve("generic") is generic.template


def test_resolve_accepts_strings_and_members():
    assert resolve("Blog") is blog.template
    assert resolve(AppType.ECOMMERCE) is ecommerce.template


def test_register_replaces_a_template():
    previous = register(AppType.BLOG, generic.template)
    try:
        assert previous is blog.template
        assert resolve("blog") is generic.template
    finally:
        assert register(AppType.BLOG, previous) is generic.template
    assert resolve("blog") is blog.template


@pytest.mark.parametrize("app_type", list(AppType))
@pytest.mark.parametrize(
    "features, design, options",
    [
        ((BASIC_UI,), PLAIN, GenerationOptions()),
        (ALL_FEATURES, DARK, GenerationOptions()),
        (ALL_FEATURES, DARK, GenerationOptions(accessibility=False, responsive=False)),
    ],
)
def test_template_output_is_balanced(app_type, features, design, options):
    fragments = resolve(app_type)("SampleApp", features, design, options)
    sandbox = Sandbox()
    assert sandbox.run_check(fragments.body) is None
    assert sandbox.run_check(fragments.styles, tags=False) is None
    assert sandbox.run_check(fragments.imports) is None


@pytest.mark.parametrize("app_type", list(AppType))
def test_template_shell(app_type):
    body = resolve(app_type)("SampleApp", (BASIC_UI,), PLAIN, None).body
    assert body.startswith("const SampleApp = () => {")
    assert body.rstrip().endswith("export default SampleApp;")
    assert '<header className="app-header">' in body
    assert "Loading your" in body
    assert '<footer className="app-footer">' in body
    assert "<style>{styles}</style>" in body


def test_dashboard_imports_charts():
    fragments = resolve(AppType.DASHBOARD)("Metrics", (BASIC_UI, "Analytics"), PLAIN, None)
    assert "from 'recharts';" in fragments.imports
    assert "<LineChart" in fragments.body
    assert "analytics-panel" not in fragments.body


def test_store_owns_search_and_checkout():
    body = ecommerce.template("Shop", (BASIC_UI, "Payments", "Search & Filtering"), PLAIN, None).body
    assert "Search products..." in body
    assert "handleCheckout" in body
    assert "search-panel" not in body
    assert "payments-panel" not in body


def test_store_without_payments_has_no_checkout():
    body = ecommerce.template("Shop", (BASIC_UI,), PLAIN, None).body
    assert "handleCheckout" not in body


def test_shared_panels_follow_features():
    body = blog.template("Journal", (BASIC_UI, "Messaging", "Maps & Location"), PLAIN, None).body
    assert "messaging-panel" in body
    assert "maps-panel" in body
    assert "uploads-panel" not in body


def test_header_actions_follow_features():
    body = generic.template("Starter", (BASIC_UI, "Authentication", "Notifications"), DARK, None).body
    assert "handleLogin" in body
    assert "clearNotifications" in body
    assert "toggleDarkMode" in body
    assert "const { toast } = useToast();" in body


def test_accessibility_markup_is_optional():
    on = generic.template("Starter", (BASIC_UI,), PLAIN, GenerationOptions(accessibility=True)).body
    off = generic.template("Starter", (BASIC_UI,), PLAIN, GenerationOptions(accessibility=False)).body
    assert "skip-link" in on
    assert "aria-label" in on
    assert "skip-link" not in off
    assert "aria-label" not in off


def test_generic_lists_features():
    body = generic.template("Starter", (BASIC_UI, "Payments"), PLAIN, None).body
    assert "'Payments'" in body
    assert "Welcome to Starter" in body
