import re

import pytest

from hayagriva.core.extractor import derive_app_name, extract, is_identifier
from hayagriva.core.lexicon import FEATURE_VOCABULARY
from hayagriva.core.protocol import BASIC_UI, DEFAULT_APP_NAME, RESPONSIVE_DESIGN, AppType


def test_dashboard_with_dark_mode_and_authentication():
    req = extract("Build a dashboard app with dark mode and authentication")
    assert req.app_type is AppType.DASHBOARD
    assert req.design.dark_mode is True
    assert "Authentication" in req.features
    assert req.app_name == "DashboardApp"


def test_empty_prompt_gives_defaults():
    req = extract("")
    assert req.app_type is AppType.GENERIC
    assert req.app_name == DEFAULT_APP_NAME
    assert req.features == (BASIC_UI, RESPONSIVE_DESIGN)
    assert req.pages == ("Home",)


def test_store_with_payments_and_search():
    req = extract("Create an online store with payments and search")
    assert req.app_type is AppType.ECOMMERCE
    assert {"Payments", "Search & Filtering"} <= set(req.features)
    assert req.app_name == "OnlineStore"


@pytest.mark.parametrize("prompt", [None, "", "   ", "!!!", "\x00\x01", "a" * 10000, "<script>*/</script>"])
def test_extract_is_total(prompt):
    req = extract(prompt)
    assert re.fullmatch(r"[A-Za-z][A-Za-z0-9]*", req.app_name)
    assert req.app_type in AppType
    assert len(req.features) == len(set(req.features))
    assert req.features[0] == BASIC_UI


def test_extract_is_idempotent():
    prompt = "Make a social network with chat, uploads and a green color theme"
    assert extract(prompt) == extract(prompt)


FEATURE_KEYWORDS = {
    "Authentication": "login",
    "Search & Filtering": "search",
    "Notifications": "notifications",
    "Payments": "payments",
    "Messaging": "chat",
    "File Uploads": "uploads",
    "Theming": "theming",
    "Analytics": "analytics",
    "Document Generation": "pdf export",
    "Maps & Location": "maps",
    "Responsive Design": "mobile",
    "Accessibility": "accessibility",
}


def test_feature_keywords_cover_the_vocabulary():
    assert set(FEATURE_KEYWORDS) == set(FEATURE_VOCABULARY)


@pytest.mark.parametrize("tag, keyword", sorted(FEATURE_KEYWORDS.items()))
@pytest.mark.parametrize("prompt", ["", "Build a blog", "Create a task tracker with search", "Make an online shop"])
def test_feature_detection_is_monotone(prompt, tag, keyword):
    before = extract(prompt)
    after = extract(f"{prompt} with {keyword}")
    assert set(before.features) <= set(after.features)
    assert tag in after.features
    assert after.app_type is before.app_type


def test_features_are_unique_and_ordered():
    req = extract("Build a shop with payments, checkout and search and filter")
    assert len(req.features) == len(set(req.features))
    assert req.features[0] == BASIC_UI
    assert req.features[-1] == RESPONSIVE_DESIGN


def test_not_responsive_drops_responsive_feature():
    req = extract("Build a dashboard that is not responsive")
    assert req.design.responsive is False
    assert RESPONSIVE_DESIGN not in req.features


def test_app_type_implies_features():
    req = extract("Build a social network")
    assert "Messaging" in req.features
    assert "Notifications" in req.features


@pytest.mark.parametrize(
    "prompt, name",
    [
        ("Build a dashboard app with charts", "DashboardApp"),
        ("please develop the recipe finder for my family", "RecipeFinder"),
        ("Build a map", "MapApp"),
        ("Build a 3d viewer", DEFAULT_APP_NAME),
        ("a tool with no verb", DEFAULT_APP_NAME),
    ],
)
def test_derive_app_name(prompt, name):
    assert derive_app_name(prompt) == name


def test_custom_default_name():
    assert extract("", default_name="StarterKit").app_name == "StarterKit"


def test_invalid_default_name_falls_back():
    assert extract("", default_name="1-bad").app_name == DEFAULT_APP_NAME


@pytest.mark.parametrize("name", ["Foo\n", "Foo\r\n", " Foo", "Foo Bar", ""])
def test_is_identifier_rejects_surrounding_whitespace(name):
    assert not is_identifier(name)


def test_default_name_with_trailing_newline_falls_back():
    assert extract("", default_name="Foo\n").app_name == DEFAULT_APP_NAME


@pytest.mark.parametrize(
    "prompt, name",
    [
        ("Build a line chart", "LineChartApp"),
        ("Build a responsive container", "ResponsiveContainerApp"),
        ("Make a button", "ButtonApp"),
    ],
)
def test_names_bound_by_generated_imports_get_a_suffix(prompt, name):
    assert derive_app_name(prompt) == name
