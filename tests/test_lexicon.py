import pytest

from hayagriva.core import lexicon
from hayagriva.core.protocol import AppType


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Build a dashboard for sales", AppType.DASHBOARD),
        ("an online store for shoes", AppType.ECOMMERCE),
        ("a personal blog", AppType.BLOG),
        ("my design portfolio", AppType.PORTFOLIO),
        ("a social network for hikers", AppType.SOCIAL),
        ("a todo list", AppType.TASKMANAGER),
    ],
)
def test_match_app_type(text, expected):
    assert lexicon.match_app_type(text) is expected


def test_first_matching_app_type_rule_wins():
    assert lexicon.match_app_type("a blog with a dashboard") is AppType.DASHBOARD


def test_no_app_type_keyword_returns_none():
    assert lexicon.match_app_type("hello world") is None


def test_analytics_keyword_does_not_change_app_type():
    assert lexicon.match_app_type("a recipe site with analytics") is None


def test_match_features_reports_in_rule_order():
    found = lexicon.match_features("maps, payments and login please")
    assert found == ("Authentication", "Payments", "Maps & Location")


def test_keywords_match_at_word_start_only():
    assert "File Uploads" not in lexicon.match_features("edit your profile")
    assert "File Uploads" in lexicon.match_features("photo uploads")


def test_negated_responsive_is_not_a_feature():
    assert "Responsive Design" not in lexicon.match_features("a non-responsive layout")
    assert "Responsive Design" in lexicon.match_features("fully responsive layout")


def test_negation_is_not_understood_for_features():
    assert "Authentication" in lexicon.match_features("no authentication please")


def test_design_preferences_are_partial():
    assert lexicon.match_design_preferences("plain app") == {}
    assert lexicon.match_design_preferences("with dark mode") == {"dark_mode": True}
    assert lexicon.match_design_preferences("desktop only please") == {"responsive": False}


@pytest.mark.parametrize(
    "text, theme",
    [
        ("a blue color theme", "blue"),
        ("use a colour scheme of green", "green"),
        ("Purple palette", "purple"),
    ],
)
def test_color_theme(text, theme):
    assert lexicon.match_design_preferences(text)["color_theme"] == theme


def test_layout_for_every_app_type():
    for app_type in AppType:
        layout = lexicon.layout_for(app_type)
        assert "Home" in layout.pages
    assert lexicon.layout_for(AppType.ECOMMERCE).implied_features == ("Payments", "Search & Filtering")
