"""
Declarative keyword tables that drive prompt extraction.

Matching is keyword spotting, not language understanding: every pattern is a
case-insensitive alternation anchored at a word start, so "payments" and
"uploads" hit their rules while "profile" does not trigger "file". A prompt
saying "no authentication please" still yields Authentication.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Tuple

from hayagriva.core.protocol import COLOR_THEMES, AppType


@dataclass(frozen=True)
class FeatureRule:
    pattern: Pattern[str]
    tag: str

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def _rule(keywords: str, tag: str) -> FeatureRule:
    return FeatureRule(re.compile(rf"\b(?:{keywords})", re.IGNORECASE), tag)


# Order matters: the first matching rule decides the app type.
APP_TYPE_RULES: Tuple[FeatureRule, ...] = (
    _rule(r"dashboard|chart|graph|data visuali[sz]ation", AppType.DASHBOARD.value),
    _rule(r"e-?commerce|shop|store|product|cart", AppType.ECOMMERCE.value),
    _rule(r"blog|content|article|post", AppType.BLOG.value),
    _rule(r"portfolio|showcase|gallery", AppType.PORTFOLIO.value),
    _rule(r"social|network|friend|share", AppType.SOCIAL.value),
    _rule(r"task|todo|to-do|project management", AppType.TASKMANAGER.value),
)

# Order here only fixes the order tags are reported in.
FEATURE_RULES: Tuple[FeatureRule, ...] = (
    _rule(r"authenticat|login|log in|register|signup|sign up|sign in", "Authentication"),
    _rule(r"search|filter|sort", "Search & Filtering"),
    _rule(r"notification|notify|alert", "Notifications"),
    _rule(r"payment|checkout|stripe|paypal", "Payments"),
    _rule(r"chat|messag", "Messaging"),
    _rule(r"upload|file|image", "File Uploads"),
    _rule(r"theme|theming|customi[sz]|personali[sz]", "Theming"),
    _rule(r"analytics|tracking|stats|metrics", "Analytics"),
    _rule(r"pdf|document|report", "Document Generation"),
    _rule(r"map|location|gps", "Maps & Location"),
    _rule(r"(?<!non-)(?<!not )(?<!non )responsive|mobile|tablet", "Responsive Design"),
    _rule(r"accessib|a11y|screen reader", "Accessibility"),
)

FEATURE_VOCABULARY: Tuple[str, ...] = tuple(rule.tag for rule in FEATURE_RULES)

DARK_MODE_RULE = re.compile(r"\b(?:dark[ -]mode|night[ -]mode|dark theme)", re.IGNORECASE)

NOT_RESPONSIVE_RULE = re.compile(
    r"\b(?:not responsive|non-?responsive|desktop[ -]only|fixed[ -]width)", re.IGNORECASE
)

_COLORS = "|".join(COLOR_THEMES)
COLOR_THEME_RULES: Tuple[Pattern[str], ...] = (
    re.compile(
        rf"\bcolou?r (?:theme|scheme|palette)(?:\s+of|\s+with)?\s+({_COLORS})\b",
        re.IGNORECASE,
    ),
    re.compile(rf"\b({_COLORS})(?:\s+colou?r)?\s+(?:theme|scheme|palette|colou?rs)\b", re.IGNORECASE),
)


@dataclass(frozen=True)
class AppLayout:
    components: Tuple[str, ...]
    pages: Tuple[str, ...]
    implied_features: Tuple[str, ...] = ()


APP_LAYOUTS: Dict[AppType, AppLayout] = {
    AppType.DASHBOARD: AppLayout(
        components=("Chart", "DataTable", "StatCard"),
        pages=("Home", "Dashboard", "Analytics"),
        implied_features=("Analytics",),
    ),
    AppType.ECOMMERCE: AppLayout(
        components=("ProductCard", "CartItem", "Checkout"),
        pages=("Home", "Products", "Cart", "Checkout"),
        implied_features=("Payments", "Search & Filtering"),
    ),
    AppType.BLOG: AppLayout(
        components=("ArticleCard", "PostContent", "Comment"),
        pages=("Home", "Blog", "Article"),
    ),
    AppType.PORTFOLIO: AppLayout(
        components=("ProjectCard", "Gallery", "ContactForm"),
        pages=("Home", "Projects", "About", "Contact"),
    ),
    AppType.SOCIAL: AppLayout(
        components=("UserProfile", "Post", "Comment"),
        pages=("Home", "Feed", "Profile", "Discover"),
        implied_features=("Messaging", "Notifications"),
    ),
    AppType.TASKMANAGER: AppLayout(
        components=("TaskCard", "TaskList", "TaskForm"),
        pages=("Home", "Tasks", "Calendar", "Reports"),
        implied_features=("Notifications",),
    ),
    AppType.GENERIC: AppLayout(components=(), pages=("Home",)),
}


def layout_for(app_type: AppType) -> AppLayout:
    return APP_LAYOUTS.get(app_type, APP_LAYOUTS[AppType.GENERIC])


def match_app_type(text: str) -> Optional[AppType]:
    for rule in APP_TYPE_RULES:
        if rule.matches(text):
            return AppType(rule.tag)
    return None


def match_features(text: str) -> Tuple[str, ...]:
    found: List[str] = []
    for rule in FEATURE_RULES:
        if rule.tag not in found and rule.matches(text):
            found.append(rule.tag)
    return tuple(found)


def match_design_preferences(text: str) -> Dict[str, object]:
    """
    Partial design record: only keys the text says something about are present.
    """
    prefs: Dict[str, object] = {}
    if DARK_MODE_RULE.search(text):
        prefs["dark_mode"] = True
    if NOT_RESPONSIVE_RULE.search(text):
        prefs["responsive"] = False
    for rule in COLOR_THEME_RULES:
        m = rule.search(text)
        if m:
            prefs["color_theme"] = m.group(1).lower()
            break
    return prefs
