from __future__ import annotations

import logging
import re
from typing import FrozenSet, List, Optional

from hayagriva.core import lexicon
from hayagriva.core.protocol import (
    BASIC_UI,
    DEFAULT_APP_NAME,
    RESPONSIVE_DESIGN,
    AppRequirements,
    AppType,
    DesignPreferences,
)
from hayagriva.core.synthesizer import imported_names

logger = logging.getLogger(__name__)

IDENTIFIER_RE = re.compile(r"[A-Za-z][A-Za-z0-9]*")

NAME_PHRASE_RE = re.compile(
    r"\b(?:create|build|make|develop|generate)\s+(?:an?|the)\s+(\S+(?:\s+\S+){0,3})",
    re.IGNORECASE,
)

# Words that end the name phrase: "a dashboard app with dark mode" -> "dashboard app".
NAME_STOP_WORDS = frozenset(
    {
        "with", "and", "for", "that", "which", "where", "who", "using", "to", "in",
        "on", "of", "featuring", "including", "so", "but", "or", "from",
        "like", "having", "by", "via",
    }
)

# Browser globals the generated component uses or could shadow.
JS_GLOBALS = frozenset(
    {
        "Fragment", "Object", "Array", "String", "Number", "Boolean", "Date", "Math",
        "JSON", "Promise", "Error", "Map", "Set", "Symbol",
    }
)


def reserved_names() -> FrozenSet[str]:
    """Names an app component must not take: JS globals plus everything generated imports bind."""
    return JS_GLOBALS | imported_names()


def is_identifier(name: str) -> bool:
    return IDENTIFIER_RE.fullmatch(name) is not None


def derive_app_name(prompt: str, default_name: str = DEFAULT_APP_NAME) -> str:
    """
    "Build a dashboard app with ..." -> "DashboardApp".

    Falls back to `default_name` whenever the phrase is missing or does not
    sanitise to a valid identifier.
    """
    m = NAME_PHRASE_RE.search(prompt)
    if not m:
        logger.debug("No naming phrase in prompt; using %s", default_name)
        return default_name

    words: List[str] = []
    for raw in m.group(1).split():
        if raw.lower().strip(".,;:!?") in NAME_STOP_WORDS:
            break
        cleaned = re.sub(r"[^A-Za-z0-9]", "", raw)
        if cleaned:
            words.append(cleaned[0].upper() + cleaned[1:])
        if raw[-1:] in ".,;:!?":
            break

    name = "".join(words)
    if not is_identifier(name):
        logger.info("Extracted name %r is not a valid identifier; using %s", name, default_name)
        return default_name
    if name in reserved_names():
        logger.info("Extracted name %r clashes with a generated import; using %sApp", name, name)
        return f"{name}App"
    return name


def _collect_features(prompt: str, app_type: AppType, responsive: bool) -> tuple:
    features: List[str] = [BASIC_UI]
    for tag in lexicon.match_features(prompt) + lexicon.layout_for(app_type).implied_features:
        if tag not in features:
            features.append(tag)

    if responsive and RESPONSIVE_DESIGN not in features:
        features.append(RESPONSIVE_DESIGN)
    elif not responsive and RESPONSIVE_DESIGN in features:
        features.remove(RESPONSIVE_DESIGN)
    return tuple(features)


def extract(prompt: Optional[str], default_name: str = DEFAULT_APP_NAME) -> AppRequirements:
    """
    Turn a free-text prompt into AppRequirements. Never raises.

    Ambiguous prompts are resolved by lexicon order: the first app-type rule
    that matches wins, so "a blog with a dashboard" is a dashboard.
    """
    text = prompt or ""
    if not is_identifier(default_name):
        default_name = DEFAULT_APP_NAME

    app_type = lexicon.match_app_type(text)
    if app_type is None:
        logger.debug("No app-type keyword matched; defaulting to generic")
        app_type = AppType.GENERIC

    prefs = lexicon.match_design_preferences(text)
    design = DesignPreferences(**prefs)

    layout = lexicon.layout_for(app_type)
    requirements = AppRequirements(
        app_type=app_type,
        app_name=derive_app_name(text, default_name),
        features=_collect_features(text, app_type, design.responsive),
        design=design,
        components=layout.components,
        pages=layout.pages,
    )
    logger.debug(
        "Extracted %s app %s with features %s",
        requirements.app_type.value,
        requirements.app_name,
        ", ".join(requirements.features),
    )
    return requirements
