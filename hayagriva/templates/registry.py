from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Sequence, Union

from hayagriva.core.protocol import AppType, DesignPreferences, GenerationOptions, TemplateFragments
from hayagriva.templates import blog, dashboard, ecommerce, generic, portfolio, social, taskmanager

logger = logging.getLogger(__name__)

TemplateFn = Callable[[str, Sequence[str], DesignPreferences, Optional[GenerationOptions]], TemplateFragments]

TEMPLATES: Dict[AppType, TemplateFn] = {
    AppType.DASHBOARD: dashboard.template,
    AppType.ECOMMERCE: ecommerce.template,
    AppType.BLOG: blog.template,
    AppType.PORTFOLIO: portfolio.template,
    AppType.SOCIAL: social.template,
    AppType.TASKMANAGER: taskmanager.template,
    AppType.GENERIC: generic.template,
}


def register(app_type: AppType, template: TemplateFn) -> Optional[TemplateFn]:
    """
    Install `template` for `app_type` and return the one it replaces.

    This is the only write to TEMPLATES. Call it at setup time, before any
    generation runs; synthesis itself only reads the table.
    """
    previous = TEMPLATES.get(app_type)
    TEMPLATES[app_type] = template
    return previous


def resolve(app_type: Union[AppType, str]) -> TemplateFn:
    """Template for `app_type`; anything unregistered gets the generic template."""
    key = AppType.coerce(app_type)
    if key is None or key not in TEMPLATES:
        logger.warning("No template registered for %r; using generic", app_type)
        return TEMPLATES[AppType.GENERIC]
    return TEMPLATES[key]
