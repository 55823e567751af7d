from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_APP_NAME = "HayagrivaApp"

BASIC_UI = "Basic UI"
RESPONSIVE_DESIGN = "Responsive Design"


class AppType(str, Enum):
    DASHBOARD = "dashboard"
    ECOMMERCE = "ecommerce"
    BLOG = "blog"
    PORTFOLIO = "portfolio"
    SOCIAL = "social"
    TASKMANAGER = "taskmanager"
    GENERIC = "generic"

    @classmethod
    def coerce(cls, value: object) -> Optional["AppType"]:
        """Return the member for `value`, or None when it names no app type."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


ColorTheme = Literal["blue", "green", "purple", "orange", "red"]
COLOR_THEMES: Tuple[str, ...] = ("blue", "green", "purple", "orange", "red")

Framework = Literal["react", "vue", "angular", "svelte"]
CssFramework = Literal["tailwind", "bootstrap", "material", "chakra"]


class DesignPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    dark_mode: bool = False
    responsive: bool = True
    color_theme: Optional[ColorTheme] = None


class AppRequirements(BaseModel):
    """Structured description of the app a prompt asks for."""

    model_config = ConfigDict(frozen=True)

    app_type: AppType = AppType.GENERIC
    app_name: str = DEFAULT_APP_NAME
    features: Tuple[str, ...] = (BASIC_UI, RESPONSIVE_DESIGN)
    design: DesignPreferences = Field(default_factory=DesignPreferences)
    components: Tuple[str, ...] = ()
    pages: Tuple[str, ...] = ("Home",)

    def has_feature(self, tag: str) -> bool:
        return tag in self.features


class GenerationOptions(BaseModel):
    """Flags from the generator settings panel; never read by the extractor."""

    model_config = ConfigDict(frozen=True)

    framework: Framework = "react"
    css_framework: CssFramework = "tailwind"
    responsive: bool = True
    accessibility: bool = True


class TemplateFragments(BaseModel):
    model_config = ConfigDict(frozen=True)

    imports: str
    body: str
    styles: str


class BundleMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    app_type: AppType
    features: Tuple[str, ...]
    generated_at: datetime
    framework: str = "react"
    css_framework: str = "tailwind"


class SynthesizedBundle(BaseModel):
    model_config = ConfigDict(frozen=True)

    app_name: str
    source_text: str
    stylesheet_text: str
    text: str
    metadata: BundleMetadata


class EmittedArtifact(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    mime_type: str
    content: bytes


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str
    content: str


class GenerationRecord(BaseModel):
    id: str
    name: str
    description: str
    timestamp: datetime
    prompt: str
    app_type: AppType
    filename: str
    features: List[str] = Field(default_factory=list)

    def summary(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.app_type.value,
            "when": self.timestamp.isoformat(),
            "description": self.description,
        }
