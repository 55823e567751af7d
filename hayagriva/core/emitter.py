from __future__ import annotations

import re
from pathlib import Path
from typing import Dict

from hayagriva.core.protocol import EmittedArtifact, SynthesizedBundle

MIME_TYPES: Dict[str, str] = {
    "js": "text/javascript",
    "jsx": "text/javascript",
    "ts": "text/typescript",
    "tsx": "text/typescript",
}

_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_NON_ALNUM_RE = re.compile(r"[^A-Za-z0-9]+")


def kebab_case(name: str) -> str:
    """
    "DashboardApp" -> "dashboard-app", "My Shop" -> "my-shop".

    Empty or symbol-only input gives "app" so filenames are never blank.
    """
    spaced = _BOUNDARY_RE.sub(" ", name)
    words = [w.lower() for w in _NON_ALNUM_RE.split(spaced) if w]
    return "-".join(words) or "app"


def mime_type_for(extension: str) -> str:
    ext = extension.lower().lstrip(".")
    if ext not in MIME_TYPES:
        raise ValueError(f"Unsupported bundle extension: {extension!r} (expected one of {', '.join(MIME_TYPES)})")
    return MIME_TYPES[ext]


def emit(bundle: SynthesizedBundle, extension: str = "jsx") -> EmittedArtifact:
    ext = extension.lower().lstrip(".")
    return EmittedArtifact(
        filename=f"{kebab_case(bundle.app_name)}.bundle.{ext}",
        mime_type=mime_type_for(ext),
        content=bundle.text.encode("utf-8"),
    )


def emit_widget(source: str, name: str) -> EmittedArtifact:
    return EmittedArtifact(
        filename=f"{kebab_case(name)}-chatbot.js",
        mime_type=MIME_TYPES["js"],
        content=source.encode("utf-8"),
    )


def write_artifact(artifact: EmittedArtifact, out_dir: Path) -> Path:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    # Normalize paths
    filename = artifact.filename.replace("\\", "/").rsplit("/", 1)[-1]
    target = out_dir / filename
    target.write_bytes(artifact.content)
    return target
