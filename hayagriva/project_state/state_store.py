from __future__ import annotations

import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from hayagriva.core.protocol import AppRequirements, BundleMetadata, GenerationRecord
from hayagriva.utils.file_ops import ensure_dir, read_json, write_json

DESCRIPTION_LIMIT = 100


class ProjectState(BaseModel):
    """The last generation run."""

    prompt: str
    requirements: AppRequirements
    metadata: BundleMetadata
    artifact_path: Optional[str] = None
    balance_error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectState":
        return cls.model_validate(data)


def describe(prompt: str, limit: int = DESCRIPTION_LIMIT) -> str:
    text = " ".join(prompt.split())
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def new_record(
    *,
    name: str,
    prompt: str,
    requirements: AppRequirements,
    filename: str,
    timestamp: datetime,
) -> GenerationRecord:
    return GenerationRecord(
        id=uuid.uuid4().hex,
        name=name,
        description=describe(prompt),
        timestamp=timestamp,
        prompt=prompt,
        app_type=requirements.app_type,
        filename=filename,
        features=list(requirements.features),
    )


class ProjectStateStore:
    def __init__(self, root_dir: Path) -> None:
        self.root_dir = ensure_dir(root_dir)
        self._state_file = self.root_dir / "project_state.json"
        self._history_file = self.root_dir / "history.json"

    # -- last run ----------------------------------------------------

    def save(self, state: ProjectState) -> None:
        write_json(self._state_file, state.to_dict())

    def load(self) -> ProjectState:
        if not self._state_file.exists():
            raise FileNotFoundError(f"No project_state.json in {self.root_dir}")
        return ProjectState.from_dict(read_json(self._state_file))

    # -- history -----------------------------------------------------

    def _read_history(self) -> List[GenerationRecord]:
        return [GenerationRecord.model_validate(item) for item in read_json(self._history_file, default=[])]

    def _write_history(self, records: List[GenerationRecord]) -> None:
        write_json(self._history_file, [r.model_dump(mode="json") for r in records])

    def append_history(self, record: GenerationRecord) -> None:
        records = self._read_history()
        records.append(record)
        self._write_history(records)

    def history(self) -> List[GenerationRecord]:
        """Newest first (reverse insertion order)."""
        return list(reversed(self._read_history()))

    def delete(self, record_id: str) -> bool:
        records = self._read_history()
        kept = [r for r in records if r.id != record_id]
        if len(kept) == len(records):
            return False
        self._write_history(kept)
        return True
