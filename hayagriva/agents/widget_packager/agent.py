from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from hayagriva.agents.shared.base_agent import BaseAgent
from hayagriva.core.emitter import emit_widget, write_artifact
from hayagriva.core.protocol import ChatMessage
from hayagriva.core.sandbox import Sandbox
from hayagriva.core.widget import DEFAULT_WIDGET_NAME, synthesize_embeddable_widget


class WidgetPackagerAgent(BaseAgent):
    """
    Packages a chat transcript into an embeddable chatbot module on disk.
    """

    def __init__(self, out_dir: Path, name: str = DEFAULT_WIDGET_NAME) -> None:
        super().__init__()
        self.out_dir = out_dir
        self.name = name
        self.sandbox = Sandbox()

    def run(self, transcript: Sequence[ChatMessage], generated_at: Optional[datetime] = None) -> Path:
        self.logger.info("Packaging %d transcript messages as %s", len(transcript), self.name)
        source = synthesize_embeddable_widget(transcript, name=self.name, generated_at=generated_at)

        error = self.sandbox.run_check(source, tags=False)
        if error:
            self.logger.error("Widget module failed the balance check: %s", error)

        path = write_artifact(emit_widget(source, self.name), self.out_dir)
        self.logger.info("Wrote %s", path)
        return path
