from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

from hayagriva.agents.bundle_emitter.agent import BundleEmitterAgent
from hayagriva.agents.code_synthesizer.agent import CodeSynthesizerAgent
from hayagriva.agents.requirements_analyst.agent import RequirementsAnalystAgent
from hayagriva.agents.widget_packager.agent import WidgetPackagerAgent
from hayagriva.config import GeneratorConfig
from hayagriva.core.protocol import ChatMessage
from hayagriva.project_state.state_store import ProjectState, ProjectStateStore, new_record
from hayagriva.utils.file_ops import ensure_dir
from hayagriva.utils.logger import get_logger


@dataclass
class OrchestratorConfig:
    project_root: Path
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)

    @property
    def output_dir(self) -> Path:
        return self.project_root / self.generator.output_dir


class Orchestrator:
    """
    Top-level controller.

    Pipeline:
    1) Requirements analyst: prompt -> requirements
    2) Code synthesizer: requirements -> bundle (balance-checked)
    3) Bundle emitter: bundle -> named artifact on disk
    Each run is saved as the project state and appended to the history.
    """

    def __init__(self, cfg: OrchestratorConfig) -> None:
        self.cfg = cfg
        self.logger = get_logger("Orchestrator")
        generator = self.cfg.generator

        self.analyst_agent = RequirementsAnalystAgent(default_app_name=generator.default_app_name)
        self.synthesizer_agent = CodeSynthesizerAgent(options=generator.generation_options())
        self.emitter_agent = BundleEmitterAgent(
            out_dir=self.cfg.output_dir,
            extension=generator.bundle_extension,
        )
        self.widget_agent = WidgetPackagerAgent(
            out_dir=self.cfg.output_dir,
            name=generator.widget_name,
        )

        # Prepare state store
        state_dir = ensure_dir(self.cfg.project_root / "project_state")
        self.state_store = ProjectStateStore(root_dir=state_dir)

    def run(self, user_prompt: str, generated_at: Optional[datetime] = None) -> ProjectState:
        self.logger.info("Starting generation run.")
        generated_at = generated_at or datetime.now(timezone.utc)

        # Phase 1: requirements
        requirements = self.analyst_agent.run(raw_prompt=user_prompt)

        # Phase 2: synthesis
        result = self.synthesizer_agent.run(requirements, prompt=user_prompt, generated_at=generated_at)

        # Phase 3: emit
        artifact, path = self.emitter_agent.run(result.bundle)

        state = ProjectState(
            prompt=user_prompt,
            requirements=requirements,
            metadata=result.bundle.metadata,
            artifact_path=str(path),
            balance_error=result.balance_error,
        )
        self.state_store.save(state)
        self.state_store.append_history(
            new_record(
                name=requirements.app_name,
                prompt=user_prompt,
                requirements=requirements,
                filename=artifact.filename,
                timestamp=generated_at,
            )
        )
        self.logger.info("Generation completed and saved to %s", path)
        return state

    def package_widget(
        self,
        transcript: Sequence[ChatMessage],
        generated_at: Optional[datetime] = None,
    ) -> Path:
        return self.widget_agent.run(transcript, generated_at=generated_at)
