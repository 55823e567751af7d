from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from hayagriva.agents.shared.base_agent import BaseAgent
from hayagriva.core.protocol import AppRequirements, GenerationOptions, SynthesizedBundle
from hayagriva.core.sandbox import Sandbox
from hayagriva.core.synthesizer import synthesize


@dataclass
class SynthesisResult:
    bundle: SynthesizedBundle
    balance_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.balance_error is None


class CodeSynthesizerAgent(BaseAgent):
    """
    Builds the source bundle and runs the balance check over it:
    - component body (brackets and JSX tags)
    - stylesheet (brackets only)
    """

    def __init__(self, options: Optional[GenerationOptions] = None) -> None:
        super().__init__()
        self.options = options or GenerationOptions()
        self.sandbox = Sandbox()

    def run(
        self,
        requirements: AppRequirements,
        prompt: str = "",
        generated_at: Optional[datetime] = None,
    ) -> SynthesisResult:
        self.logger.info("Synthesizing %s from the %s template", requirements.app_name, requirements.app_type.value)
        bundle = synthesize(requirements, self.options, prompt=prompt, generated_at=generated_at)

        error = self.sandbox.run_check(bundle.source_text) or self.sandbox.run_check(
            bundle.stylesheet_text, tags=False
        )
        if error:
            self.logger.error("Generated bundle for %s failed the balance check: %s", bundle.app_name, error)
        else:
            self.logger.info("Bundle for %s passed the balance check", bundle.app_name)
        return SynthesisResult(bundle=bundle, balance_error=error)
