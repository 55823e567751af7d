from __future__ import annotations

from hayagriva.agents.shared.base_agent import BaseAgent
from hayagriva.core.extractor import extract
from hayagriva.core.protocol import DEFAULT_APP_NAME, AppRequirements


class RequirementsAnalystAgent(BaseAgent):
    """
    Turns the raw user prompt into structured requirements.
    """

    def __init__(self, default_app_name: str = DEFAULT_APP_NAME) -> None:
        super().__init__()
        self.default_app_name = default_app_name

    def run(self, raw_prompt: str) -> AppRequirements:
        self.logger.info("Extracting requirements for prompt: %s", raw_prompt)
        requirements = extract(raw_prompt, default_name=self.default_app_name)
        self.logger.info(
            "Detected %s app %s (%d features)",
            requirements.app_type.value,
            requirements.app_name,
            len(requirements.features),
        )
        return requirements
