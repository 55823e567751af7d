from __future__ import annotations

from pathlib import Path
from typing import Tuple

from hayagriva.agents.shared.base_agent import BaseAgent
from hayagriva.core.emitter import emit, write_artifact
from hayagriva.core.protocol import EmittedArtifact, SynthesizedBundle


class BundleEmitterAgent(BaseAgent):
    """
    Names the bundle and saves it under the output directory.
    """

    def __init__(self, out_dir: Path, extension: str = "jsx") -> None:
        super().__init__()
        self.out_dir = out_dir
        self.extension = extension

    def run(self, bundle: SynthesizedBundle) -> Tuple[EmittedArtifact, Path]:
        artifact = emit(bundle, self.extension)
        path = write_artifact(artifact, self.out_dir)
        self.logger.info("Wrote %s (%s, %d bytes)", path, artifact.mime_type, len(artifact.content))
        return artifact, path
