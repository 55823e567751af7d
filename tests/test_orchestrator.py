from pathlib import Path

from hayagriva.agents.code_synthesizer.agent import CodeSynthesizerAgent
from hayagriva.config import GeneratorConfig
from hayagriva.core.extractor import extract
from hayagriva.core.protocol import ChatMessage
from hayagriva.orchestrator.orchestrator import Orchestrator, OrchestratorConfig

PROMPT = "Build a dashboard app with dark mode and authentication"


def test_run_writes_artifact_state_and_history(tmp_path, fixed_time):
    orchestrator = Orchestrator(OrchestratorConfig(project_root=tmp_path))
    state = orchestrator.run(PROMPT, generated_at=fixed_time)

    artifact = Path(state.artifact_path)
    assert artifact == tmp_path / "generated" / "dashboard-app.bundle.jsx"
    assert artifact.read_text(encoding="utf-8").startswith("/**")
    assert state.balance_error is None
    assert (tmp_path / "project_state" / "project_state.json").exists()

    history = orchestrator.state_store.history()
    assert len(history) == 1
    assert history[0].filename == "dashboard-app.bundle.jsx"
    assert history[0].prompt == PROMPT


def test_runs_with_fixed_time_are_reproducible(tmp_path, fixed_time):
    orchestrator = Orchestrator(OrchestratorConfig(project_root=tmp_path))
    first = Path(orchestrator.run(PROMPT, generated_at=fixed_time).artifact_path).read_bytes()
    second = Path(orchestrator.run(PROMPT, generated_at=fixed_time).artifact_path).read_bytes()
    assert first == second
    assert len(orchestrator.state_store.history()) == 2


def test_generator_config_is_applied(tmp_path, fixed_time):
    generator = GeneratorConfig(output_dir="out", bundle_extension="tsx", default_app_name="Starter")
    orchestrator = Orchestrator(OrchestratorConfig(project_root=tmp_path, generator=generator))
    state = orchestrator.run("", generated_at=fixed_time)
    assert Path(state.artifact_path) == tmp_path / "out" / "starter.bundle.tsx"
    assert state.requirements.app_name == "Starter"


def test_package_widget(tmp_path, transcript):
    orchestrator = Orchestrator(OrchestratorConfig(project_root=tmp_path))
    path = orchestrator.package_widget([ChatMessage(**m) for m in transcript])
    assert path == tmp_path / "generated" / "hayagriva-chatbot.js"
    assert "class HayagrivaBot {" in path.read_text(encoding="utf-8")


def test_synthesizer_agent_reports_balance(fixed_time):
    result = CodeSynthesizerAgent().run(extract("Create an online store"), generated_at=fixed_time)
    assert result.ok
    assert result.bundle.app_name == "OnlineStore"
