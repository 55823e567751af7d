import pytest

from hayagriva.core.extractor import extract
from hayagriva.core.synthesizer import synthesize
from hayagriva.project_state.state_store import ProjectState, ProjectStateStore, describe, new_record


@pytest.fixture
def store(tmp_path):
    return ProjectStateStore(root_dir=tmp_path / "project_state")


def _record(name, prompt, fixed_time):
    req = extract(prompt)
    return new_record(name=name, prompt=prompt, requirements=req, filename=f"{name}.bundle.jsx", timestamp=fixed_time)


def test_describe_truncates_long_prompts():
    assert describe("short prompt") == "short prompt"
    long = describe("x" * 150)
    assert len(long) == 100
    assert long.endswith("...")


def test_history_is_newest_first(store, fixed_time):
    store.append_history(_record("First", "Build a blog", fixed_time))
    store.append_history(_record("Second", "Build a shop", fixed_time))
    names = [r.name for r in store.history()]
    assert names == ["Second", "First"]


def test_empty_history(store):
    assert store.history() == []


def test_delete(store, fixed_time):
    record = _record("Gone", "Build a blog", fixed_time)
    store.append_history(record)
    assert store.delete(record.id) is True
    assert store.history() == []
    assert store.delete(record.id) is False


def test_record_fields(fixed_time):
    record = _record("Shop", "Create an online store with payments", fixed_time)
    assert record.app_type.value == "ecommerce"
    assert record.description == "Create an online store with payments"
    assert "Payments" in record.features
    assert record.summary()["type"] == "ecommerce"


def test_project_state_round_trip(store, fixed_time):
    req = extract("Build a dashboard app with dark mode")
    bundle = synthesize(req, generated_at=fixed_time)
    state = ProjectState(prompt="p", requirements=req, metadata=bundle.metadata, artifact_path="/tmp/x.jsx")
    store.save(state)
    loaded = store.load()
    assert loaded.requirements == req
    assert loaded.metadata == bundle.metadata
    assert loaded.artifact_path == "/tmp/x.jsx"


def test_load_without_state_raises(store):
    with pytest.raises(FileNotFoundError):
        store.load()
