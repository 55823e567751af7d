import pytest

from hayagriva.config import GeneratorConfig, load_config
from hayagriva.core.errors import ConfigError


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_defaults_without_file_or_env():
    cfg = load_config(env={})
    assert cfg == GeneratorConfig()
    assert cfg.default_app_name == "HayagrivaApp"
    assert cfg.bundle_extension == "jsx"


def test_yaml_file_values(tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text("framework: vue\nresponsive: false\nbundle_extension: tsx\n", encoding="utf-8")
    cfg = load_config(path, env={})
    assert cfg.framework == "vue"
    assert cfg.responsive is False
    assert cfg.bundle_extension == "tsx"


def test_default_file_is_picked_up_from_cwd(tmp_path):
    (tmp_path / "hayagriva.yaml").write_text("widget_name: Vidya\n", encoding="utf-8")
    assert load_config(env={}).widget_name == "Vidya"


def test_environment_overrides_file(tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text("css_framework: material\n", encoding="utf-8")
    env = {"HAYAGRIVA_CSS_FRAMEWORK": "bootstrap", "HAYAGRIVA_ACCESSIBILITY": "no", "UNRELATED": "x"}
    cfg = load_config(path, env=env)
    assert cfg.css_framework == "bootstrap"
    assert cfg.accessibility is False


@pytest.mark.parametrize(
    "content",
    [
        "default_app_name: 1bad\n",
        "framework: jquery\n",
        "bundle_extension: py\n",
        "log_level: LOUD\n",
        "responsive: maybe\n",
        "colour: blue\n",
        "- just\n- a list\n",
        "framework: [unclosed\n",
    ],
)
def test_invalid_config_raises(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path, env={})


def test_explicit_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml", env={})


def test_config_error_is_a_value_error():
    assert issubclass(ConfigError, ValueError)


def test_with_overrides_skips_none_and_validates():
    cfg = GeneratorConfig().with_overrides(framework=None, output_dir="build", responsive=False)
    assert cfg.framework == "react"
    assert cfg.output_dir == "build"
    assert cfg.responsive is False
    with pytest.raises(ConfigError):
        GeneratorConfig().with_overrides(bundle_extension="exe")


def test_generation_options():
    opts = GeneratorConfig(css_framework="chakra", accessibility=False).generation_options()
    assert opts.css_framework == "chakra"
    assert opts.accessibility is False
    assert opts.responsive is True


def test_default_app_name_from_env_must_be_a_whole_identifier():
    with pytest.raises(ConfigError):
        load_config(env={"HAYAGRIVA_DEFAULT_APP_NAME": "Starter\n"})
