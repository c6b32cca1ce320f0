import pytest

from kubetagger.core.config import (
    ENV_ANNOTATIONS_AS_TAGS,
    ENV_LABELS_AS_TAGS,
    ENV_LOGS_CUSTOM_CONFIGS,
    ConfigError,
    TaggerConfig,
    load_config,
)


def test_from_env():
    config = TaggerConfig.from_env({
        ENV_LABELS_AS_TAGS: '{"App": "kube_app", "team*": "+team"}',
        ENV_ANNOTATIONS_AS_TAGS: '{"Owner": "owner"}',
        ENV_LOGS_CUSTOM_CONFIGS: '[{"type": "file"}]',
    })
    assert config.labels_as_tags == {"app": "kube_app", "team*": "+team"}
    assert config.annotations_as_tags == {"owner": "owner"}
    assert config.logs_custom_configs == '[{"type": "file"}]'


def test_from_env_empty():
    config = TaggerConfig.from_env({})
    assert config == TaggerConfig()


@pytest.mark.parametrize("raw", ["{not json", '["a", "b"]'])
def test_from_env_invalid(raw):
    with pytest.raises(ConfigError):
        TaggerConfig.from_env({ENV_LABELS_AS_TAGS: raw})


def test_from_file(tmp_path):
    config_file = tmp_path / "kubetagger.yaml"
    config_file.write_text(
        "kubernetes_pod_labels_as_tags:\n"
        "  app: kube_app\n"
        "kubernetes_pod_annotations_as_tags:\n"
        "  Team: team\n"
        "logs_config:\n"
        "  custom_configs: '[{\"type\": \"file\"}]'\n"
    )
    config = TaggerConfig.from_file(str(config_file))
    assert config.labels_as_tags == {"app": "kube_app"}
    assert config.annotations_as_tags == {"team": "team"}
    assert config.logs_custom_configs == '[{"type": "file"}]'


def test_from_file_structured_custom_configs(tmp_path):
    config_file = tmp_path / "kubetagger.yaml"
    config_file.write_text("logs_config:\n  custom_configs:\n    - type: file\n")
    config = TaggerConfig.from_file(str(config_file))
    assert config.logs_custom_configs == '[{"type": "file"}]'


def test_from_file_empty(tmp_path):
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("")
    assert TaggerConfig.from_file(str(config_file)) == TaggerConfig()


@pytest.mark.parametrize("content", [
    "- just\n- a list\n",
    "kubernetes_pod_labels_as_tags: [a, b]\n",
    "logs_config: nope\n",
    "key: [unclosed\n",
])
def test_from_file_invalid(tmp_path, content):
    config_file = tmp_path / "bad.yaml"
    config_file.write_text(content)
    with pytest.raises(ConfigError):
        TaggerConfig.from_file(str(config_file))


def test_from_file_missing(tmp_path):
    with pytest.raises(ConfigError):
        TaggerConfig.from_file(str(tmp_path / "missing.yaml"))


def test_env_overrides_file(tmp_path):
    config_file = tmp_path / "kubetagger.yaml"
    config_file.write_text(
        "kubernetes_pod_labels_as_tags:\n"
        "  app: from_file\n"
        "kubernetes_pod_annotations_as_tags:\n"
        "  team: team\n"
    )
    config = load_config(str(config_file), environ={ENV_LABELS_AS_TAGS: '{"app": "from_env"}'})
    assert config.labels_as_tags == {"app": "from_env"}
    assert config.annotations_as_tags == {"team": "team"}
