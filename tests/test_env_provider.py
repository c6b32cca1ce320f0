from kubetagger.core.config import ENV_LOGS_CUSTOM_CONFIGS, TaggerConfig
from kubetagger.providers.env import CONFIG_NAME, ENVIRONMENT_VARIABLE, EnvProvider, IntegrationConfig


def test_collect_without_custom_configs():
    assert EnvProvider(TaggerConfig()).collect() == []


def test_collect_whitespace_only():
    assert EnvProvider(TaggerConfig(logs_custom_configs="  \n\t ")).collect() == []


def test_collect_custom_configs():
    provider = EnvProvider(TaggerConfig.from_env({
        ENV_LOGS_CUSTOM_CONFIGS: '  [{"type": "file", "path": "/var/log/app.log"}]\n',
    }))
    configs = provider.collect()
    assert configs == [IntegrationConfig(
        provider=ENVIRONMENT_VARIABLE,
        name=CONFIG_NAME,
        logs_config=b'[{"type": "file", "path": "/var/log/app.log"}]',
    )]


def test_provider_identity():
    provider = EnvProvider(TaggerConfig())
    assert str(provider) == "environment-variable"
    assert provider.is_up_to_date() is False
