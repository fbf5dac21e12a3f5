import os

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, YamlConfigSettingsSource

from gitcred.bootstrap.config.settings import GitEnvSettingsSource, HelperSettings


class FakeHelperSettings(HelperSettings):
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            GitEnvSettingsSource(settings_cls),
            env_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=os.environ["TEST_GITCREDCONFIG"]),
        )
