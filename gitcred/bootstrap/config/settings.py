import codecs
import os
from typing import Annotated, Any

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from gitcred.bootstrap.config.loader import get_configfile


class CodecSettings(BaseModel):
    encoding: Annotated[
        str,
        Field(
            description=(
                "Text encoding of the credential exchange on stdin/stdout.\n"
                "git itself writes UTF-8; change it only for helpers talking to\n"
                "legacy tools.\n"
            ),
            default="utf-8"
        )
    ]

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding {v!r}.")
        return v


class CredentialSettings(BaseModel):
    username: Annotated[
        str | None,
        Field(
            description=(
                "Username answered to 'get' requests.\n"
                "The GIT_USER environment variable takes precedence."
            ),
            default=None
        )
    ]

    password: Annotated[
        SecretStr | None,
        Field(
            description=(
                "Password answered to 'get' requests.\n"
                "The GIT_PASS environment variable takes precedence."
            ),
            default=None
        )
    ]

    hosts: Annotated[
        list[str],
        Field(
            description=(
                "Hosts this helper answers for (e.g. 'example.com', 'git.local:8443').\n"
                "When empty, every request is answered. Otherwise requests for other\n"
                "hosts get an empty answer so that git asks the next helper."
            ),
            default_factory=list
        )
    ]


class GitEnvSettingsSource(PydanticBaseSettingsSource):
    """
    Reads the variables used by the historical env helper,
    GIT_USER and GIT_PASS, into the credentials section.
    """
    ENV_MAP = {
        "username": "GIT_USER",
        "password": "GIT_PASS",
    }

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        values = {
            name: os.environ[var]
            for name, var in self.ENV_MAP.items()
            if var in os.environ
        }
        return {"credentials": values} if values else {}


class HelperSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GITCRED_",
        env_nested_delimiter="__",
        extra="ignore"
    )

    codec: Annotated[
        CodecSettings,
        Field(
            description="Wire format options.",
            default_factory=CodecSettings
        )
    ]

    credentials: Annotated[
        CredentialSettings,
        Field(
            description=(
                "Credentials handed back to git.\n"
                "Only the fields set here (or through GIT_USER / GIT_PASS) are\n"
                "filled in; every other attribute of the request is echoed back."
            ),
            default_factory=CredentialSettings
        )
    ]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            GitEnvSettingsSource(settings_cls),
            env_settings,
        ]
        configfile = get_configfile()
        if configfile is not None:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=configfile))
        return tuple(sources)

    def answers_for(self, host: str | None) -> bool:
        allowed = self.credentials.hosts
        return not allowed or host in allowed
