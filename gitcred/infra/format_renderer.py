import json

import yaml

from gitcred.core.models.credential import Credential
from gitcred.core.ports.render import Renderer

REDACTED = "<redacted>"

SECRET_KEYS = frozenset({
    "password",
    "oauth_refresh_token",
    "credential",
})


def redact(credential: Credential, reveal: bool = False) -> dict[str, str]:
    """Return the present pairs in wire order with secret values masked."""
    data = credential.to_dict()
    if reveal:
        return data
    return {k: REDACTED if k in SECRET_KEYS else v for k, v in data.items()}


class JsonRenderer(Renderer):
    def render(self, credential: Credential, reveal: bool = False) -> str:
        return json.dumps(redact(credential, reveal), indent=2, sort_keys=False)


class YamlRenderer(Renderer):
    def render(self, credential: Credential, reveal: bool = False) -> str:
        return yaml.safe_dump(redact(credential, reveal), sort_keys=False)
