from typing import Protocol

from gitcred.core.models.credential import Credential


class Renderer(Protocol):
    def render(self, credential: Credential, reveal: bool = False) -> str:
        ...
