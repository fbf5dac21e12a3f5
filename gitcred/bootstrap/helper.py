import logging
import sys

from gitcred.bootstrap.config.loader import get_cli_args
from gitcred.bootstrap.config.settings import HelperSettings
from gitcred.bootstrap.deps import get_renderer, get_settings
from gitcred.core.codec.reader import parse
from gitcred.core.codec.writer import serialize
from gitcred.core.errors import CredentialError
from gitcred.core.helpers.utils import setup_logging
from gitcred.core.models.credential import Credential
from gitcred.core.ports.render import Renderer
from gitcred.core.ports.stream import ByteSink, ByteSource


class EnvHelper:
    """
    Credential helper answering ``get`` requests from configured values.

    git writes the request record on stdin and reads the answer on stdout.
    For ``get``, the username and password known to the settings replace
    the ones in the request and every other attribute is echoed back.
    Requests for hosts outside the allow-list get an empty answer, which
    tells git to try the next helper.

    ``store`` and ``erase`` consume the request and answer nothing: there
    is no storage behind this helper.
    """
    def __init__(self, settings: HelperSettings, renderer: Renderer) -> None:
        self._settings = settings
        self._renderer = renderer
        self._encoding = settings.codec.encoding
        self._logger = logging.getLogger("bootstrap.helper")

    def run(self, operation: str, source: ByteSource, sink: ByteSink) -> None:
        request = parse(source, self._encoding)

        if operation != "get":
            self._logger.debug(f"Ignoring '{operation}' for host {request.host}")
            return

        answer = self.answer(request)
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(f"Answering:\n{self._renderer.render(answer)}")
        serialize(answer, sink, self._encoding)

    def answer(self, request: Credential) -> Credential:
        if not self._settings.answers_for(request.host):
            self._logger.info(f"Host {request.host} is not served by this helper")
            return Credential()

        answer = request.copy()
        creds = self._settings.credentials
        if creds.username is not None:
            answer.username = creds.username
        if creds.password is not None:
            answer.password = creds.password.get_secret_value()
        return answer


def main() -> int:
    cli = get_cli_args()
    setup_logging(cli.log_level)

    helper = EnvHelper(get_settings(), get_renderer())
    logger = logging.getLogger("bootstrap.helper")

    try:
        helper.run(cli.operation, sys.stdin.buffer, sys.stdout.buffer)
    except CredentialError as exc:
        logger.error(f"{cli.operation} failed: {exc}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
