import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    # stdout carries the credential record, logs must stay on stderr
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format='%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s] : %(message)s',
    )
