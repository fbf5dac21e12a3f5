import argparse
import os
from functools import lru_cache
from pathlib import Path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-credential-env",
        description=(
            "A git credential helper answering from the environment.\n\n"
            "The username and password are taken from GIT_USER and GIT_PASS\n"
            "(or from the configuration file). Configure it with:\n"
            "  git config credential.helper env"
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "operation",
        choices=["get", "store", "erase"],
        help="Operation requested by git."
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a gitcred configuration file"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity, written to stderr.\n"
            "Choose among: DEBUG, INFO, WARNING, ERROR, CRITICAL.\n\n"
            "DEBUG    → traces every attribute read and written.\n"
            "WARNING  → only warnings and errors (default).\n\n"
            "Example:\n"
            "  --log-level DEBUG"
        ),
    )

    return parser


@lru_cache
def get_cli_args() -> argparse.Namespace:
    return build_parser().parse_args()


def resolve_configfile(cli_path: str | None) -> Path | None:
    # Priority: CLI > ENV > default file in current working directory
    raw = cli_path or os.getenv("GITCREDCONFIG")

    if raw is None:
        file = Path.cwd() / "gitcred.yaml"
        return file if file.is_file() else None

    file = Path(raw).expanduser()
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            "  - Or set the GITCREDCONFIG environment variable\n"
            "  - Or place a 'gitcred.yaml' file in the current working directory."
        )

    return file


@lru_cache
def get_configfile() -> Path | None:
    return resolve_configfile(get_cli_args().config)
