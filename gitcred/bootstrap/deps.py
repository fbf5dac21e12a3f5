import json
from functools import lru_cache

from pydantic import ValidationError

from gitcred.bootstrap.config.settings import HelperSettings
from gitcred.infra.format_renderer import YamlRenderer


@lru_cache
def get_settings() -> HelperSettings:
    try:
        return HelperSettings()
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(p) for p in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))


@lru_cache
def get_renderer() -> YamlRenderer:
    return YamlRenderer()
