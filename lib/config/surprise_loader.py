import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .yaml_loader import load_yaml

DEFAULT_TOKEN_ENV = "SLACK_TOKEN"
DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass
class SurpriseConfig:
    """Typed view over ``surprise.yaml``.

    The shared secret itself never lives in the file.  ``token_env`` names
    the environment variable that carries it and :attr:`token` is resolved
    once, when the configuration is loaded.
    """

    raw: Dict[str, Any] = field(default_factory=dict)
    token_env: str = DEFAULT_TOKEN_ENV
    token: Optional[str] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    providers: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def provider(self, name: str) -> Dict[str, Any]:
        return dict(self.providers.get(name) or {})


def load_surprise_config(
    path: str | Path = "config/surprise.yaml",
    environ: Optional[Dict[str, str]] = None,
) -> SurpriseConfig:
    """Load ``surprise.yaml`` and return a :class:`SurpriseConfig`.

    Parameters
    ----------
    path:
        File system path to the YAML configuration file.  A missing file
        yields the built-in defaults.
    environ:
        Mapping consulted for the shared secret, ``os.environ`` when omitted.
    """

    raw = load_yaml(path) if Path(path).exists() else {}
    section = raw.get("surprise", {}) or {}
    env = os.environ if environ is None else environ
    token_env = section.get("token_env") or DEFAULT_TOKEN_ENV
    http = section.get("http", {}) or {}
    return SurpriseConfig(
        raw=raw,
        token_env=token_env,
        token=env.get(token_env),
        timeout_seconds=float(http.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)),
        providers=section.get("providers", {}) or {},
    )
