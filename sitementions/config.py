"""Mention configuration: site config loading and base URL resolution.

The base URL can be set in the site config or in a document's front matter,
either directly or as a mapping:

    ```toml
    mention-config = "https://gitlab.example.com"

    # or
    [mention-config]
    base_url = "https://gitlab.example.com"
    ```

It must include a scheme and host and should not end with a slash. When it
is not configured, the base URL comes from the `SSL` and `GITHUB_HOSTNAME`
environment variables (GitHub Enterprise style), and finally defaults to
https://github.com.

Site config files are looked up in order:
  1. The path passed to `load_site_config`
  2. Path in the SITEMENTIONS_CONFIG env var (if set)
  3. _config.toml in the current working directory
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from sitementions.errors import InvalidConfig
from sitementions.logging import setup_logging

GITHUB_DOT_COM = "https://github.com"
MENTION_CONFIG_KEY = "mention-config"
CONFIG_ENV_VAR = "SITEMENTIONS_CONFIG"
DEFAULT_CONFIG_FILE = "_config.toml"

logger = setup_logging()


class EnvSignals(BaseModel, frozen=True):
    """Environment values that steer the default base URL.

    Attributes:
        ssl: Value of ``SSL``. Only the exact string "true" selects https.
        github_hostname: Value of ``GITHUB_HOSTNAME``, e.g. "git.example.com".
    """

    ssl: str | None = None
    github_hostname: str | None = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "EnvSignals":
        """Read the signals from `environ` (defaults to os.environ)."""
        environ = os.environ if environ is None else environ
        return cls(ssl=environ.get("SSL"), github_hostname=environ.get("GITHUB_HOSTNAME"))


def default_mention_base(env: EnvSignals | None = None) -> str:
    """Return the base URL used when no mention config is set."""
    env = env if env is not None else EnvSignals.from_environ()
    if env.ssl and env.github_hostname:
        scheme = "https://" if env.ssl == "true" else "http://"
        return f"{scheme}{env.github_hostname.rstrip('/')}"
    return GITHUB_DOT_COM


def mention_base(config: Mapping[str, Any] | None = None, env: EnvSignals | None = None) -> str:
    """Calculate the base URL to use for mentions.

    Args:
        config: The effective configuration (site config, overlaid with the
            document's front matter when it sets the mention key).
        env: Environment signals; read from os.environ when omitted.

    Returns:
        The base URL, e.g. "https://github.com".

    Raises:
        InvalidConfig: If the mention config is neither a string nor a mapping,
            or its mapping form has a base_url that is not a string.
    """
    mention_config = (config or {}).get(MENTION_CONFIG_KEY)
    if mention_config is None:
        return default_mention_base(env)
    if isinstance(mention_config, str):
        return mention_config or default_mention_base(env)
    if isinstance(mention_config, Mapping):
        base_url = mention_config.get("base_url")
        if base_url is not None and not isinstance(base_url, str):
            raise InvalidConfig(
                f"Your {MENTION_CONFIG_KEY} base_url has to be a string. "
                f"It's a {type(base_url).__name__} right now."
            )
        return base_url or default_mention_base(env)
    raise InvalidConfig(
        f"Your {MENTION_CONFIG_KEY} config has to either be a string or a mapping. "
        f"It's a {type(mention_config).__name__} right now."
    )


def effective_config(site_config: Mapping[str, Any], doc_data: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay the document's front matter on the site config.

    The overlay only happens when the document sets the mention key itself;
    otherwise the site config is returned as a copy.
    """
    if MENTION_CONFIG_KEY in doc_data:
        return {**site_config, **doc_data}
    return dict(site_config)


def _config_paths(path: Path | None) -> list[Path]:
    """Return paths to check for the site config (first existing wins)."""
    paths: list[Path] = []
    if path is not None:
        paths.append(Path(path))
    if os.environ.get(CONFIG_ENV_VAR):
        paths.append(Path(os.environ[CONFIG_ENV_VAR]))
    paths.append(Path.cwd() / DEFAULT_CONFIG_FILE)
    return paths


def load_site_config(path: Path | None = None) -> dict[str, Any]:
    """Load the site config from TOML.

    Returns:
        The parsed config, or an empty dict when no readable file is found.
    """
    for candidate in _config_paths(path):
        if not candidate.is_file():
            continue
        try:
            with open(candidate, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(
                {
                    "message": f"Skipping unreadable site config {candidate}",
                    "config_file": str(candidate),
                    "error": str(e),
                },
                pprint=True,
            )
            continue
        logger.debug({"message": "Loaded site config", "config_file": str(candidate), "keys": sorted(data)})
        return data
    return {}
