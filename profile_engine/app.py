"""Application facade wiring configuration, the fetcher and the profiler."""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from profile_engine.integrations.page_fetcher import DEFAULT_USER_AGENT, FetchResult, PageFetcher
from profile_engine.models import WebsiteProfile
from profile_engine.modules.site_profile import WebsiteProfiler

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "app": {"name": "Website Profile Engine", "log_level": "INFO"},
    "fetcher": {
        "timeout": 20,
        "user_agent": DEFAULT_USER_AGENT,
        "accept_language": "en-US,en;q=0.5",
    },
    "output": {"json_indent": 2},
}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ProfileEngineApp:
    """Load settings once and expose the profile operations.

    Usage::

        app = ProfileEngineApp()
        app.initialize()
        fetch, profile = await app.fetch_and_profile("example.com")
    """

    def __init__(
        self,
        config_path: str = "config/settings.yaml",
        env_path: str = ".env",
    ):
        self._config_path = config_path
        self._env_path = env_path
        self.config: dict[str, Any] = {}
        self._profiler: Optional[WebsiteProfiler] = None
        self._fetcher: Optional[PageFetcher] = None
        self._initialized = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Load environment and YAML configuration, then build the fetcher."""
        if self._initialized:
            return

        env_file = Path(self._env_path)
        if env_file.exists():
            load_dotenv(env_file)
            logger.info("Loaded environment from %s", self._env_path)

        self.config = self._load_config()
        fetch_cfg = self.config["fetcher"]
        timeout = os.getenv("PROFILE_ENGINE_TIMEOUT") or fetch_cfg.get("timeout", 20)
        try:
            timeout = float(timeout)
        except (TypeError, ValueError):
            logger.warning("Invalid fetch timeout %r; using 20s", timeout)
            timeout = 20.0

        self._fetcher = PageFetcher(
            request_timeout=timeout,
            user_agent=os.getenv("PROFILE_ENGINE_USER_AGENT") or fetch_cfg.get("user_agent", DEFAULT_USER_AGENT),
            accept_language=fetch_cfg.get("accept_language", "en-US,en;q=0.5"),
        )
        self._profiler = WebsiteProfiler(fetcher=self._fetcher)
        self._initialized = True
        logger.info("ProfileEngineApp initialised (timeout=%ss).", timeout)

    def _load_config(self) -> dict[str, Any]:
        """Load the YAML configuration file on top of the built-in defaults."""
        config_file = Path(self._config_path)
        if not config_file.exists():
            logger.warning("Config file not found: %s; using defaults.", self._config_path)
            return _merge(DEFAULT_CONFIG, {})
        with open(config_file, "r", encoding="utf-8") as fh:
            loaded = yaml.safe_load(fh) or {}
        if not isinstance(loaded, dict):
            logger.warning("Config file %s is not a mapping; using defaults.", self._config_path)
            loaded = {}
        logger.info("Configuration loaded from %s", self._config_path)
        return _merge(DEFAULT_CONFIG, loaded)

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            self.initialize()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @property
    def profiler(self) -> WebsiteProfiler:
        self._ensure_initialized()
        return self._profiler

    def analyze_html(self, url: str, html: str) -> WebsiteProfile:
        """Profile already-fetched HTML."""
        return self.profiler.analyze(url, html)

    async def fetch_and_profile(self, url: str) -> tuple[FetchResult, WebsiteProfile]:
        """Fetch *url* and profile it; a failed fetch yields the empty profile."""
        self._ensure_initialized()
        fetch = await self._fetcher.fetch(url)
        return fetch, self._profiler.build(fetch)
