"""
GitHub releases adapter — latest-tag lookup and artifact download.
"""

from __future__ import annotations

import json
import logging
import shutil
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any

from dockside_installer import __version__
from dockside_installer.adapters.base import ReleaseSource

logger = logging.getLogger(__name__)

_CHUNK = 64 * 1024


class GitHubReleases(ReleaseSource):
    """Talks to the GitHub REST API and release download URLs."""

    def __init__(
        self,
        repo: str,
        *,
        api_base: str = "https://api.github.com",
        timeout: int = 30,
        token: str | None = None,
    ):
        self._repo = repo
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._token = token

    @property
    def name(self) -> str:
        return "github"

    def _headers(self, *, api: bool) -> dict[str, str]:
        headers = {"User-Agent": f"dockside-installer/{__version__}"}
        if api:
            headers["Accept"] = "application/vnd.github+json"
            if self._token:
                headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def latest_tag(self) -> dict[str, Any]:
        api_url = f"{self._api_base}/repos/{self._repo}/releases/latest"
        req = urllib.request.Request(api_url, headers=self._headers(api=True))
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:
                data = json.loads(resp.read())
        except urllib.error.HTTPError as e:
            return {"ok": False, "error": f"HTTP {e.code} from {api_url}"}
        except (urllib.error.URLError, TimeoutError, OSError) as e:
            return {"ok": False, "error": f"Failed to fetch release: {e}"}
        except ValueError as e:
            return {"ok": False, "error": f"Invalid release metadata: {e}"}

        tag = data.get("tag_name", "") if isinstance(data, dict) else ""
        if not tag:
            return {"ok": False, "error": f"No tag_name in latest release of {self._repo}"}
        return {"ok": True, "tag": tag}

    def download(self, url: str, dest: Path) -> dict[str, Any]:
        logger.debug("Downloading %s → %s", url, dest)
        req = urllib.request.Request(url, headers=self._headers(api=False))
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp, \
                    open(dest, "wb") as fh:
                shutil.copyfileobj(resp, fh, _CHUNK)
        except urllib.error.HTTPError as e:
            return {"ok": False, "status": e.code, "error": f"HTTP {e.code} for {url}"}
        except (urllib.error.URLError, TimeoutError, OSError) as e:
            return {"ok": False, "error": f"Download failed: {e}"}

        size = dest.stat().st_size
        if size == 0:
            return {"ok": False, "error": f"Empty download from {url}"}
        return {"ok": True, "path": str(dest), "size_bytes": size}
