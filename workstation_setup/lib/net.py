from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import requests

from ..errors import DownloadError

logger = logging.getLogger(__name__)

_CHUNK = 1 << 16

# No timeouts: a stalled transfer blocks the run, same as any other
# external call here.


def _get(url: str, **kwargs: Any) -> requests.Response:
    try:
        r = requests.get(url, **kwargs)
    except requests.RequestException as e:
        raise DownloadError(f"GET {url} failed: {e}") from e
    try:
        r.raise_for_status()
    except requests.RequestException as e:
        r.close()
        raise DownloadError(f"GET {url} failed: {e}") from e
    return r


def release_asset_url(api_url: str, asset_name: str) -> str:
    """Browser download URL of a named asset in a GitHub release JSON."""

    r = _get(api_url, headers={"Accept": "application/vnd.github+json"})
    try:
        data: Dict[str, Any] = r.json()
    except ValueError as e:
        raise DownloadError(f"Release lookup {api_url} did not return JSON") from e
    if not isinstance(data, dict):
        raise DownloadError(f"Release lookup {api_url} returned {type(data).__name__}, expected an object")

    for asset in data.get("assets") or []:
        if asset.get("name") == asset_name and asset.get("browser_download_url"):
            return str(asset["browser_download_url"])
    raise DownloadError(f"Release asset {asset_name} not found at {api_url}")


def download_file(url: str, dest: Path) -> Path:
    """Stream url into dest (parents created). Returns dest."""

    logger.debug("Downloading %s -> %s", url, dest)
    dest.parent.mkdir(parents=True, exist_ok=True)
    r = _get(url, stream=True, allow_redirects=True)
    try:
        with dest.open("wb") as fh:
            for chunk in r.iter_content(chunk_size=_CHUNK):
                if chunk:
                    fh.write(chunk)
    except requests.RequestException as e:
        raise DownloadError(f"Download of {url} interrupted: {e}") from e
    finally:
        r.close()
    return dest


def fetch_text(url: str) -> str:
    return _get(url, allow_redirects=True).text
