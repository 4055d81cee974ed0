"""
github_client.py

Responsibility: Isolate all direct interaction with the upstream spec repository.

This module must be the only place that:
- Constructs GitHub contents API and raw file URLs
- Sends HTTP requests to api.github.com / raw.githubusercontent.com
- Interprets GitHub API responses / error payloads

The client never reads credentials from the environment; the caller passes the
token in at construction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import requests

from azdo_sdkgen.errors import NotFoundError, UpstreamRequestFailedError

logger = logging.getLogger(__name__)

DEFAULT_OWNER = "MicrosoftDocs"
DEFAULT_REPO = "vsts-rest-api-specs"
SPEC_ROOT = "specification"


@dataclass(frozen=True)
class ContentItem:
    name: str
    path: str
    kind: str  # "file" | "dir"
    download_url: str | None = None


@dataclass(frozen=True)
class SpecListing:
    """JSON documents found in one `specification/<api>/<version>` directory."""

    dir: str
    jsons: tuple[str, ...]


def _segment(value: str) -> str:
    return quote(value, safe="")


class SpecsRepoClient:
    def __init__(
        self,
        token: str | None = None,
        *,
        owner: str = DEFAULT_OWNER,
        repo: str = DEFAULT_REPO,
        api_base: str = "https://api.github.com",
        raw_base: str = "https://raw.githubusercontent.com",
        session: requests.Session | None = None,
        timeout: float = 30,
    ) -> None:
        self._token = (token or "").strip() or None
        self.owner = owner
        self.repo = repo
        self._api_base = api_base.rstrip("/")
        self._raw_base = raw_base.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "azdo-sdk-gen",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _get(self, url: str) -> requests.Response:
        logger.debug("GET %s", url)
        try:
            r = self._session.get(url, headers=self._headers(), timeout=self._timeout)
        except requests.RequestException as e:
            raise UpstreamRequestFailedError(f"GET {url} failed: {e}") from e
        if r.status_code >= 400:
            message = f"HTTP {r.status_code} {r.reason} -> {url}\n{r.text}"
            if r.status_code == 404:
                raise NotFoundError(message)
            raise UpstreamRequestFailedError(message)
        return r

    def _contents(self, path: str, ref: str) -> list[ContentItem]:
        url = f"{self._api_base}/repos/{self.owner}/{self.repo}/contents/{path}?ref={_segment(ref)}"
        response = self._get(url)
        try:
            payload: Any = response.json()
        except ValueError as e:
            raise UpstreamRequestFailedError(f"Invalid JSON from {url}: {e}") from e
        if not isinstance(payload, list):
            raise UpstreamRequestFailedError(f"Expected a directory listing at {path} (ref {ref})")
        try:
            return [
                ContentItem(
                    name=str(item["name"]),
                    path=str(item.get("path") or ""),
                    kind=str(item.get("type") or ""),
                    download_url=item.get("download_url"),
                )
                for item in payload
            ]
        except (KeyError, TypeError, AttributeError) as e:
            raise UpstreamRequestFailedError(f"Malformed directory listing at {path} (ref {ref}): {e!r}") from e

    def _dir_names(self, path: str, ref: str) -> list[str]:
        return sorted(i.name for i in self._contents(path, ref) if i.kind == "dir")

    def list_apis(self, ref: str) -> list[str]:
        return self._dir_names(SPEC_ROOT, ref)

    def list_versions(self, api: str, ref: str) -> list[str]:
        return self._dir_names(f"{SPEC_ROOT}/{_segment(api)}", ref)

    def list_json_files(self, api: str, version: str, ref: str) -> SpecListing:
        directory = f"{SPEC_ROOT}/{api}/{version}"
        items = self._contents(f"{SPEC_ROOT}/{_segment(api)}/{_segment(version)}", ref)
        jsons = sorted(i.name for i in items if i.kind == "file" and i.name.lower().endswith(".json"))
        return SpecListing(dir=directory, jsons=tuple(jsons))

    def raw_spec_url(self, api: str, version: str, file: str, ref: str) -> str:
        segments = "/".join(_segment(s) for s in (ref, SPEC_ROOT, api, version, file))
        return f"{self._raw_base}/{self.owner}/{self.repo}/{segments}"

    def fetch_text(self, url: str) -> str:
        return self._get(url).text
