"""Keep a JSON configuration file in sync with a GitHub repository."""

from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import requests

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"
_ACCEPT = "application/vnd.github.v3+json"


class ConfigError(Exception):
    """Base error for configuration sync operations."""


class HttpError(ConfigError):
    """The remote answered with an error or with unusable content."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"HTTP error: {detail}")


class NotFoundError(ConfigError):
    """The remote configuration file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File not found: {path}")


def _parse_json_response(response: requests.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError as exc:
        raise ConfigError(f"Unexpected response: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("Unexpected response: not a JSON object")
    return data


def _file_fields(response: requests.Response) -> Tuple[str, str]:
    data = _parse_json_response(response)
    sha, content = data.get("sha"), data.get("content")
    if not isinstance(sha, str) or not isinstance(content, str):
        raise ConfigError("Unexpected response: missing sha or content")
    return sha, content


def _pretty(config: Any) -> str:
    return json.dumps(config, indent=2, ensure_ascii=False)


@dataclass
class RemoteConfigSync:
    """Pulls and pushes one JSON file in a GitHub repository."""

    github_token: str = field(repr=False)
    repo: str
    config_file: str
    branch: str = "main"
    api_url: str = GITHUB_API
    timeout: float = 30.0
    file_sha: Optional[str] = None

    def with_branch(self, branch: str) -> RemoteConfigSync:
        """A copy that targets ``branch``."""
        return replace(self, branch=branch)

    @property
    def _url(self) -> str:
        return f"{self.api_url}/repos/{self.repo}/contents/{self.config_file}"

    def _headers(self, accept: bool = True) -> Dict[str, str]:
        headers = {"Authorization": f"token {self.github_token}"}
        if accept:
            headers["Accept"] = _ACCEPT
        return headers

    def pull(self) -> Any:
        """Fetch and decode the remote configuration."""
        try:
            response = requests.get(
                self._url,
                headers=self._headers(),
                params={"ref": self.branch},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise ConfigError(str(exc)) from exc
        if response.status_code == 404:
            raise NotFoundError(self.config_file)

        sha, content = _file_fields(response)
        self.file_sha = sha
        try:
            raw = base64.b64decode(content.replace("\n", ""), validate=True)
        except ValueError as exc:
            raise HttpError(f"Base64 decode error: {exc}") from exc
        try:
            config = json.loads(raw)
        except ValueError as exc:
            raise ConfigError(f"JSON error: {exc}") from exc

        logger.info("Pulled config from %s/%s", self.repo, self.config_file)
        return config

    def push(self, config: Any, message: Optional[str] = None) -> None:
        """Commit ``config`` to the remote file."""
        if message is None:
            now = datetime.now(timezone.utc)
            message = f"Update config - {now:%Y-%m-%d %H:%M:%S.%f} UTC"
        payload: Dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(_pretty(config).encode("utf-8")).decode("ascii"),
            "branch": self.branch,
        }
        if self.file_sha is not None:
            payload["sha"] = self.file_sha
        try:
            response = requests.put(
                self._url, headers=self._headers(), json=payload, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise ConfigError(str(exc)) from exc
        if not response.ok:
            raise HttpError(response.text)

        data = _parse_json_response(response)
        sha = data.get("sha")
        if sha is None and isinstance(data.get("content"), dict):
            sha = data["content"].get("sha")
        if not isinstance(sha, str):
            raise ConfigError("Unexpected response: missing sha")
        self.file_sha = sha
        logger.info("Pushed config to %s/%s", self.repo, self.config_file)

    def file_exists(self) -> bool:
        """True if the remote file can be fetched."""
        try:
            response = requests.get(
                self._url,
                headers=self._headers(accept=False),
                params={"ref": self.branch},
                timeout=self.timeout,
            )
        except requests.RequestException:
            return False
        return response.ok


def _merge(local: Any, remote: Any) -> Any:
    if isinstance(local, dict) and isinstance(remote, dict):
        return {**local, **remote}
    return remote


class ConfigSyncManager:
    """A local JSON configuration cache, optionally synced with a remote."""

    def __init__(
        self,
        local_path: Union[str, Path],
        remote_sync: Optional[RemoteConfigSync] = None,
    ) -> None:
        self.local_path = Path(local_path)
        self.remote_sync = remote_sync
        self._config: Any = {}

    def load_local(self) -> Any:
        """Read the local file, or start empty if it does not exist."""
        if self.local_path.exists():
            try:
                text = self.local_path.read_text(encoding="utf-8")
            except OSError as exc:
                raise ConfigError(f"IO error: {exc}") from exc
            try:
                self._config = json.loads(text)
            except ValueError as exc:
                raise ConfigError(f"JSON error: {exc}") from exc
        else:
            self._config = {}
        return self._config

    def save_local(self) -> None:
        """Write the configuration to the local file, creating directories."""
        try:
            self.local_path.parent.mkdir(parents=True, exist_ok=True)
            self.local_path.write_text(_pretty(self._config), encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"IO error: {exc}") from exc

    def load_and_sync(self) -> Any:
        """Load locally, then overlay the remote config; remote keys win."""
        self.load_local()
        if self.remote_sync is not None:
            try:
                remote = self.remote_sync.pull()
            except ConfigError as exc:
                logger.error("Remote sync failed, using local: %s", exc)
            else:
                self._config = _merge(self._config, remote)
                self.save_local()
                logger.info("Config synced with remote")
        return self._config

    def save_and_sync(self, config: Any) -> None:
        """Replace the configuration, save it and push it to the remote."""
        self._config = config
        self.save_local()
        if self.remote_sync is not None:
            self.remote_sync.push(self._config, "Sync config")

    def get(self, key: str) -> Any:
        """Value at a dot-separated key, or None if any part is missing."""
        value = self._config
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return None
            value = value[part]
        return value

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` at a dot-separated key, creating objects on the way."""
        *path, last = key.split(".")
        if path and not isinstance(self._config, dict):
            self._config = {}
        current = self._config
        for position, part in enumerate(path):
            child = current.setdefault(part, {})
            if not isinstance(child, dict) and position < len(path) - 1:
                child = current[part] = {}
            current = child
        if isinstance(current, dict):
            current[last] = value

    def config(self) -> Any:
        """The current configuration."""
        return self._config