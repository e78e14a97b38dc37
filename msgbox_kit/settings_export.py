"""Export application settings to a ZIP bundle and import them back safely."""

from __future__ import annotations

import json
import logging
import platform
import re
import shutil
import tempfile
import zipfile
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

BUNDLE_EXTENSION = ".yas"
MAX_CONFIG_SIZE = 10 * 1024 * 1024
APP_VERSION = "0.1.1"
_U32_MAX = 2**32 - 1

# Label shown in the error, and a case-insensitive pattern searched in the text.
_SUSPICIOUS_PATTERNS: Tuple[Tuple[str, "re.Pattern[str]"], ...] = tuple(
    (label, re.compile(pattern, re.IGNORECASE))
    for label, pattern in (
        ("dunder import", r"_{2}import_{2}"),
        ("eval call", r"eval\("),
        ("exec call", r"exec\("),
        ("compile call", r"compile\("),
        ("subprocess", r"subprocess"),
        ("os.system", r"os\.system"),
        ("os.popen", r"os\.popen"),
        ("<script", r"<script"),
        ("javascript:", r"javascript:"),
    )
)


class SettingsError(Exception):
    """Base error for settings export and import."""


class PathTraversalError(SettingsError):
    """A bundle entry would be written outside the extraction directory."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Path traversal detected: {path}")


class InvalidBundleError(SettingsError):
    """The bundle is missing or malformed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid bundle: {reason}")


class IncompatibleVersionError(SettingsError):
    """The bundle was made by an incompatible exporter version."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Incompatible version: {version}")


class SuspiciousContentError(SettingsError):
    """A config file contains text that looks like injected code."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f"Suspicious content: {pattern}")


@dataclass(frozen=True)
class FileInfo:
    """A config file recorded in the manifest."""

    file: str
    size: int
    modified: Optional[float] = None


@dataclass(frozen=True)
class ResourceInfo:
    """A resource file recorded in the manifest."""

    category: str
    file: str
    size: int


@dataclass
class Manifest:
    """Metadata stored as ``manifest.json`` inside a bundle."""

    version: str
    app_version: str
    export_date: str
    platform: str
    configs: List[FileInfo] = field(default_factory=list)
    resources: List[ResourceInfo] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready mapping of the manifest."""
        return {
            "version": self.version,
            "app_version": self.app_version,
            "export_date": self.export_date,
            "platform": self.platform,
            "configs": [
                {"file": c.file, "size": c.size, "modified": c.modified}
                for c in self.configs
            ],
            "resources": [
                {"category": r.category, "file": r.file, "size": r.size}
                for r in self.resources
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Manifest:
        """Build a manifest from a mapping; raises SettingsError if malformed."""
        try:
            return cls(
                version=str(data["version"]),
                app_version=str(data["app_version"]),
                export_date=str(data["export_date"]),
                platform=str(data["platform"]),
                configs=[
                    FileInfo(
                        file=str(c["file"]),
                        size=int(c["size"]),
                        modified=None if c.get("modified") is None else float(c["modified"]),
                    )
                    for c in data["configs"]
                ],
                resources=[
                    ResourceInfo(
                        category=str(r["category"]), file=str(r["file"]), size=int(r["size"])
                    )
                    for r in data["resources"]
                ],
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise SettingsError(f"JSON error: invalid manifest: {exc}") from exc


@dataclass(frozen=True)
class ConfigPreview:
    """A config file that an export would include."""

    name: str
    size_kb: float


@dataclass(frozen=True)
class ResourcePreview:
    """A resource file that an export would include."""

    category: str
    name: str
    size_kb: float


@dataclass(frozen=True)
class ExportPreview:
    """What an export would contain and its total size."""

    configs: List[ConfigPreview]
    resources: List[ResourcePreview]
    total_size_kb: float


def contains_path_traversal(path: str) -> bool:
    """True if an archive entry name climbs upwards or is absolute."""
    if ".." in path:
        return True
    return path.startswith("/") or (len(path) > 1 and path[1] == ":")


def _platform_name() -> str:
    name = platform.system().lower()
    return "macos" if name == "darwin" else name


def _timestamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def _major(version: str) -> int:
    head = version.split(".", 1)[0]
    if not re.fullmatch(r"\+?\d+", head):
        return 0
    value = int(head)
    return value if value <= _U32_MAX else 0


class SettingsExporter:
    """Exports the JSON configs of a directory, plus extra resources, to a bundle."""

    def __init__(
        self, config_dir: PathLike, version: str = "1.0.0", app_version: str = APP_VERSION
    ) -> None:
        self.config_dir = Path(config_dir)
        self.version = version
        self.app_version = app_version
        self.additional_resource_dirs: Dict[str, Path] = {}

    def add_resource_dir(self, name: str, path: PathLike) -> None:
        """Include every file below ``path`` under ``resources/<name>/``."""
        self.additional_resource_dirs[name] = Path(path)

    def _config_files(self) -> Iterator[Path]:
        if not self.config_dir.exists():
            return
        for path in sorted(self.config_dir.iterdir()):
            if path.suffix == ".json" and path.is_file():
                yield path

    def _resource_files(self) -> Iterator[Tuple[str, Path, str]]:
        for category, root in self.additional_resource_dirs.items():
            if not root.exists():
                continue
            for path in sorted(root.rglob("*")):
                if path.is_file():
                    yield category, path, path.relative_to(root).as_posix()

    def export_all_settings(self, export_path: Optional[PathLike] = None) -> Path:
        """Write a bundle and return its path; by default a timestamped file here."""
        target = (
            Path(export_path)
            if export_path is not None
            else Path(f"your_app_settings_{_timestamp()}{BUNDLE_EXTENSION}")
        )
        manifest = Manifest(
            version=self.version,
            app_version=self.app_version,
            export_date=datetime.now().astimezone().isoformat(),
            platform=_platform_name(),
        )
        try:
            with zipfile.ZipFile(target, "w", zipfile.ZIP_DEFLATED) as bundle:
                for path in self._config_files():
                    stat = path.stat()
                    bundle.write(path, f"configs/{path.name}")
                    manifest.configs.append(
                        FileInfo(file=path.name, size=stat.st_size, modified=stat.st_mtime)
                    )
                for category, path, relative in self._resource_files():
                    bundle.write(path, f"resources/{category}/{relative}")
                    manifest.resources.append(
                        ResourceInfo(category=category, file=relative, size=path.stat().st_size)
                    )
                bundle.writestr(
                    "manifest.json", json.dumps(manifest.to_dict(), indent=2, ensure_ascii=False)
                )
        except OSError as exc:
            raise SettingsError(f"IO error: {exc}") from exc
        return target

    def import_settings(self, import_path: PathLike, backup: bool = True) -> None:
        """Restore config files from a bundle, backing up current settings first."""
        source = Path(import_path)
        if not source.exists():
            raise InvalidBundleError("File not found")

        if backup:
            backup_path = self._backup_current_settings()
            logger.info("Backed up current settings to %s", backup_path)

        with tempfile.TemporaryDirectory() as tmp:
            workdir = Path(tmp)
            self._safe_extract_all(source, workdir)

            manifest_path = workdir / "manifest.json"
            if not manifest_path.exists():
                raise InvalidBundleError("Missing manifest")
            try:
                raw = json.loads(manifest_path.read_text(encoding="utf-8"))
            except (ValueError, OSError) as exc:
                raise SettingsError(f"JSON error: {exc}") from exc
            if not isinstance(raw, dict):
                raise SettingsError("JSON error: manifest is not an object")
            manifest = Manifest.from_dict(raw)

            if not self.check_version_compatibility(manifest.version):
                raise IncompatibleVersionError(manifest.version)

            configs_dir = workdir / "configs"
            if not configs_dir.exists():
                return
            try:
                self.config_dir.mkdir(parents=True, exist_ok=True)
                for path in sorted(configs_dir.iterdir()):
                    if path.suffix != ".json" or not path.is_file():
                        continue
                    if not self._validate_config_file(path):
                        logger.warning("Skipping invalid config file: %s", path.name)
                        continue
                    shutil.copyfile(path, self.config_dir / path.name)
            except OSError as exc:
                raise SettingsError(f"IO error: {exc}") from exc

    def _backup_current_settings(self) -> Path:
        backup_dir = self.config_dir / "backups"
        try:
            backup_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SettingsError(f"IO error: {exc}") from exc
        return self.export_all_settings(
            backup_dir / f"settings_backup_{_timestamp()}{BUNDLE_EXTENSION}"
        )

    def check_version_compatibility(self, export_version: str) -> bool:
        """True if the bundle's major version matches this exporter's."""
        return _major(self.version) == _major(export_version)

    def _safe_extract_all(self, zip_path: Path, target_dir: Path) -> None:
        root = target_dir.resolve()
        try:
            with zipfile.ZipFile(zip_path) as archive:
                for info in archive.infolist():
                    name = info.filename
                    if contains_path_traversal(name):
                        raise PathTraversalError(name)
                    out = root / name
                    if not out.resolve().is_relative_to(root):
                        raise PathTraversalError(name)
                    if name.endswith("/"):
                        out.mkdir(parents=True, exist_ok=True)
                        continue
                    out.parent.mkdir(parents=True, exist_ok=True)
                    with archive.open(info) as src, out.open("wb") as dst:
                        shutil.copyfileobj(src, dst)
        except zipfile.BadZipFile as exc:
            raise SettingsError(f"ZIP error: {exc}") from exc
        except OSError as exc:
            raise SettingsError(f"IO error: {exc}") from exc

    def _validate_config_file(self, config_file: Path) -> bool:
        try:
            if config_file.stat().st_size > MAX_CONFIG_SIZE:
                return False
            content = config_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SettingsError(f"IO error: {exc}") from exc

        for label, pattern in _SUSPICIOUS_PATTERNS:
            if pattern.search(content):
                raise SuspiciousContentError(label)

        try:
            parsed = json.loads(content)
        except ValueError as exc:
            raise SettingsError(f"JSON error: {exc}") from exc
        return isinstance(parsed, (dict, list))

    def export_preview(self) -> ExportPreview:
        """List what an export would include, with sizes in KiB."""
        total = 0
        configs = []
        resources = []
        for path in self._config_files():
            size = path.stat().st_size
            total += size
            configs.append(ConfigPreview(name=path.name, size_kb=size / 1024.0))
        for category, path, relative in self._resource_files():
            size = path.stat().st_size
            total += size
            resources.append(
                ResourcePreview(category=category, name=relative, size_kb=size / 1024.0)
            )
        return ExportPreview(configs=configs, resources=resources, total_size_kb=total / 1024.0)