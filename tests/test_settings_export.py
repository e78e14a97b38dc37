import json
import zipfile

import pytest

from msgbox_kit.settings_export import (
    FileInfo,
    IncompatibleVersionError,
    InvalidBundleError,
    Manifest,
    PathTraversalError,
    ResourceInfo,
    SettingsError,
    SettingsExporter,
    SuspiciousContentError,
    contains_path_traversal,
)


def _manifest(version="1.0.0"):
    return Manifest(
        version=version,
        app_version="0.1.1",
        export_date="2025-01-09T14:30:22+00:00",
        platform="linux",
    ).to_dict()


def _bundle(path, entries, version="1.0.0", with_manifest=True):
    with zipfile.ZipFile(path, "w") as zf:
        if with_manifest:
            zf.writestr("manifest.json", json.dumps(_manifest(version)))
        for name, data in entries.items():
            zf.writestr(name, data)
    return path


def test_path_traversal_detection():
    assert contains_path_traversal("../etc/passwd")
    assert contains_path_traversal("..\\windows\\system32")
    assert contains_path_traversal("/etc/passwd")
    assert contains_path_traversal("C:\\evil.json")
    assert not contains_path_traversal("config.json")
    assert not contains_path_traversal("configs/a.json")


def test_version_compatibility():
    exporter = SettingsExporter("test")
    assert exporter.check_version_compatibility("1.0.0")
    assert exporter.check_version_compatibility("1.5.2")
    assert not exporter.check_version_compatibility("2.0.0")


def test_unparsable_version_counts_as_major_zero():
    assert SettingsExporter("test", version="0.3").check_version_compatibility("abc")
    assert not SettingsExporter("test").check_version_compatibility("abc")


def test_manifest_round_trip():
    manifest = Manifest(
        version="1.0.0",
        app_version="0.1.1",
        export_date="2025-01-09T14:30:22+00:00",
        platform="linux",
        configs=[FileInfo("a.json", 12, 1700000000.5)],
        resources=[ResourceInfo("templates", "sub/t.txt", 3)],
    )
    assert Manifest.from_dict(json.loads(json.dumps(manifest.to_dict()))) == manifest


def test_manifest_from_dict_missing_key():
    with pytest.raises(SettingsError):
        Manifest.from_dict({"version": "1.0.0"})


def test_export_contents(tmp_path):
    config_dir = tmp_path / "cfg"
    config_dir.mkdir()
    (config_dir / "config.json").write_text('{"a": 1}')
    (config_dir / "notes.txt").write_text("ignored")
    res = tmp_path / "templates"
    (res / "sub").mkdir(parents=True)
    (res / "sub" / "t.txt").write_text("abc")

    exporter = SettingsExporter(config_dir)
    exporter.add_resource_dir("templates", res)
    out = exporter.export_all_settings(tmp_path / "out.yas")

    with zipfile.ZipFile(out) as zf:
        names = set(zf.namelist())
        manifest = json.loads(zf.read("manifest.json"))
    assert names == {"manifest.json", "configs/config.json", "resources/templates/sub/t.txt"}
    assert manifest["version"] == "1.0.0"
    assert [c["file"] for c in manifest["configs"]] == ["config.json"]
    assert manifest["configs"][0]["size"] == 8
    assert manifest["resources"] == [{"category": "templates", "file": "sub/t.txt", "size": 3}]


def test_export_import_round_trip(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "config.json").write_text('{"theme": "dark"}')
    (src / "list.json").write_text("[1, 2]")
    bundle = SettingsExporter(src).export_all_settings(tmp_path / "b.yas")

    dest = tmp_path / "dest"
    SettingsExporter(dest).import_settings(bundle, backup=False)
    assert json.loads((dest / "config.json").read_text()) == {"theme": "dark"}
    assert json.loads((dest / "list.json").read_text()) == [1, 2]


def test_import_missing_file(tmp_path):
    with pytest.raises(InvalidBundleError):
        SettingsExporter(tmp_path).import_settings(tmp_path / "nope.yas", backup=False)


def test_import_rejects_traversal(tmp_path):
    bundle = _bundle(tmp_path / "b.yas", {"../evil.json": "{}"})
    with pytest.raises(PathTraversalError):
        SettingsExporter(tmp_path / "cfg").import_settings(bundle, backup=False)
    assert not (tmp_path / "evil.json").exists()


def test_import_missing_manifest(tmp_path):
    bundle = _bundle(tmp_path / "b.yas", {"configs/a.json": "{}"}, with_manifest=False)
    with pytest.raises(InvalidBundleError, match="Missing manifest"):
        SettingsExporter(tmp_path / "cfg").import_settings(bundle, backup=False)


def test_import_incompatible_version(tmp_path):
    bundle = _bundle(tmp_path / "b.yas", {"configs/a.json": "{}"}, version="2.0.0")
    with pytest.raises(IncompatibleVersionError) as info:
        SettingsExporter(tmp_path / "cfg").import_settings(bundle, backup=False)
    assert info.value.version == "2.0.0"


def test_import_suspicious_content(tmp_path):
    bundle = _bundle(
        tmp_path / "b.yas", {"configs/a.json": '{"x": "<SCRIPT>alert(1)</script>"}'}
    )
    with pytest.raises(SuspiciousContentError):
        SettingsExporter(tmp_path / "cfg").import_settings(bundle, backup=False)


def test_import_skips_scalar_json(tmp_path):
    bundle = _bundle(
        tmp_path / "b.yas", {"configs/scalar.json": "42", "configs/ok.json": '{"k": 1}'}
    )
    dest = tmp_path / "cfg"
    SettingsExporter(dest).import_settings(bundle, backup=False)
    assert not (dest / "scalar.json").exists()
    assert json.loads((dest / "ok.json").read_text()) == {"k": 1}


def test_import_invalid_json_raises(tmp_path):
    bundle = _bundle(tmp_path / "b.yas", {"configs/bad.json": "{not json"})
    with pytest.raises(SettingsError, match="JSON error"):
        SettingsExporter(tmp_path / "cfg").import_settings(bundle, backup=False)


def test_import_bad_zip(tmp_path):
    bad = tmp_path / "b.yas"
    bad.write_bytes(b"not a zip")
    with pytest.raises(SettingsError, match="ZIP error"):
        SettingsExporter(tmp_path / "cfg").import_settings(bad, backup=False)


def test_import_with_backup_creates_bundle(tmp_path):
    dest = tmp_path / "cfg"
    dest.mkdir()
    (dest / "old.json").write_text('{"old": true}')
    bundle = _bundle(tmp_path / "b.yas", {"configs/new.json": '{"new": true}'})
    SettingsExporter(dest).import_settings(bundle, backup=True)

    backups = list((dest / "backups").glob("settings_backup_*.yas"))
    assert len(backups) == 1
    with zipfile.ZipFile(backups[0]) as zf:
        assert "configs/old.json" in zf.namelist()
    assert (dest / "new.json").exists()


def test_export_preview(tmp_path):
    config_dir = tmp_path / "cfg"
    config_dir.mkdir()
    (config_dir / "a.json").write_bytes(b"x" * 1024)
    (config_dir / "b.txt").write_text("ignored")
    res = tmp_path / "res"
    res.mkdir()
    (res / "r.txt").write_bytes(b"y" * 512)

    exporter = SettingsExporter(config_dir)
    exporter.add_resource_dir("extra", res)
    preview = exporter.export_preview()
    assert [(c.name, c.size_kb) for c in preview.configs] == [("a.json", 1.0)]
    assert [(r.category, r.name, r.size_kb) for r in preview.resources] == [
        ("extra", "r.txt", 0.5)
    ]
    assert preview.total_size_kb == 1.5


def test_export_preview_missing_dir(tmp_path):
    preview = SettingsExporter(tmp_path / "missing").export_preview()
    assert preview.configs == []
    assert preview.total_size_kb == 0.0