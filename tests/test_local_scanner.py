import logging
import os

import pytest

from repodiff.modules.reconcile.domain import ArtifactCoordinate, RepositoryScanError
from repodiff.modules.reconcile.scanner import LocalRepositoryScanner


def _touch(root, relative, content=b"x"):
    path = root.joinpath(*relative.split("/"))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


@pytest.fixture
def repo(tmp_path):
    for relative in (
        "org/foo/bar/1.0/bar-1.0.jar",
        "org/foo/bar/1.0/bar-1.0.pom",
        "org/foo/bar/1.0/bar-1.0-sources.jar",
        "org/foo/bar/1.0/bar-1.0.jar.sha1",
        "org/foo/bar/2.0-SNAPSHOT/bar-2.0-SNAPSHOT.jar",
        "antlr/antlr/2.7.7/antlr-2.7.7.pom",
        "com/internal/tool/3.1/tool-3.1.jar",
        "com/internalx/tool/3.1/tool-3.1.jar",
    ):
        _touch(tmp_path, relative)
    return tmp_path


def test_scan_collects_artifacts_and_descriptors(repo):
    scanner = LocalRepositoryScanner()

    found = scanner.scan(repo)

    assert found == {
        ArtifactCoordinate(groupid="org.foo", artifactid="bar", version="1.0", extension="jar"),
        ArtifactCoordinate(groupid="org.foo", artifactid="bar", version="1.0", extension="pom"),
        ArtifactCoordinate(groupid="org.foo", artifactid="bar", version="1.0", extension="jar", classifier="sources"),
        ArtifactCoordinate(groupid="antlr", artifactid="antlr", version="2.7.7", extension="pom"),
        ArtifactCoordinate(groupid="com.internal", artifactid="tool", version="3.1", extension="jar"),
        ArtifactCoordinate(groupid="com.internalx", artifactid="tool", version="3.1", extension="jar"),
    }


def test_scan_drops_excluded_groups(repo):
    found = LocalRepositoryScanner().scan(str(repo), {"com.internal", "antlr"})

    groups = {coords.groupid for coords in found}
    assert groups == {"org.foo", "com.internalx"}


def test_scan_skips_malformed_paths(tmp_path, caplog):
    _touch(tmp_path, "org/foo/bar/1.0/bar-1.0.jar")
    _touch(tmp_path, "org/foo/bar/1.0/renamed-1.0.jar")
    _touch(tmp_path, "stray.jar")
    scanner = LocalRepositoryScanner()

    with caplog.at_level(logging.WARNING):
        found = scanner.scan(tmp_path)

    assert {coords.artifactid for coords in found} == {"bar"}
    assert sorted(scanner.malformed) == ["org/foo/bar/1.0/renamed-1.0.jar", "stray.jar"]
    assert any("renamed-1.0.jar" in record.getMessage() for record in caplog.records)


def test_scan_handles_deep_trees(tmp_path):
    group = "/".join(f"g{i}" for i in range(60))
    _touch(tmp_path, f"{group}/deep/1/deep-1.jar")

    (coords,) = LocalRepositoryScanner().scan(tmp_path)

    assert coords.groupid == ".".join(f"g{i}" for i in range(60))


def test_missing_root_is_fatal(tmp_path):
    with pytest.raises(RepositoryScanError):
        LocalRepositoryScanner().scan(tmp_path / "nope")


def test_unreadable_directory_is_fatal(repo, monkeypatch):
    real_scandir = os.scandir
    blocked = str(repo / "antlr")

    def fake_scandir(path):
        if str(path) == blocked:
            raise PermissionError(13, "Permission denied", blocked)
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)

    with pytest.raises(RepositoryScanError) as excinfo:
        LocalRepositoryScanner().scan(repo)
    assert "antlr" in str(excinfo.value)


def test_malformed_file_in_excluded_group_is_silent(tmp_path, caplog):
    _touch(tmp_path, "com/corp/tool/1.0/tool-1.0.jar")
    _touch(tmp_path, "com/corp/tool/1.0/renamed.jar")
    scanner = LocalRepositoryScanner()

    with caplog.at_level(logging.WARNING):
        found = scanner.scan(tmp_path, {"com.corp"})

    assert found == set()
    assert scanner.malformed == []
    assert not [record for record in caplog.records if record.levelno >= logging.WARNING]
