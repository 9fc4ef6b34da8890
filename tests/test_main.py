import io
import tarfile

import httpx
import pytest

from repodiff import main as cli

REMOTE = "http://nexus.example.com/repository/public"


@pytest.fixture(autouse=True)
def _isolated(monkeypatch):
    for name in (
        "REPODIFF_LOCAL_PATH",
        "REPODIFF_REMOTE_URL",
        "REPODIFF_ARCHIVE_PATH",
        "REPODIFF_IGNORED_GROUPS",
        "REPODIFF_WORKERS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cli, "configure_logging", lambda verbosity: None)


@pytest.fixture
def repo(tmp_path):
    root = tmp_path / "m2"
    for relative in (
        "org/foo/bar/1.0/bar-1.0.jar",
        "org/foo/bar/1.0/bar-1.0.pom",
        "org/foo/baz/2.0/baz-2.0-sources.jar",
        "com/corp/secret/1.0/secret-1.0.jar",
    ):
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(relative.encode())
    return root


def _client(present):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "HEAD"
        path = str(request.url).replace(REMOTE + "/", "")
        return httpx.Response(200 if path in present else 404)

    return httpx.Client(transport=httpx.MockTransport(handler))


def test_reports_missing_artifacts(repo):
    out = io.StringIO()

    code = cli.main(
        ["-l", str(repo), "-r", REMOTE, "-i", "com.corp", "-d", "path"],
        client=_client({"org/foo/bar/1.0/bar-1.0.jar"}),
        out=out,
    )

    lines = out.getvalue().splitlines()
    assert code == 0
    assert lines[0] == f"Dependencies in local ({repo}) missing from remote ({REMOTE})..."
    assert lines[1:3] == [
        "Missing: org/foo/bar/1.0/bar-1.0.pom",
        "Missing: org/foo/baz/2.0/baz-2.0-sources.jar",
    ]
    assert lines[3].startswith("[Missing 2 of 3 dependencies (")


def test_short_display_and_archive(repo, tmp_path):
    out = io.StringIO()
    dest = tmp_path / "missing.tar"

    code = cli.main(
        ["--local", str(repo), "--remote", REMOTE + "/", "--archive", str(dest), "--display", "short", "-w", "2"],
        client=_client(set()),
        out=out,
    )

    assert code == 0
    assert "Missing: com.corp:secret:1.0::jar" in out.getvalue()
    assert "Missing: org.foo:baz:2.0:sources:jar" in out.getvalue()
    with tarfile.open(dest) as archive:
        assert archive.getnames() == [
            "com/corp/secret/1.0/secret-1.0.jar",
            "org/foo/bar/1.0/bar-1.0.jar",
            "org/foo/bar/1.0/bar-1.0.pom",
            "org/foo/baz/2.0/baz-2.0-sources.jar",
        ]


def test_unknown_display_falls_back_to_long(repo):
    out = io.StringIO()

    cli.main(["-l", str(repo), "-r", REMOTE, "-i", "org.foo", "-d", "fancy"], client=_client(set()), out=out)

    assert "Missing: group:com.corp, artifact:secret, version:1.0, type:jar" in out.getvalue()


def test_local_path_from_environment(repo, monkeypatch):
    monkeypatch.setenv("REPODIFF_LOCAL_PATH", str(repo))
    out = io.StringIO()

    code = cli.main(["-r", REMOTE], client=_client(set()), out=out)

    assert code == 0
    assert "[Missing 4 of 4 dependencies" in out.getvalue()


def test_missing_local_directory_exits_non_zero(tmp_path, capsys):
    code = cli.main(["-l", str(tmp_path / "absent"), "-r", REMOTE], client=_client(set()), out=io.StringIO())

    assert code == 1
    assert "not a readable directory" in capsys.readouterr().err


def test_archive_failure_exits_non_zero(repo, tmp_path):
    code = cli.main(
        ["-l", str(repo), "-r", REMOTE, "-a", str(tmp_path / "nope" / "x.tar")],
        client=_client(set()),
        out=io.StringIO(),
    )

    assert code == 1


def test_remote_is_required(repo):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-l", str(repo)], client=_client(set()), out=io.StringIO())

    assert excinfo.value.code == 2


def test_plain_ignored_groups_environment_value(repo, monkeypatch):
    monkeypatch.setenv("REPODIFF_IGNORED_GROUPS", "com.corp")
    out = io.StringIO()

    code = cli.main(["-l", str(repo), "-r", REMOTE], client=_client(set()), out=out)

    assert code == 0
    assert "[Missing 3 of 3 dependencies" in out.getvalue()
    assert "secret" not in out.getvalue()


def test_unparseable_environment_value_is_usage_error(repo, monkeypatch, capsys):
    monkeypatch.setenv("REPODIFF_WORKERS", "many")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-l", str(repo), "-r", REMOTE], client=_client(set()), out=io.StringIO())

    assert excinfo.value.code == 2
    assert "invalid configuration" in capsys.readouterr().err
