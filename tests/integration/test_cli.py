from pathlib import Path

import pytest
from typer.testing import CliRunner

from nexus_fetch.cli import app, build_gav
from nexus_fetch.exceptions import (
    NothingFoundError,
    PersistError,
    TransportError,
    TruncatedSearchError,
    UsageError,
)
from nexus_fetch.models import FetchResult, Fqa, Gav, NexusRepository

runner = CliRunner()


@pytest.fixture
def mock_run(mocker):
    """Mock the strategy run with a successful direct fetch."""
    result = FetchResult(mode="content", written=[Path("app-1.0.jar")])
    return mocker.patch("nexus_fetch.cli._run", return_value=result)


def _config(mock_run):
    return mock_run.call_args.args[0]


def test_concise_notation_argument(mock_run):
    """Test that the positional argument is parsed as concise notation."""
    result = runner.invoke(app, ["com.example:app:1.0:sources@war"])

    assert result.exit_code == 0
    assert "Written:" in result.stdout
    config = _config(mock_run)
    assert config.gav == Gav("com.example", "app", "1.0", "sources", "war")
    assert config.repository.repository_id == "releases"
    assert config.fetch is True


def test_coordinate_options(mock_run, tmp_path):
    """Test building the configuration from discrete options."""
    result = runner.invoke(
        app,
        [
            "--group", "com.example",
            "--artifact", "app",
            "--server", "repo.example.com",
            "--port", "443",
            "--protocol", "https",
            "--repository", "",
            "--no-fetch",
            "--abort-on-not-found",
            "--output-dir", str(tmp_path),
            "--max-results", "5",
        ],
    )

    assert result.exit_code == 0
    config = _config(mock_run)
    assert config.gav == Gav(group="com.example", artifact="app")
    assert config.repository.repository_id == ""
    assert config.repository.instance.base_url == "https://repo.example.com:443/nexus/"
    assert config.fetch is False
    assert config.abort_on_not_found is True
    assert config.output_dir == tmp_path
    assert config.max_results == 5


def test_credentials_from_environment(mock_run):
    result = runner.invoke(
        app,
        ["g:a:v"],
        env={"NEXUS_USERNAME": "deployer", "NEXUS_PASSWORD": "s3cret"},
    )

    assert result.exit_code == 0
    assert _config(mock_run).repository.instance.auth == ("deployer", "s3cret")


def test_concise_and_options_is_usage_error(mock_run):
    """Test that mixing both coordinate forms fails before any request."""
    result = runner.invoke(app, ["g:a:v", "--group", "other"])

    assert result.exit_code == 2
    mock_run.assert_not_called()


def test_malformed_concise_notation_is_usage_error(mock_run):
    result = runner.invoke(app, ["g:a:v:c:x"])

    assert result.exit_code == 2
    mock_run.assert_not_called()


def test_resolve_prints_metadata_verbatim(mocker):
    metadata = "<artifact-resolution><data><version>1.0-20240101.000000-1</version></data></artifact-resolution>"
    mocker.patch(
        "nexus_fetch.cli._run",
        return_value=FetchResult(mode="resolve", metadata=metadata),
    )

    result = runner.invoke(app, ["g:a:1.0-SNAPSHOT", "--no-fetch"])

    assert result.exit_code == 0
    assert metadata in result.stdout


def test_truncated_search_warns(mocker):
    repository = NexusRepository()
    mocker.patch(
        "nexus_fetch.cli._run",
        return_value=FetchResult(
            mode="search",
            locations=[Fqa(repository, Gav("g", "a", "1"))],
            truncated=True,
        ),
    )

    result = runner.invoke(app, ["g:a"])

    assert result.exit_code == 0
    assert "truncated" in result.stdout
    assert "Found 1 artifact files" in result.stdout



def test_no_fetch_search_lists_urls(mocker):
    """Each fetchable search result is printed with the URL it would be fetched from."""
    base = "http://localhost:8081/nexus/"
    release = Fqa(NexusRepository(repository_id="releases"), Gav("g", "a", "1.0", packaging="jar"))
    snapshot = Fqa(NexusRepository(repository_id="snapshots"), Gav("g", "a", "1.1-SNAPSHOT", packaging="jar"))
    release_url = base + "content/repositories/releases/g/a/1.0/a-1.0.jar"
    snapshot_url = base + "service/local/artifact/maven/redirect?r=snapshots&g=g&a=a&v=1.1-SNAPSHOT&p=jar"
    run = mocker.patch(
        "nexus_fetch.cli._run",
        return_value=FetchResult(
            mode="search",
            locations=[release, snapshot],
            targets=[(release, release_url), (snapshot, snapshot_url)],
        ),
    )

    result = runner.invoke(app, ["g:a", "--no-fetch"])

    assert result.exit_code == 0
    assert not run.call_args.args[0].fetch
    assert f"g:a:1.0@jar [releases] {release_url}" in result.stdout
    assert f"g:a:1.1-SNAPSHOT@jar [snapshots] {snapshot_url}" in result.stdout

@pytest.mark.parametrize(
    "error,exit_code",
    [
        (NothingFoundError("Search for g:a returns nothing"), 4),
        (TruncatedSearchError("Search result truncated by the server"), 3),
        (TransportError("Expected status 200 but got 503", url="http://x", status=503), 1),
        (PersistError("Cannot write out/a-1.jar", path="out/a-1.jar", details="Not a directory"), 1),
    ],
)
def test_failures_map_to_exit_codes(mocker, error, exit_code):
    mocker.patch("nexus_fetch.cli._run", side_effect=error)

    result = runner.invoke(app, ["g:a"])

    assert result.exit_code == exit_code


class TestBuildGav:
    def test_options_only(self):
        assert build_gav(None, "g", "a", "", "", "") == Gav(group="g", artifact="a")

    def test_concise_only(self):
        assert build_gav("g:a@zip", "", "", "", "", "") == Gav("g", "a", packaging="zip")

    def test_both_forms(self):
        with pytest.raises(UsageError) as exc_info:
            build_gav("g:a", "", "", "1.0", "", "")
        assert exc_info.value.exit_code == 2
