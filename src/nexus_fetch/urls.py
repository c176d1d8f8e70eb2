"""Request URLs for the Nexus REST endpoints.

All builders are pure. Query values are encoded exactly once; the base URL
of the instance is used as given.
"""

import logging
from urllib.parse import quote, urlencode

from nexus_fetch.models import Fqa, Gav, NexusRepository

logger = logging.getLogger(__name__)

SEARCH_PATH = "service/local/lucene/search"
RESOLVE_PATH = "service/local/artifact/maven/resolve"
CONTENT_PATH = "service/local/artifact/maven/content"
REDIRECT_PATH = "service/local/artifact/maven/redirect"
REPOSITORY_CONTENT_PATH = "content/repositories"


def _build(repository: NexusRepository, path: str, params: list[tuple[str, str]]) -> str:
    url = repository.instance.base_url + path
    if params:
        url += "?" + urlencode(params)
    return url


def _gav_params(gav: Gav, keys: str = "gavcp") -> list[tuple[str, str]]:
    """Return query parameters for the non-empty fields of a coordinate.

    Args:
        gav: Coordinate to encode.
        keys: Parameter names in output order, drawn from "g", "a", "v",
            "c" and "p".
    """
    values = {
        "g": gav.group,
        "a": gav.artifact,
        "v": gav.version,
        "c": gav.classifier,
        "p": gav.packaging,
    }
    return [(key, values[key]) for key in keys if values[key]]


def search_url(repository: NexusRepository, gav: Gav) -> str:
    """Build a Lucene search URL for (possibly partial) coordinates."""
    params = _gav_params(gav, "gavpc")
    if repository.repository_id:
        params.append(("repositoryId", repository.repository_id))
    return _build(repository, SEARCH_PATH, params)


def resolve_url(fqa: Fqa) -> str:
    """Build a URL returning metadata about the concrete resolved artifact."""
    params = [("r", fqa.repository_id)] + _gav_params(fqa.gav)
    return _build(fqa.repository, RESOLVE_PATH, params)


def content_url(fqa: Fqa) -> str:
    """Build a URL returning the resolved artifact body."""
    params = [("r", fqa.repository_id)] + _gav_params(fqa.gav)
    return _build(fqa.repository, CONTENT_PATH, params)


def redirect_url(fqa: Fqa) -> str:
    """Build a URL redirecting to the concrete build of a floating version.

    Used for SNAPSHOT versions, where the server redirects to the latest
    timestamped build. All parameters are sent, even when empty.
    """
    gav = fqa.gav
    params = [
        ("r", fqa.repository_id),
        ("g", gav.group),
        ("a", gav.artifact),
        ("v", gav.version),
        ("p", gav.packaging),
    ]
    return _build(fqa.repository, REDIRECT_PATH, params)


def repository_content_url(fqa: Fqa) -> str:
    """Build the static path of an artifact inside its repository."""
    path = "/".join(
        [
            REPOSITORY_CONTENT_PATH,
            quote(fqa.repository_id, safe=""),
            quote(fqa.gav.default_layout()),
        ]
    )
    return _build(fqa.repository, path, [])


def fetch_url(fqa: Fqa) -> str:
    """Pick the download URL for an artifact found by a search.

    Snapshots go through the redirect endpoint, everything else through the
    static repository path.
    """
    if fqa.gav.is_snapshot:
        url = redirect_url(fqa)
    else:
        url = repository_content_url(fqa)
    logger.debug("Version %s of %s maps to %s", fqa.gav.version, fqa.gav.artifact, url)
    return url
