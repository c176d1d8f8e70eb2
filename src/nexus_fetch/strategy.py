"""Resolution strategy: decide between a direct fetch and search-then-fetch.

Nexus search indices are not always up to date, so when the coordinates
are complete enough to address one artifact the search is skipped and the
artifact is fetched (or resolved) directly. Otherwise the search result
is flattened into individual files, and each is downloaded in turn.

Failures are raised as NexusFetchError subclasses and never retried.
"""

import logging
from pathlib import Path

from nexus_fetch.client import HttpResponse, NexusClient
from nexus_fetch.exceptions import (
    NothingFoundError,
    PersistError,
    TooManyArtifactsError,
    TransportError,
    TruncatedSearchError,
)
from nexus_fetch.filenames import resolve_filename
from nexus_fetch.models import FetchConfig, FetchResult, Fqa, Gav
from nexus_fetch.search import fetchable, parse_search_response, project_locations
from nexus_fetch.urls import content_url, fetch_url, resolve_url, search_url

logger = logging.getLogger(__name__)

NOT_FOUND = 404


def persist_body(body: bytes, output_dir: Path, filename: str) -> Path:
    """Write a downloaded body to output_dir/filename.

    Returns:
        The written path.

    Raises:
        PersistError: If the directory or file cannot be written.
    """
    path = Path(output_dir) / filename
    logger.debug("Writing %s", path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(body)
    except OSError as e:
        raise PersistError(f"Cannot write {path}", path=str(path), details=str(e)) from e
    return path


class ResolutionStrategy:
    """Runs one fetch or resolve for a FetchConfig.

    Attributes:
        config: Immutable run configuration.
        client: Transport used for every request.
    """

    def __init__(self, config: FetchConfig, client: NexusClient) -> None:
        self.config = config
        self.client = client

    async def run(self) -> FetchResult:
        """Execute the strategy for the configured coordinates.

        Returns:
            FetchResult describing what was found and written.

        Raises:
            NothingFoundError: If nothing was found and abort_on_not_found is set.
            TruncatedSearchError: If the search was truncated and
                abort_on_truncated is set.
            TooManyArtifactsError: If a search matched more than max_results
                fetchable artifacts.
            TransportError: On network failures or unexpected statuses.
            MalformedResponseError: If the search response cannot be parsed.
        """
        fqa = self.config.fqa
        if fqa.is_fully_specified():
            return await self._direct(fqa)
        return await self._search_and_fetch()

    async def _direct(self, fqa: Fqa) -> FetchResult:
        if self.config.fetch:
            logger.info("Coordinates fully specified, fetching content of %s", fqa)
            result = FetchResult(mode="content")
            response = await self.client.get(content_url(fqa))
        else:
            logger.info("Coordinates fully specified, resolving %s", fqa)
            result = FetchResult(mode="resolve")
            response = await self.client.get(resolve_url(fqa))

        if response.status == NOT_FOUND:
            if self.config.abort_on_not_found:
                raise NothingFoundError(f"Artifact {fqa} not found")
            logger.warning("Artifact %s not found", fqa)
            result.not_found = True
            return result
        self._check_status(response)

        if self.config.fetch:
            result.written.append(self._persist(response, fqa.gav))
        else:
            result.metadata = response.text
        return result

    async def _search_and_fetch(self) -> FetchResult:
        config = self.config
        logger.info("Searching %s", config.gav)
        response = await self.client.get_ok(search_url(config.repository, config.gav))
        found = parse_search_response(response.text)
        logger.info("Found %d artifacts", len(found.artifacts))

        result = FetchResult(mode="search", truncated=found.too_many_results)
        if found.too_many_results:
            if config.abort_on_truncated:
                raise TruncatedSearchError(
                    "Search result truncated by the server",
                    details=f"total count {found.total_count}",
                )
            logger.warning(
                "Search result truncated by the server, processing %d of %d matches",
                len(found.artifacts),
                found.total_count,
            )

        result.locations = project_locations(found, config.repository.instance)
        targets = fetchable(result.locations)
        if config.max_results is not None and len(targets) > config.max_results:
            raise TooManyArtifactsError(
                f"Search matched {len(targets)} artifacts, "
                f"expected at most {config.max_results}"
            )
        if not targets and config.abort_on_not_found:
            raise NothingFoundError(f"Search for {config.gav} returns nothing")

        for fqa in targets:
            logger.debug("Artifact: %s, default layout: %s", fqa, fqa.gav.default_layout())
            url = fetch_url(fqa)
            result.targets.append((fqa, url))
            if not config.fetch:
                continue
            logger.info("Fetching %s", url)
            download = await self.client.get_ok(url)
            path = self._persist(download, fqa.gav)
            if path in result.written:
                logger.warning("%s was already written in this run, overwriting", path)
            result.written.append(path)
        return result

    def _check_status(self, response: HttpResponse) -> None:
        if not response.ok:
            raise TransportError(
                f"Expected status 200 but got {response.status}",
                url=response.url,
                status=response.status,
            )

    def _persist(self, response: HttpResponse, gav: Gav) -> Path:
        filename = resolve_filename(self.config.output_filename, response.headers, gav)
        return persist_body(response.body, self.config.output_dir, filename)
