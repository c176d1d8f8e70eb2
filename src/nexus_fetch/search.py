"""Lucene search response parsing and projection.

Nexus answers a search with a ``searchNGResponse`` document listing the
matching group/artifact/version triples. Each triple has one hit per
repository it was found in, and each hit links to the individual files
(packaging plus classifier). This module turns that document into a
SearchResponse and flattens it into one Fqa per downloadable file.
"""

import logging
import xml.etree.ElementTree as ET

from nexus_fetch.exceptions import MalformedResponseError
from nexus_fetch.models import (
    ArtifactGroup,
    ArtifactHit,
    ArtifactLink,
    Fqa,
    Gav,
    NexusInstance,
    NexusRepository,
    SearchResponse,
)

logger = logging.getLogger(__name__)


def _text(element: ET.Element, path: str) -> str:
    value = element.findtext(path)
    return value.strip() if value else ""


def _int(element: ET.Element, path: str) -> int:
    value = _text(element, path)
    if not value:
        return 0
    try:
        return int(value)
    except ValueError as e:
        raise MalformedResponseError(
            f"Expected an integer in <{path}>", details=repr(value)
        ) from e


def _bool(element: ET.Element, path: str) -> bool:
    value = _text(element, path).lower()
    if value in ("", "false", "0"):
        return False
    if value in ("true", "1"):
        return True
    raise MalformedResponseError(f"Expected a boolean in <{path}>", details=repr(value))


def _parse_hit(element: ET.Element) -> ArtifactHit:
    links = tuple(
        ArtifactLink(
            packaging=_text(link, "extension"),
            classifier=_text(link, "classifier"),
        )
        for link in element.iterfind("artifactLinks/artifactLink")
    )
    return ArtifactHit(repository_id=_text(element, "repositoryId"), links=links)


def _parse_artifact(element: ET.Element) -> ArtifactGroup:
    return ArtifactGroup(
        group=_text(element, "groupId"),
        artifact=_text(element, "artifactId"),
        version=_text(element, "version"),
        hits=tuple(
            _parse_hit(hit) for hit in element.iterfind("artifactHits/artifactHit")
        ),
    )


def parse_search_response(body: str) -> SearchResponse:
    """Parse a Lucene search response body.

    Missing elements take their empty value (``""``, 0 or False).

    Args:
        body: XML document returned by the search endpoint.

    Returns:
        The parsed SearchResponse.

    Raises:
        MalformedResponseError: If the body is not XML or a count or flag
            element holds an unexpected value.
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise MalformedResponseError("Search response is not valid XML", details=str(e)) from e

    response = SearchResponse(
        count=_int(root, "count"),
        from_=_int(root, "from"),
        total_count=_int(root, "totalCount"),
        too_many_results=_bool(root, "tooManyResults"),
        artifacts=tuple(_parse_artifact(a) for a in root.iterfind("data/artifact")),
    )
    logger.debug(
        "Search returns count=%d, total count=%d, overflow=%s, artifacts=%d",
        response.count,
        response.total_count,
        response.too_many_results,
        len(response.artifacts),
    )
    return response


def project_locations(response: SearchResponse, instance: NexusInstance) -> list[Fqa]:
    """Flatten a search response into one Fqa per artifact file.

    Order follows the response: artifact groups, then repository hits, then
    links. Groups without hits, or hits without links, contribute nothing.

    Args:
        response: Parsed search response.
        instance: The Nexus instance the search was sent to.

    Returns:
        Fully qualified artifacts, including POMs.
    """
    locations = []
    for group in response.artifacts:
        for hit in group.hits:
            repository = NexusRepository(instance, hit.repository_id)
            for link in hit.links:
                gav = Gav(
                    group=group.group,
                    artifact=group.artifact,
                    version=group.version,
                    classifier=link.classifier,
                    packaging=link.packaging,
                )
                locations.append(Fqa(repository, gav))
    return locations


def fetchable(locations: list[Fqa]) -> list[Fqa]:
    """Drop POM descriptors, which describe an artifact but are not one."""
    return [fqa for fqa in locations if not fqa.gav.is_pom]
