"""Core data models for nexus_fetch.

This module defines the value types used throughout the artifact fetching
workflow: Maven coordinates, Nexus instance and repository addresses,
the projection of a Lucene search response, and the run configuration.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DEFAULT_PACKAGING = "jar"
SNAPSHOT_SUFFIX = "SNAPSHOT"
POM_PACKAGING = "pom"


@dataclass(frozen=True)
class Gav:
    """Immutable Maven coordinate.

    Attributes:
        group: Dotted group namespace (e.g., "org.apache.commons").
        artifact: Artifact name (e.g., "commons-lang3").
        version: Version string, possibly a SNAPSHOT or a keyword like LATEST.
        classifier: Optional classifier (e.g., "sources").
        packaging: Optional packaging/extension (e.g., "war").
    """

    group: str = ""
    artifact: str = ""
    version: str = ""
    classifier: str = ""
    packaging: str = ""

    @classmethod
    def from_concise(cls, text: str) -> "Gav":
        """Parse a coordinate in concise notation.

        The format is ``group:artifact:version[:classifier]@packaging``.
        Fields are assigned by position, so ``g:a`` yields a coordinate with
        only group and artifact set.

        Args:
            text: Coordinate in concise notation.

        Returns:
            The parsed Gav.

        Raises:
            ValueError: If the notation has more than four ``:`` segments.
        """
        packaging = ""
        if "@" in text:
            text, _, packaging = text.partition("@")

        parts = text.split(":")
        if len(parts) > 4:
            raise ValueError(
                f"Invalid concise notation '{text}': expected at most 4 "
                f"':'-separated fields, got {len(parts)}"
            )
        parts += [""] * (4 - len(parts))
        group, artifact, version, classifier = parts
        return cls(group, artifact, version, classifier, packaging)

    def concise_notation(self) -> str:
        """Render this coordinate in concise notation.

        Separators are only written when a later field needs them, so a
        coordinate with just group and artifact renders as ``g:a``.
        """
        out = self.group
        if self.artifact or self.version or self.classifier:
            out += ":" + self.artifact
        if self.version or self.classifier:
            out += ":" + self.version
        if self.classifier:
            out += ":" + self.classifier
        if self.packaging:
            out += "@" + self.packaging
        return out

    def filename(self) -> str:
        """Return the basename of this coordinate in the default layout.

        Packaging defaults to ``jar`` when empty.
        """
        name = f"{self.artifact}-{self.version}"
        if self.classifier:
            name = f"{name}-{self.classifier}"
        return f"{name}.{self.packaging or DEFAULT_PACKAGING}"

    def default_layout(self) -> str:
        """Return the repository-relative path, without a leading slash."""
        return "/".join(
            [
                self.group.replace(".", "/"),
                self.artifact,
                self.version,
                self.filename(),
            ]
        )

    @property
    def is_snapshot(self) -> bool:
        return self.version.endswith(SNAPSHOT_SUFFIX)

    @property
    def is_pom(self) -> bool:
        return self.packaging == POM_PACKAGING

    def __str__(self) -> str:
        return self.concise_notation()


@dataclass(frozen=True)
class NexusInstance:
    """Address and credentials of one Nexus deployment.

    Attributes:
        protocol: URL scheme, usually "http" or "https".
        server: Host name.
        port: Port, kept as a string as given on the command line.
        context_root: Path prefix Nexus is mounted under (e.g., "nexus/").
        username: Optional user passed through as basic auth.
        password: Optional password passed through as basic auth.
    """

    protocol: str = "http"
    server: str = "localhost"
    port: str = "8081"
    context_root: str = "nexus/"
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def base_url(self) -> str:
        """Return the instance base URL, always ending in a single slash."""
        root = self.context_root.strip("/")
        url = f"{self.protocol}://{self.server}:{self.port}/"
        if root:
            url += f"{root}/"
        return url

    @property
    def auth(self) -> Optional[tuple[str, str]]:
        """Return (username, password) when a username is configured."""
        if not self.username:
            return None
        return self.username, self.password or ""


@dataclass(frozen=True)
class NexusRepository:
    """A repository (or group) inside a Nexus instance.

    An empty repository_id means "all repositories" for searches.
    """

    instance: NexusInstance = field(default_factory=NexusInstance)
    repository_id: str = ""


@dataclass(frozen=True)
class Fqa:
    """Fully qualified artifact: a repository address plus a coordinate."""

    repository: NexusRepository
    gav: Gav

    @property
    def repository_id(self) -> str:
        return self.repository.repository_id

    def is_fully_specified(self) -> bool:
        """Check whether this artifact can be fetched without a search.

        Classifier and packaging are never required.

        Returns:
            True if repository id, group, artifact and version are all set.
        """
        return all(
            (
                self.repository_id,
                self.gav.group,
                self.gav.artifact,
                self.gav.version,
            )
        )

    def __str__(self) -> str:
        return f"{self.gav.concise_notation()} [{self.repository_id}]"


@dataclass(frozen=True)
class ArtifactLink:
    """One downloadable file of a search hit."""

    packaging: str = ""
    classifier: str = ""


@dataclass(frozen=True)
class ArtifactHit:
    """The artifact files found in one repository."""

    repository_id: str = ""
    links: tuple[ArtifactLink, ...] = ()


@dataclass(frozen=True)
class ArtifactGroup:
    """A group/artifact/version match with its repository hits."""

    group: str = ""
    artifact: str = ""
    version: str = ""
    hits: tuple[ArtifactHit, ...] = ()


@dataclass(frozen=True)
class SearchResponse:
    """Projection of a Nexus Lucene search response.

    Attributes:
        count: Requested page size, echoed back by the server.
        from_: Requested offset, echoed back by the server.
        total_count: Total number of matches known to the index.
        too_many_results: True if the server truncated the result set.
        artifacts: Matching artifact groups in server order.
    """

    count: int = 0
    from_: int = 0
    total_count: int = 0
    too_many_results: bool = False
    artifacts: tuple[ArtifactGroup, ...] = ()


@dataclass(frozen=True)
class FetchConfig:
    """Run configuration, built once from command-line input.

    Attributes:
        repository: Repository to search or fetch from.
        gav: Requested coordinates, possibly partial.
        fetch: Download content (True) or only resolve and print (False).
        abort_on_not_found: Fail when nothing is found or resolved.
        abort_on_truncated: Fail when the server truncates a search.
        output_dir: Directory downloaded files are written to.
        output_filename: Optional filename overriding all other sources.
        max_results: Optional upper bound on artifacts fetched from a search.
    """

    repository: NexusRepository
    gav: Gav
    fetch: bool = True
    abort_on_not_found: bool = False
    abort_on_truncated: bool = False
    output_dir: Path = Path(".")
    output_filename: str = ""
    max_results: Optional[int] = None

    @property
    def fqa(self) -> Fqa:
        return Fqa(self.repository, self.gav)


@dataclass
class FetchResult:
    """Outcome of one resolution run.

    Attributes:
        mode: "content", "resolve" or "search".
        locations: Artifacts projected from a search (empty otherwise).
        targets: Fetchable search results with the URL chosen for each.
        written: Files written to disk, in fetch order.
        metadata: Resolve response body, printed verbatim by the CLI.
        truncated: True if the search result was truncated by the server.
        not_found: True if a direct fetch or resolve returned 404.
    """

    mode: str
    locations: list[Fqa] = field(default_factory=list)
    targets: list[tuple[Fqa, str]] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    metadata: Optional[str] = None
    truncated: bool = False
    not_found: bool = False
