"""Nexus Fetch - Resolve and download Maven artifacts from Nexus.

This package provides the coordinate model, the Nexus REST URL builders and
the resolution strategy that decides between a direct fetch and a search.
"""

__version__ = "0.1.0"

from nexus_fetch.models import (
    FetchConfig,
    FetchResult,
    Fqa,
    Gav,
    NexusInstance,
    NexusRepository,
    SearchResponse,
)

__all__ = [
    "__version__",
    "FetchConfig",
    "FetchResult",
    "Fqa",
    "Gav",
    "NexusInstance",
    "NexusRepository",
    "SearchResponse",
]
