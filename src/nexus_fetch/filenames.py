"""Output filename selection for downloaded artifacts."""

import logging
import re
from collections.abc import Mapping
from pathlib import PurePosixPath
from typing import Optional

from nexus_fetch.models import Gav

logger = logging.getLogger(__name__)

# e.g. attachment; filename="helloworld-1.0.0-20180312.173914-4.jar"
CONTENT_DISPOSITION_RE = re.compile(r'attachment; filename="([^"]*)"')


def content_disposition_filename(value: Optional[str]) -> Optional[str]:
    """Extract the filename from a Content-Disposition header value.

    Args:
        value: Raw header value, or None if the header was absent.

    Returns:
        The advertised filename, or None if the header is absent, does not
        have the ``attachment; filename="..."`` form, or names nothing.
    """
    if not value:
        return None
    match = CONTENT_DISPOSITION_RE.search(value)
    if match is None:
        logger.debug("Ignoring unrecognized Content-Disposition: %s", value)
        return None
    # Never let the server pick a directory.
    return PurePosixPath(match.group(1)).name or None


def resolve_filename(
    user_supplied: Optional[str],
    headers: Mapping[str, str],
    gav: Gav,
) -> str:
    """Pick the output filename for a downloaded artifact.

    Precedence: user supplied name, then the server's Content-Disposition
    filename, then the coordinate's default filename.

    Args:
        user_supplied: Filename given on the command line, may be empty.
        headers: Response headers of the download (case-insensitive mapping).
        gav: Coordinate of the downloaded artifact.

    Returns:
        The filename to write the body to.
    """
    if user_supplied:
        return user_supplied
    advertised = content_disposition_filename(headers.get("Content-Disposition"))
    if advertised:
        return advertised
    return gav.filename()
