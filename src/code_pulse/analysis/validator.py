"""Repository URL validation."""

import re
from urllib.parse import urlsplit

from ..exceptions import ValidationError
from ..models.commit import RepositoryRef

GITHUB_HOST = "github.com"

_OWNER_RE = re.compile(r"^[A-Za-z0-9-]+$")
_NAME_RE = re.compile(r"^[A-Za-z0-9._-]+$")


def parse_repository_url(url: str) -> RepositoryRef:
    """Extract the owner and name from a GitHub repository URL.

    Only the first two path segments are used; anything after them
    (``/tree/main``, a trailing slash, ...) is ignored.

    Args:
        url: Absolute URL such as ``https://github.com/octocat/hello-world``

    Returns:
        RepositoryRef for the repository

    Raises:
        ValidationError: If the URL is malformed, not on github.com, or
            lacks an owner/name path
    """
    if not isinstance(url, str):
        raise ValidationError()

    try:
        parts = urlsplit(url.strip())
        host = parts.hostname
    except ValueError:
        raise ValidationError()

    if parts.scheme not in ("http", "https") or not host or host.lower() != GITHUB_HOST:
        raise ValidationError()

    segments = [segment for segment in parts.path.split("/") if segment]
    if len(segments) < 2:
        raise ValidationError("Invalid GitHub repository URL path.")

    owner, name = segments[0], segments[1]
    if not _OWNER_RE.match(owner) or not _NAME_RE.match(name):
        raise ValidationError()

    return RepositoryRef(owner=owner, name=name)
