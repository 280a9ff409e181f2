"""Turns a style string (short name or URL) into a StyleIdentifier."""
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from common.config import Config
from common.errors import InvalidIdentifier
from common.logging import logger


@dataclass(frozen=True)
class StyleIdentifier:
    """Structured form of a style reference"""
    host: str
    path: str
    short_name: str

    @property
    def url(self) -> str:
        if not self.host:
            return self.path
        return f"http://{self.host}{self.path}"


def canonical_style_url(short_name: str, host: Optional[str] = None) -> str:
    host = (host or Config.STYLE_HOST).lower()
    return f"http://{host}{Config.STYLE_PATH_PREFIX}{short_name}"


def normalize_style_identifier(style: str, host: Optional[str] = None) -> StyleIdentifier:
    """
    Parse a style string into a StyleIdentifier.

    Args:
        style: Short name (``apa``) or URL (``http://www.zotero.org/styles/apa``)
        host: Canonical style host, defaults to Config.STYLE_HOST

    Returns:
        StyleIdentifier for the style

    Raises:
        InvalidIdentifier: empty input, or a canonical-host URL outside /styles/
    """
    host = (host or Config.STYLE_HOST).lower()
    prefix = Config.STYLE_PATH_PREFIX

    if style is None or not style.strip():
        raise InvalidIdentifier("Empty style identifier")

    try:
        parts = urlsplit(style)
    except ValueError as e:
        raise InvalidIdentifier(f"Invalid style identifier: {style}", cause=e) from e

    if not parts.hostname:
        logger.debug(f"Style given as short name only: {style}")
        return StyleIdentifier(host=host, path=prefix + style, short_name=style)

    netloc = parts.netloc.lower()
    if netloc == host:
        logger.debug(f"Style given as a {host} URL: {style}")
        if not parts.path.startswith(prefix):
            raise InvalidIdentifier(f"Invalid {host} URL for style: {style}")
        return StyleIdentifier(host=netloc, path=parts.path,
                               short_name=parts.path[len(prefix):])

    # Unreliable: the prefix is not checked, so paths outside /styles/ yield
    # a truncated short name.
    logger.warning(f"Style given with non-canonical host {netloc}: {style}")
    return StyleIdentifier(host=netloc, path=parts.path,
                           short_name=parts.path[len(prefix):])
