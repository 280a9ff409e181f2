"""Per-call state carried through the style pipeline."""

from dataclasses import dataclass
from typing import Optional

from .identifier import StyleIdentifier


@dataclass
class StyleRequest:
    """State of one style lookup; never shared between calls."""
    identifier: Optional[StyleIdentifier] = None
    posted_style: Optional[str] = None
    csl_xml: Optional[str] = None
    hops: int = 0

    @property
    def short_name(self) -> Optional[str]:
        return self.identifier.short_name if self.identifier else None
