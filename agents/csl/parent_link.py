# agents/csl/parent_link.py

import re
from typing import Optional

from bs4 import BeautifulSoup

from common.logging import logger

INDEPENDENT_PARENT_REL = "independent-parent"

_DECLARATION_RE = re.compile(r"\s*<\?[^>]*\?>\s*\n*")
_STYLE_OPEN_RE = re.compile(r"<style(?=[\s>/])")


def prepare_dependent_xml(xml: str) -> str:
    """Strip <?...?> declarations and rename the root <style> element.

    html.parser treats <style> as raw text, which would hide the <link>
    elements inside a CSL document.
    """
    xml = _DECLARATION_RE.sub("", xml)
    xml = _STYLE_OPEN_RE.sub("<cslstyle", xml, count=1)
    xml = xml.replace("</style", "</cslstyle", 1)
    return xml.strip()


def extract_parent_link(xml: str) -> Optional[str]:
    """Return the href of the first <link rel="independent-parent">, or None."""
    if not xml:
        return None

    soup = BeautifulSoup(prepare_dependent_xml(xml), "html.parser",
                         multi_valued_attributes=None)
    for link in soup.find_all("link"):
        rel = link.get("rel")
        logger.debug(f"link rel={rel}")
        if rel != INDEPENDENT_PARENT_REL:
            continue
        href = link.get("href")
        if href:
            logger.debug(f"independent-parent found: {href}")
            return href
    return None
