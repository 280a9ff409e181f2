import os
import tempfile

import pytest

os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "csl-styles-test-logs"))

from agents.csl.pipeline import StylePipeline  # noqa: E402
from agents.csl.registry import load_style_registry  # noqa: E402
from agents.csl.storage import StyleStore  # noqa: E402
from tests.styles import MLA_XML, dependent_xml  # noqa: E402


class CountingStore(StyleStore):
    """StyleStore that records every file read."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.reads = []

    async def read_independent(self, short_name):
        self.reads.append(("independent", short_name))
        return await super().read_independent(short_name)

    async def read_dependent(self, short_name):
        self.reads.append(("dependent", short_name))
        return await super().read_dependent(short_name)


@pytest.fixture
def csl_dir(tmp_path):
    """A style tree with one independent style and a few dependents."""
    root = tmp_path / "csl"
    dependent = root / "dependent"
    dependent.mkdir(parents=True)

    (root / "mla.csl").write_text(MLA_XML, encoding="utf-8")
    (root / "apa.csl").write_bytes(b"<style>\r\n  apa with CRLF\r\n</style>\r\n")
    (root / "README.md").write_text("not a style")

    (dependent / "mla-variant.csl").write_text(dependent_xml("mla"))
    (dependent / "mla-url.csl").write_text(dependent_xml("http://www.zotero.org/styles/mla"))
    (dependent / "mla-grandchild.csl").write_text(dependent_xml("mla-variant"))
    (dependent / "orphan.csl").write_text(dependent_xml("mla", rel="template"))
    (dependent / "bad-parent.csl").write_text(dependent_xml("http://www.zotero.org/other/mla"))
    (dependent / "cycle-a.csl").write_text(dependent_xml("cycle-b"))
    (dependent / "cycle-b.csl").write_text(dependent_xml("cycle-a"))
    (dependent / "offsite.csl").write_text(dependent_xml("http://styles.example.org/styles/mla"))
    return root


@pytest.fixture
def store(csl_dir):
    return CountingStore(str(csl_dir))


@pytest.fixture
def registry(store):
    return load_style_registry(store)


@pytest.fixture
def pipeline(registry, store):
    return StylePipeline(registry, store, host="www.zotero.org", max_hops=8)
