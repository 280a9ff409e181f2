"""End-to-end tests for agents.csl.pipeline."""
import asyncio

import pytest

from agents.csl.pipeline import build_pipeline
from agents.csl.registry import StyleKind
from common.errors import (
    DependentResolutionError,
    InternalFallthrough,
    InvalidIdentifier,
    RegistryLoadError,
    StyleNotFound,
    UnsupportedSource,
)

from tests.styles import MLA_XML


class TestRun:
    def test_dependent_resolves_to_parent_content(self, pipeline, store):
        request = asyncio.run(pipeline.run("mla-variant"))
        assert request.short_name == "mla"
        assert request.csl_xml == MLA_XML
        assert store.reads == [("dependent", "mla-variant"), ("independent", "mla")]

    def test_canonical_url(self, pipeline):
        request = asyncio.run(pipeline.run("http://www.zotero.org/styles/mla-variant"))
        assert request.csl_xml == MLA_XML

    def test_uppercase_canonical_host(self, pipeline):
        request = asyncio.run(pipeline.run("http://WWW.ZOTERO.ORG/styles/mla"))
        assert request.identifier.host == "www.zotero.org"
        assert request.csl_xml == MLA_XML

    def test_repeat_uses_memoized_parent(self, pipeline, store, registry):
        asyncio.run(pipeline.run("mla-variant"))
        asyncio.run(pipeline.run("mla-variant"))
        assert store.reads.count(("dependent", "mla-variant")) == 1
        assert registry.lookup("mla-variant").kind is StyleKind.RESOLVED

    def test_multi_hop_chain(self, pipeline):
        assert asyncio.run(pipeline.run("mla-grandchild")).csl_xml == MLA_XML

    def test_single_step_stops_at_dependent(self, pipeline):
        with pytest.raises(InternalFallthrough):
            asyncio.run(pipeline.run("mla-grandchild", full=False))

    def test_posted_style_skips_resolution(self, pipeline, store):
        request = asyncio.run(pipeline.run("no-such-style", posted_style="<style/>"))
        assert request.csl_xml == "<style/>"
        assert store.reads == []

    def test_posted_style_without_style(self, pipeline):
        assert asyncio.run(pipeline.run("", posted_style="<style/>")).csl_xml == "<style/>"

    def test_unknown_style_aborts_before_fetch(self, pipeline, store):
        with pytest.raises(StyleNotFound):
            asyncio.run(pipeline.run("no-such-style"))
        assert store.reads == []

    def test_resolution_error_aborts_before_fetch(self, pipeline, store):
        with pytest.raises(DependentResolutionError):
            asyncio.run(pipeline.run("orphan"))
        assert store.reads == [("dependent", "orphan")]

    def test_invalid_identifier(self, pipeline):
        with pytest.raises(InvalidIdentifier):
            asyncio.run(pipeline.run("http://www.zotero.org/bad/mla"))

    def test_offsite_style(self, pipeline):
        with pytest.raises(UnsupportedSource):
            asyncio.run(pipeline.run("offsite"))


class TestResolve:
    def test_resolve_does_not_fetch(self, pipeline, store):
        request = asyncio.run(pipeline.resolve("mla-variant"))
        assert request.short_name == "mla"
        assert request.csl_xml is None
        assert store.reads == [("dependent", "mla-variant")]

    def test_resolve_single_step(self, pipeline):
        request = asyncio.run(pipeline.resolve("mla-grandchild", full=False))
        assert request.short_name == "mla-variant"
        assert request.hops == 1


class TestBuildPipeline:
    def test_builds_from_directory(self, csl_dir):
        pipeline = build_pipeline(str(csl_dir), host="www.zotero.org")
        assert "mla" in pipeline.registry.independent_names
        assert asyncio.run(pipeline.run("mla-url")).csl_xml == MLA_XML

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RegistryLoadError):
            build_pipeline(str(tmp_path / "missing"))
