"""Tests for the markup walker (MarkupReader) and load summaries.

Python 3.13+.
"""

from __future__ import annotations

from xml.sax.saxutils import escape

import pytest
from hypothesis import given
from hypothesis import strategies as st

from phrasebook.catalog import Catalog, MessageNode
from phrasebook.diagnostics import (
    DiagnosticCode,
    IncludeDepthExceededError,
    MarkupError,
    SourceError,
    TranslatorError,
)
from phrasebook.loading import LoadSummary, MarkupReader, SearchPathResourceLoader
from tests.helpers.loaders import DictResourceLoader, document, include, message
from tests.strategies import tag_paths

# XML-safe, backslash-free, no edge whitespace
_XML_TEXT = (
    st.text(
        alphabet=st.characters(categories=("L", "N", "P", "S", "Zs"), exclude_characters="\\"),
        min_size=1,
        max_size=20,
    )
    .map(str.strip)
    .filter(bool)
)


def _read(documents: dict[str, str], root: str = "main.xml", **kwargs: int) -> tuple[
    tuple[MessageNode, ...], LoadSummary
]:
    return MarkupReader(DictResourceLoader(documents), **kwargs).read(root)


def _code(exc_info: pytest.ExceptionInfo[TranslatorError]) -> DiagnosticCode:
    diagnostic = exc_info.value.diagnostic
    assert diagnostic is not None
    return diagnostic.code


class TestMessages:
    def test_document_order(self) -> None:
        nodes, _ = _read(
            {"main.xml": document(message("one", zh="一"), message("two", zh="二"))}
        )
        assert [node.source for node in nodes] == ["one", "two"]

    def test_raw_text_is_not_normalized(self) -> None:
        nodes, _ = _read(
            {
                "main.xml": "<translator><message>\n  <from>\n    hi\n  </from>"
                "<to><zh_CN>\n    你好\n  </zh_CN></to></message></translator>"
            }
        )
        assert nodes == (
            MessageNode("\n    hi\n  ", (("zh_CN", "\n    你好\n  "),), origin="main.xml"),
        )

    def test_translation_labels_in_document_order(self) -> None:
        nodes, _ = _read({"main.xml": document(message("hi", zh_CN="A", en="B", **{"zh-TW": "C"}))})
        assert [label for label, _ in nodes[0].translations] == ["zh_CN", "en", "zh-TW"]

    def test_nested_markup_text_concatenated(self) -> None:
        nodes, _ = _read(
            {
                "main.xml": "<translator><message><from>Hello, <b>Sauntor</b>!</from>"
                "<to><zh>你好，<b>适然</b>！</zh></to></message></translator>"
            }
        )
        assert nodes[0].source == "Hello, Sauntor!"
        assert nodes[0].translations == (("zh", "你好，适然！"),)

    def test_multiple_from_and_to_elements_collected(self) -> None:
        nodes, _ = _read(
            {
                "main.xml": "<translator><message><from>Hello, </from><from>world</from>"
                "<to><zh>你好</zh></to><to><de>Hallo</de></to></message></translator>"
            }
        )
        assert nodes[0].source == "Hello, world"
        assert nodes[0].translations == (("zh", "你好"), ("de", "Hallo"))

    def test_message_without_to(self) -> None:
        nodes, _ = _read({"main.xml": "<translator><message><from>hi</from></message></translator>"})
        assert nodes == (MessageNode("hi", (), origin="main.xml"),)

    def test_namespaced_elements(self) -> None:
        nodes, _ = _read(
            {
                "main.xml": '<t:translator xmlns:t="urn:phrasebook"><t:message>'
                "<t:from>hi</t:from><t:to><t:zh>你好</t:zh></t:to>"
                "</t:message></t:translator>"
            }
        )
        assert nodes[0].source == "hi"
        assert nodes[0].translations == (("zh", "你好"),)

    def test_comments_ignored(self) -> None:
        nodes, _ = _read({"main.xml": document("<!-- note -->", message("hi", zh="你好"))})
        assert len(nodes) == 1


class TestIncludes:
    def test_included_messages_spliced_at_include_point(self) -> None:
        nodes, summary = _read(
            {
                "main.xml": document(
                    message("before"), include("common.xml"), message("after")
                ),
                "common.xml": document(message("common-1"), message("common-2")),
            }
        )
        assert [node.source for node in nodes] == ["before", "common-1", "common-2", "after"]
        assert [node.origin for node in nodes] == [
            "main.xml",
            "common.xml",
            "common.xml",
            "main.xml",
        ]
        assert summary.sources == ("main.xml", "common.xml")

    def test_include_text_is_stripped(self) -> None:
        nodes, _ = _read(
            {
                "main.xml": document("<include>\n    common.xml\n  </include>"),
                "common.xml": document(message("common")),
            }
        )
        assert [node.source for node in nodes] == ["common"]

    def test_empty_include_skipped(self) -> None:
        nodes, summary = _read({"main.xml": document("<include>  </include>", message("hi"))})
        assert [node.source for node in nodes] == ["hi"]
        assert summary.total_documents == 1

    def test_nested_includes(self) -> None:
        nodes, summary = _read(
            {
                "main.xml": document(include("a.xml"), message("main")),
                "a.xml": document(message("a"), include("b.xml")),
                "b.xml": document(message("b")),
            }
        )
        assert [node.source for node in nodes] == ["a", "b", "main"]
        assert summary.max_include_depth == 2
        assert [r.include_depth for r in summary.results] == [0, 1, 2]

    def test_same_document_included_twice(self) -> None:
        nodes, summary = _read(
            {
                "main.xml": document(include("common.xml"), include("common.xml")),
                "common.xml": document(message("common")),
            }
        )
        assert [node.source for node in nodes] == ["common", "common"]
        assert summary.total_documents == 3

    def test_self_include_is_a_cycle(self) -> None:
        with pytest.raises(MarkupError) as exc_info:
            _read({"main.xml": document(include("main.xml"))})
        assert _code(exc_info) == DiagnosticCode.INCLUDE_CYCLE

    def test_indirect_cycle(self) -> None:
        with pytest.raises(MarkupError) as exc_info:
            _read(
                {
                    "main.xml": document(include("a.xml")),
                    "a.xml": document(include("b.xml")),
                    "b.xml": document(include("main.xml")),
                }
            )
        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code == DiagnosticCode.INCLUDE_CYCLE
        assert diagnostic.source == "b.xml"
        assert diagnostic.include_chain == ("main.xml", "a.xml")

    def test_depth_limit(self) -> None:
        documents = {
            f"{n}.xml": document(message(str(n)), include(f"{n + 1}.xml")) for n in range(5)
        }
        documents["5.xml"] = document(message("5"))
        with pytest.raises(IncludeDepthExceededError) as exc_info:
            _read(documents, root="0.xml", max_include_depth=3)
        assert _code(exc_info) == DiagnosticCode.INCLUDE_DEPTH_EXCEEDED

    def test_depth_limit_not_reached(self) -> None:
        documents = {
            "0.xml": document(include("1.xml")),
            "1.xml": document(include("2.xml")),
            "2.xml": document(message("deep")),
        }
        nodes, summary = _read(documents, root="0.xml", max_include_depth=2)
        assert [node.source for node in nodes] == ["deep"]
        assert summary.max_include_depth == 2

    def test_missing_include_reports_chain(self) -> None:
        with pytest.raises(SourceError) as exc_info:
            _read({"main.xml": document(include("missing.xml"))})
        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code == DiagnosticCode.SOURCE_NOT_FOUND
        assert diagnostic.include_chain == ("main.xml",)
        assert "included from: main.xml" in str(exc_info.value)

    def test_missing_root_has_no_chain(self) -> None:
        with pytest.raises(SourceError) as exc_info:
            _read({}, root="main.xml")
        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.include_chain is None


class TestMalformedDocuments:
    def test_invalid_xml(self) -> None:
        with pytest.raises(MarkupError) as exc_info:
            _read({"main.xml": "<translator><message></translator>"})
        assert _code(exc_info) == DiagnosticCode.INVALID_MARKUP
        assert "line 1" in str(exc_info.value)

    def test_unexpected_root(self) -> None:
        with pytest.raises(MarkupError) as exc_info:
            _read({"main.xml": "<messages/>"})
        assert _code(exc_info) == DiagnosticCode.UNEXPECTED_ROOT

    def test_unknown_element(self) -> None:
        with pytest.raises(MarkupError) as exc_info:
            _read({"main.xml": document("<note>hi</note>")})
        assert _code(exc_info) == DiagnosticCode.UNKNOWN_ELEMENT
        assert "<note>" in str(exc_info.value)

    def test_error_in_included_document(self) -> None:
        with pytest.raises(MarkupError) as exc_info:
            _read(
                {
                    "main.xml": document(include("broken.xml")),
                    "broken.xml": "<translator>",
                }
            )
        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.source == "broken.xml"
        assert diagnostic.include_chain == ("main.xml",)


class TestLoadSummary:
    def test_counts(self) -> None:
        _, summary = _read(
            {
                "main.xml": document(message("a"), include("common.xml"), message("b")),
                "common.xml": document(message("c")),
            }
        )
        assert summary.total_documents == 2
        assert summary.total_messages == 3
        assert [r.message_count for r in summary.results] == [2, 1]
        assert [r.source for r in summary.get_included()] == ["common.xml"]
        assert summary.results[0].source_path == "memory:main.xml"
        assert repr(summary) == "LoadSummary(documents=2, messages=3, max_depth=1)"

    def test_empty_summary(self) -> None:
        summary = LoadSummary(results=())
        assert summary.total_documents == 0
        assert summary.max_include_depth == 0
        assert summary.get_included() == ()


class TestShippedResources:
    def test_reads_resources_with_include(
        self, resources_loader: SearchPathResourceLoader
    ) -> None:
        nodes, summary = MarkupReader(resources_loader).read("cp://l10n/translator.xml")
        assert len(nodes) == 4
        assert summary.sources == ("cp://l10n/translator.xml", "l10n/included.xml")
        assert nodes[2].origin == "l10n/included.xml"


def _render(source: str, translations: dict[tuple[str, ...], str]) -> str:
    """Render a message the way hand-written documents indent it."""
    to = "".join(
        f"\n      <{'_'.join(path)}>\n        {escape(text)}\n      </{'_'.join(path)}>"
        for path, text in translations.items()
    )
    return f"\n  <message>\n    <from>\n      {escape(source)}\n    </from>\n    <to>{to}\n    </to>\n  </message>"


class TestDocumentProperties:
    @pytest.mark.fuzz
    @given(
        entries=st.lists(
            st.tuples(_XML_TEXT, st.dictionaries(tag_paths(), _XML_TEXT, max_size=3)),
            min_size=1,
            max_size=5,
        )
    )
    def test_indented_documents_read_back_exactly(
        self, entries: list[tuple[str, dict[tuple[str, ...], str]]]
    ) -> None:
        body = "".join(_render(source, translations) for source, translations in entries)
        nodes, _ = _read({"main.xml": document(body)})
        catalog = Catalog.from_nodes(nodes)
        assert [(m.source, dict(m.translations)) for m in catalog] == entries
