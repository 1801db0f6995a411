from __future__ import annotations

import json
import logging
import warnings

import pytest
from pydantic import ValidationError

from catalog import BreadcrumbItem, CatalogStore, FaqItem, Tool, ToolCategory
from generator import SchemaIncompleteWarning, SchemaType, SiteConfig, json_ld_script, serialize_nodes
from generator.schema import (
    article_node,
    blog_collection_node,
    breadcrumb_node,
    clean_text,
    collection_page_node,
    faq_node,
    how_to_node,
    web_application_node,
)


def test_web_application_node_example(site: SiteConfig) -> None:
    tool = Tool(title="JSON Formatter", href="/json-formatter", description="Format JSON.", category="dev-tools")
    node = web_application_node(tool, site)
    data = node.to_json_ld()
    assert data["@context"] == "https://schema.org"
    assert data["@type"] == "WebApplication"
    assert data["name"] == "JSON Formatter"
    assert data["url"] == "https://site.example/json-formatter"
    assert data["offers"]["price"] == "0"
    assert data["offers"]["priceCurrency"] == "USD"


def test_web_application_node_uses_category_name(site: SiteConfig, store: CatalogStore) -> None:
    node = web_application_node(store.get_tool("/pdf-merge"), site, store)
    assert node.properties["applicationSubCategory"] == "PDF Tools"


@pytest.mark.parametrize("n", [1, 2, 5])
def test_breadcrumb_positions_follow_input_order(site: SiteConfig, n: int) -> None:
    # deliberately not a real hierarchy: the generator must not reorder
    items = [BreadcrumbItem(name=f"Level {i}", url=f"/z/{n - i}") for i in range(n)]
    node = breadcrumb_node(items, site)
    elements = node.to_json_ld()["itemListElement"]
    assert [e["position"] for e in elements] == list(range(1, n + 1))
    assert [e["name"] for e in elements] == [i.name for i in items]
    assert all(e["@type"] == "ListItem" for e in elements)
    assert elements[0]["item"] == f"https://site.example/z/{n}"


def test_breadcrumb_keeps_absolute_urls(site: SiteConfig) -> None:
    node = breadcrumb_node([BreadcrumbItem(name="Home", url="https://site.example/")], site)
    assert node.properties["itemListElement"][0]["item"] == "https://site.example"


def test_empty_breadcrumb_is_not_emitted(site: SiteConfig) -> None:
    with pytest.warns(SchemaIncompleteWarning, match="BreadcrumbList"):
        assert breadcrumb_node([], site) is None


def test_faq_node_answers_match_input(site: SiteConfig, store: CatalogStore) -> None:
    category = store.get_category("dev-tools")
    node = faq_node(category, site)
    questions = node.to_json_ld()["mainEntity"]
    assert node.schema_type is SchemaType.FAQ_PAGE
    assert len(questions) == len(category.faqs)
    assert questions[0]["acceptedAnswer"] == {"@type": "Answer", "text": "Yes, every tool is free."}


def test_faq_node_absent_without_entries(site: SiteConfig, store: CatalogStore) -> None:
    with pytest.warns(SchemaIncompleteWarning, match="FAQPage"):
        assert faq_node(store.get_category("pdf"), site) is None


def test_faq_text_is_stripped_of_markup(site: SiteConfig) -> None:
    category = ToolCategory(
        id="x",
        name="X",
        description="d",
        faqs=(FaqItem(question="<b>Free?</b>", answer="<p>Yes, <em>always</em>.</p>"),),
    )
    question = faq_node(category, site).properties["mainEntity"][0]
    assert question["name"] == "Free?"
    assert question["acceptedAnswer"]["text"] == "Yes, always."


def test_how_to_node(site: SiteConfig, store: CatalogStore) -> None:
    node = how_to_node(store.get_tool("/json-formatter"), site)
    steps = node.properties["step"]
    assert [s["position"] for s in steps] == [1, 2, 3]
    assert steps[1]["text"] == "Press Format."
    with pytest.warns(SchemaIncompleteWarning, match="HowTo"):
        assert how_to_node(store.get_tool("/base64"), site) is None


def test_collection_page_lists_tools_in_category_order(site: SiteConfig, store: CatalogStore) -> None:
    node = collection_page_node(store.get_category("dev-tools"), site, store)
    data = node.to_json_ld()
    assert data["@type"] == "CollectionPage"
    assert data["url"] == "https://site.example/category/dev-tools"
    urls = [e["url"] for e in data["mainEntity"]["itemListElement"]]
    assert urls == ["https://site.example/base64", "https://site.example/json-formatter"]


def test_collection_page_without_tools_is_skipped(site: SiteConfig) -> None:
    empty = CatalogStore.build(categories=[ToolCategory(id="e", name="Empty", description="Nothing yet.")])
    with pytest.warns(SchemaIncompleteWarning):
        assert collection_page_node(empty.get_category("e"), site, empty) is None


def test_blog_collection_newest_first(site: SiteConfig, store: CatalogStore) -> None:
    node = blog_collection_node(site, store)
    names = [e["name"] for e in node.properties["mainEntity"]["itemListElement"]]
    assert names == ["Why format JSON?", "Merging PDFs"]


def test_article_node(site: SiteConfig, store: CatalogStore) -> None:
    data = article_node(store.get_post("merging-pdfs"), site, store).to_json_ld()
    assert data["@type"] == "Article"
    assert data["url"] == "https://site.example/blog/merging-pdfs"
    assert data["datePublished"] == "2026-05-02"
    assert data["dateModified"] == "2026-06-10"
    assert data["author"] == {"@type": "Organization", "name": "Site Example"}
    assert data["image"] == "https://site.example/og.png"

    authored = article_node(store.get_post("why-format-json"), site, store).to_json_ld()
    assert authored["author"] == {"@type": "Person", "name": "Ada Writer"}


def test_serialize_drops_skipped_nodes(site: SiteConfig, store: CatalogStore) -> None:
    nodes = [web_application_node(store.get_tool("/base64"), site), None]
    assert [n["@type"] for n in serialize_nodes(nodes)] == ["WebApplication"]


def test_json_ld_script_escapes_closing_tags(site: SiteConfig) -> None:
    tool = Tool(title="X", href="/x", description="d", category="c", keywords=("a</script>",))
    body = json_ld_script([web_application_node(tool, site)])
    assert "</script>" not in body
    data = json.loads(body)
    assert isinstance(data, list)
    assert data[0]["keywords"] == "a</script>"


def test_clean_text() -> None:
    assert clean_text(None) == ""
    assert clean_text("  a \n b ") == "a b"
    assert clean_text("<p>Format <b>JSON</b>.</p>") == "Format JSON."


def test_how_to_skips_blank_steps_without_gaps(site: SiteConfig) -> None:
    tool = Tool(title="T", href="/t", description="d", category="c", steps=("Paste.", "  ", "<p> </p>", "Copy."))
    steps = how_to_node(tool, site).properties["step"]
    assert [(s["position"], s["name"]) for s in steps] == [(1, "Step 1"), (2, "Step 2")]
    assert [s["text"] for s in steps] == ["Paste.", "Copy."]
    assert steps[1]["url"] == "https://site.example/t#step-2"


def test_json_ld_script_is_always_an_array(site: SiteConfig) -> None:
    tool = Tool(title="X", href="/x", description="d", category="c")
    data = json.loads(json_ld_script([web_application_node(tool, site)]))
    assert [n["@type"] for n in data] == ["WebApplication"]
    assert json.loads(json_ld_script([None])) == []


def test_article_url_follows_store_blog_prefix(site: SiteConfig, store: CatalogStore) -> None:
    moved = CatalogStore.build(
        tools=store.tools, categories=store.categories, posts=store.posts, blog_prefix="/articles"
    )
    data = article_node(moved.get_post("merging-pdfs"), site, moved).to_json_ld()
    assert data["url"] == "https://site.example/articles/merging-pdfs"
    assert data["mainEntityOfPage"]["@id"] == data["url"]


@pytest.mark.parametrize(("name", "url"), [("  ", "/x"), ("Home", ""), ("", "")])
def test_breadcrumb_item_requires_name_and_url(name: str, url: str) -> None:
    with pytest.raises(ValidationError):
        BreadcrumbItem(name=name, url=url)


def test_breadcrumb_names_are_stripped_of_markup(site: SiteConfig) -> None:
    node = breadcrumb_node([BreadcrumbItem(name="<b>JSON</b>  Tools", url="/json")], site)
    assert node.properties["itemListElement"][0]["name"] == "JSON Tools"


def test_schema_incomplete_warning_reaches_logging(site: SiteConfig, caplog: pytest.LogCaptureFixture) -> None:
    logging.captureWarnings(True)
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("always")
            with caplog.at_level(logging.WARNING, logger="py.warnings"):
                assert breadcrumb_node([], site) is None
    finally:
        logging.captureWarnings(False)
    assert "SchemaIncompleteWarning" in caplog.text
    assert "BreadcrumbList node skipped for breadcrumb trail" in caplog.text
