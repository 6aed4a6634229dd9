"""Tests for the heading, code-title and highlighting transforms."""

import logging

import pytest
from pygments.token import Comment, Keyword, Name, String, Text

from folio.config.models import HighlightConfig, MarkupConfig
from folio.markup import MarkupCompiler, RenderOptions
from folio.markup.models import Node, code_of, text_content, walk
from folio.markup.slugger import Slugger, slugify
from folio.markup.transforms import REMARK_TRANSFORMS, build_pipeline
from folio.markup.transforms.highlight import token_class


def _compile(body, remark=("autolink-headings", "slug", "code-titles"), rehype=("highlight",), config=None):
    options = RenderOptions(remark_transforms=tuple(remark), rehype_transforms=tuple(rehype))
    return MarkupCompiler(config).compile(body, options)


def _headings(tree):
    return [n for n in walk(tree) if n.tag in ("h1", "h2", "h3", "h4", "h5", "h6")]


def _blocks(tree):
    return [n for n in walk(tree) if code_of(n) is not None]


def _spans(code):
    return [n for n in code.children if n.tag == "span"]


# ---------------------------------------------------------------------------
# Slugger
# ---------------------------------------------------------------------------


class TestSlugger:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("Hello World", "hello-world"),
            ("Hello, World! (2021)", "hello-world-2021"),
            ("  Re-rendering  ", "re-rendering"),
            ("snake_case name", "snake-case-name"),
            ("Ünïcode Héading", "ünïcode-héading"),
            ("???", ""),
        ],
    )
    def test_slugify(self, value, expected):
        assert slugify(value) == expected

    def test_duplicates_are_numbered(self):
        slugger = Slugger()
        assert [slugger.slug("Foo") for _ in range(3)] == ["foo", "foo-1", "foo-2"]

    def test_generated_suffix_does_not_collide(self):
        slugger = Slugger()
        assert slugger.slug("foo-1") == "foo-1"
        assert slugger.slug("foo") == "foo"
        assert slugger.slug("foo") == "foo-2"

    def test_empty_slug_falls_back(self):
        slugger = Slugger()
        assert slugger.slug("!!!") == "section"
        assert slugger.slug("") == "section-1"


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------


class TestHeadings:
    def test_duplicate_headings_get_distinct_ids(self):
        tree = _compile("## Foo\n\ntext\n\n## Foo\n").tree
        assert [h.properties["id"] for h in _headings(tree)] == ["foo", "foo-1"]

    def test_anchor_link_is_prepended(self):
        (h2,) = _headings(_compile("## Getting Started\n").tree)
        anchor = h2.children[0]
        assert anchor.tag == "a"
        assert anchor.properties == {
            "className": ["anchor"],
            "href": "#getting-started",
            "ariaHidden": "true",
            "tabIndex": -1,
        }
        assert anchor.children[0].properties == {"className": ["icon", "icon-link"]}
        assert h2.children[1] == Node(type="text", value="Getting Started")

    def test_ids_do_not_depend_on_transform_order(self):
        body = "# Intro\n\n## Intro\n\n### Details\n"
        forward = _compile(body, remark=("autolink-headings", "slug")).model_dump_json()
        backward = _compile(body, remark=("slug", "autolink-headings")).model_dump_json()
        assert forward == backward

    def test_slug_only(self):
        (h1,) = _headings(_compile("# Title\n", remark=("slug",)).tree)
        assert h1.properties == {"id": "title"}
        assert h1.children == [Node(type="text", value="Title")]

    def test_no_heading_transforms(self):
        (h1,) = _headings(_compile("# Title\n", remark=()).tree)
        assert h1.properties == {}

    def test_running_autolink_twice_adds_one_anchor(self):
        (h1,) = _headings(_compile("# Title\n", remark=("autolink-headings", "autolink-headings")).tree)
        assert [c.tag for c in h1.children] == ["a", None]

    def test_inline_markup_contributes_text(self):
        (h2,) = _headings(_compile("## Using `useMemo` *well*\n").tree)
        assert h2.properties["id"] == "using-usememo-well"


# ---------------------------------------------------------------------------
# Code titles
# ---------------------------------------------------------------------------


class TestCodeTitles:
    def test_language_and_title_are_split(self):
        tree = _compile("```js:example.js\nconst a = 1;\n```\n", rehype=()).tree
        title, pre = tree.children
        assert title.tag == "div"
        assert title.properties == {"className": ["remark-code-title"]}
        assert text_content(title) == "example.js"

        code = code_of(pre)
        assert pre.properties == {"dataTitle": "example.js"}
        assert code.properties == {"className": ["language-js"], "dataTitle": "example.js"}
        assert text_content(code) == "const a = 1;"

    def test_title_survives_highlighting(self):
        tree = _compile("```js:example.js\nconst a = 1;\n```\n").tree
        title, pre = tree.children
        assert text_content(title) == "example.js"
        assert pre.properties["dataTitle"] == "example.js"
        assert pre.properties["className"] == ["language-js"]
        assert _spans(code_of(pre))

    def test_block_without_title_untouched(self):
        tree = _compile("```python\nx = 1\n```\n", rehype=()).tree
        (pre,) = tree.children
        assert pre.properties == {}
        assert code_of(pre).properties == {"className": ["language-python"]}

    def test_empty_title_keeps_language(self):
        tree = _compile("```js:\nx\n```\n", rehype=()).tree
        (pre,) = tree.children
        assert code_of(pre).properties == {"className": ["language-js"]}

    def test_title_inside_component(self):
        body = "<Callout>\n\n```sh:install.sh\nmake\n```\n\n</Callout>\n"
        options = RenderOptions(components={"Callout": object()}, rehype_transforms=())
        tree = MarkupCompiler().compile(body, options).tree
        callout = tree.children[0]
        assert [c.tag for c in callout.children] == ["div", "pre"]

    def test_disabled(self):
        tree = _compile("```js:example.js\nx\n```\n", remark=(), rehype=()).tree
        (pre,) = tree.children
        assert code_of(pre).properties == {"className": ["language-js:example.js"]}


# ---------------------------------------------------------------------------
# Highlighting
# ---------------------------------------------------------------------------


PYTHON_BLOCK = "```python\n# greet\ndef greet():\n    return 'hi'\n```\n"


class TestHighlight:
    def test_token_classes(self):
        assert token_class(Keyword) == "keyword"
        assert token_class(Keyword.Constant) == "boolean"
        assert token_class(String.Double) == "string"
        assert token_class(Comment.Single) == "comment"
        assert token_class(Name.Function) == "function"
        assert token_class(Text) is None

    def test_python_block_is_tokenized(self):
        (pre,) = _compile(PYTHON_BLOCK).tree.children
        code = code_of(pre)
        by_text = {text_content(s): s.properties["className"] for s in _spans(code)}
        assert by_text["def"] == ["token", "keyword"]
        assert by_text["greet"] == ["token", "function"]
        assert by_text["'hi'"] == ["token", "string"]
        assert by_text["# greet"] == ["token", "comment"]
        assert pre.properties["className"] == ["language-python"]

    def test_text_is_preserved(self):
        (pre,) = _compile(PYTHON_BLOCK).tree.children
        assert text_content(pre) == "# greet\ndef greet():\n    return 'hi'"

    def test_unknown_language_left_plain(self):
        (pre,) = _compile("```nosuchlang\nplain text\n```\n").tree.children
        assert code_of(pre).children == [Node(type="text", value="plain text")]
        assert pre.properties == {}

    def test_no_language_left_plain(self):
        (pre,) = _compile("```\nplain text\n```\n").tree.children
        assert code_of(pre).children == [Node(type="text", value="plain text")]

    def test_skip_languages(self):
        config = MarkupConfig(highlight=HighlightConfig(skip_languages=["python"]))
        (pre,) = _compile(PYTHON_BLOCK, config=config).tree.children
        assert _spans(code_of(pre)) == []

    def test_inline_code_not_highlighted(self):
        tree = _compile("Call `def greet()` here.\n").tree
        assert not any(n.tag == "span" for n in walk(tree))

    def test_lexer_failure_degrades_to_plain_block(self, monkeypatch, caplog):
        class BrokenLexer:
            def get_tokens(self, source):
                raise RuntimeError("lexer exploded")

        monkeypatch.setattr("folio.markup.transforms.highlight._lexer_for", lambda language: BrokenLexer())
        with caplog.at_level(logging.WARNING):
            (pre,) = _compile(PYTHON_BLOCK).tree.children

        assert code_of(pre).children == [Node(type="text", value="# greet\ndef greet():\n    return 'hi'")]
        assert "Highlighting 'python' failed: lexer exploded" in caplog.text

    def test_highlight_disabled(self):
        (pre,) = _compile(PYTHON_BLOCK, rehype=()).tree.children
        assert _spans(code_of(pre)) == []


class TestBuildPipeline:
    def test_preserves_order(self):
        pipeline = build_pipeline(["code-titles", "slug"], REMARK_TRANSFORMS)
        assert [t.name for t in pipeline.transforms] == ["code-titles", "slug"]

    def test_rejects_unknown_names(self):
        with pytest.raises(ValueError, match="emoji"):
            build_pipeline(["slug", "emoji"], REMARK_TRANSFORMS)

    def test_empty(self):
        assert build_pipeline([], REMARK_TRANSFORMS).transforms == []
