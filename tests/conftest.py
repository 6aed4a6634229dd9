"""Shared test fixtures for Folio."""

import logging

import pytest

from folio.config.models import ContentConfig, FolioConfig
from folio.pipeline import ContentPipeline


HELLO_WORLD = """\
---
title: Hello World
summary: First post on the new site
publishedAt: 2021-03-04
tags: [intro, meta]
---

# Hello World

This is the first post.

```js:example.js
const answer = 42;
```

<Callout kind="tip">
Components can wrap **markdown**.
</Callout>
"""

CONTEXT_API = """\
---
title: The most important thing about Context Api
publishedAt: 2021-05-10
---

## Re-rendering

Context consumers re-render when the value changes.

## Re-rendering

Memoize the value.
"""

ABOUT = """\
---
title: About
---

I'm a front end developer.
"""


class Callout:
    def render(self, props, children):
        return f'<aside class="callout callout-{props.get("kind", "note")}">{children}</aside>'


class YouTube:
    def render(self, props, children):
        return f'<iframe src="https://www.youtube.com/embed/{props["id"]}"></iframe>'


@pytest.fixture(autouse=True)
def _reset_folio_logger():
    """The CLI installs its own handler on the ``folio`` logger; undo that between tests."""
    yield
    logger = logging.getLogger("folio")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def components():
    return {"Callout": Callout(), "YouTube": YouTube()}


@pytest.fixture
def content_root(tmp_path):
    """A site root with two blog posts and an about singleton page."""
    root = tmp_path / "site"
    blog = root / "data" / "blog"
    blog.mkdir(parents=True)
    (blog / "hello-world.mdx").write_text(HELLO_WORLD, encoding="utf-8")
    (blog / "context-api.mdx").write_text(CONTEXT_API, encoding="utf-8")
    (root / "data" / "about.mdx").write_text(ABOUT, encoding="utf-8")
    return root


@pytest.fixture
def config(content_root):
    return FolioConfig(content=ContentConfig(root_dir=str(content_root)))


@pytest.fixture
def pipeline(config, components):
    return ContentPipeline(config, components)
