"""Tests for HTML to Markdown conversion."""

from __future__ import annotations

import pytest

from sift_extract.config import MarkdownConfig
from sift_extract.convert.markdown import convert_to_markdown
from sift_extract.core.errors import ConversionError

BASE = "https://example.com"


def test_relative_link_is_resolved_against_base():
    html = '<p>Read <a href="/docs/intro">the intro</a> first.</p>'

    assert convert_to_markdown(html, BASE) == "Read [the intro](https://example.com/docs/intro) first."


def test_relative_image_is_resolved_against_base():
    html = '<p><img src="img/chart.png" alt="Chart"></p>'

    assert convert_to_markdown(html, BASE) == "![Chart](https://example.com/img/chart.png)"


def test_absolute_and_special_links_are_untouched():
    html = (
        '<p><a href="https://other.org/x">Other</a> '
        '<a href="#notes">Notes</a> '
        '<a href="mailto:desk@example.com">Mail</a></p>'
    )

    markdown = convert_to_markdown(html, BASE)

    assert "[Other](https://other.org/x)" in markdown
    assert "[Notes](#notes)" in markdown
    assert "[Mail](mailto:desk@example.com)" in markdown


def test_protocol_relative_link_takes_base_scheme():
    html = '<p><a href="//cdn.example.net/file.pdf">File</a></p>'

    assert convert_to_markdown(html, BASE) == "[File](https://cdn.example.net/file.pdf)"


def test_empty_base_skips_resolution():
    html = '<p><a href="/docs/intro">Intro</a></p>'

    assert convert_to_markdown(html, "") == "[Intro](/docs/intro)"


def test_resolution_can_be_disabled_in_config():
    html = '<p><a href="/docs/intro">Intro</a></p>'

    assert convert_to_markdown(html, BASE, MarkdownConfig(resolve_links=False)) == "[Intro](/docs/intro)"


def test_block_structure_is_preserved():
    html = (
        "<div><h1>Title</h1><p>First paragraph.</p>"
        "<h2>Section</h2><ul><li>One</li><li>Two</li></ul>"
        "<p><em>Soft</em> and <strong>loud</strong>.</p></div>"
    )

    markdown = convert_to_markdown(html, BASE)

    assert markdown.startswith("# Title\n\nFirst paragraph.")
    assert "## Section" in markdown
    assert "- One\n- Two" in markdown
    assert "*Soft* and **loud**." in markdown
    assert "\n\n\n" not in markdown


def test_scripts_and_styles_are_dropped():
    html = "<div><style>p{color:red}</style><p>Visible</p><script>alert(1)</script></div>"

    assert convert_to_markdown(html, BASE) == "Visible"


def test_paragraph_whitespace_is_collapsed():
    html = "<p>This domain is for use in illustrative examples.\n    You may use it.</p>"

    assert convert_to_markdown(html, BASE) == "This domain is for use in illustrative examples. You may use it."


def test_code_blocks_are_left_verbatim():
    html = "<p>Before</p><pre><code>a\n\n\n\nb   \n</code></pre><p>After\n\n\n   text</p>"

    markdown = convert_to_markdown(html, BASE)

    assert "a\n\n\n\nb   " in markdown
    assert markdown.startswith("Before\n\n```")
    assert markdown.endswith("```\n\nAfter text")


def test_output_is_deterministic():
    html = '<div><h2>News</h2><p>Story with <a href="/a">link</a> and <img src="/i.png" alt="i"></p></div>'

    first = convert_to_markdown(html, BASE)
    second = convert_to_markdown(html, BASE)

    assert first == second


@pytest.mark.parametrize("fragment", [None, 42, b"<p>bytes</p>"])
def test_non_string_fragment_raises(fragment):
    with pytest.raises(ConversionError) as excinfo:
        convert_to_markdown(fragment, BASE)
    assert excinfo.value.stage == "convert"
