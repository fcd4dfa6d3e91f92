# File: tests/test_template.py
import pytest

from website2pdf.template import interpolate


def test_substitutes_known_key():
    assert interpolate("Page {{title}}", {"title": "Home"}) == "Page Home"


def test_missing_key_is_empty():
    assert interpolate("{{missing}}", {}) == ""


def test_whitespace_inside_braces():
    assert interpolate("<b>{{ title }}</b>", {"title": "Home"}) == "<b>Home</b>"


def test_meta_names_with_punctuation():
    metadata = {"og:title": "OG", "article.section": "News", "theme-color": "#fff"}
    template = "{{og:title}}|{{article.section}}|{{theme-color}}"
    assert interpolate(template, metadata) == "OG|News|#fff"


def test_repeated_placeholders():
    assert interpolate("{{a}}-{{a}}-{{b}}", {"a": "1"}) == "1-1-"


@pytest.mark.parametrize("token", ["{{pageNumber}}", "{{totalPages}}", "{{ pageNumber }}"])
def test_page_tokens_pass_through(token):
    assert interpolate(f"p. {token}", {"pageNumber": "9"}) == f"p. {token}"


def test_chromium_markup_untouched():
    template = '<span class="pageNumber"></span>/<span class="totalPages"></span> {{title}}'
    assert interpolate(template, {"title": "T"}) == (
        '<span class="pageNumber"></span>/<span class="totalPages"></span> T'
    )


@pytest.mark.parametrize("template", ["", "no placeholders", "{single}", "{{ }}", "{{a b}}"])
def test_non_placeholders_untouched(template):
    assert interpolate(template, {"a": "x"}) == template


def test_does_not_mutate_metadata():
    metadata = {"title": "Home"}
    interpolate("{{title}}{{other}}", metadata)
    assert metadata == {"title": "Home"}
