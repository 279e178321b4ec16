import pytest

from snippad.highlight import THEMES, HighlightError, Markup, Segment, render_css, tokenize_css
from snippad.params import BorderRadiusParams, BoxShadowParams
from snippad.snippet_format import to_raw_snippet, to_utility_snippet


def _styles(segments):
    return [(seg.text, seg.style) for seg in segments if seg.style]


@pytest.mark.parametrize(
    "code",
    [
        to_raw_snippet(BorderRadiusParams()),
        to_utility_snippet(BorderRadiusParams()),
        to_raw_snippet(BoxShadowParams(inset=True)),
        to_utility_snippet(BoxShadowParams(inset=True)),
        "/* note */ a { color: #fff; content: 'x'; }",
        "",
    ],
)
def test_tokenize_preserves_text(code):
    assert "".join(seg.text for seg in tokenize_css(code)) == code


def test_tokenize_classifies_rule_parts():
    styles = _styles(tokenize_css(".border-radius {\n  border-radius: 10px 2px;\n}"))

    assert styles[0] == (".border-radius", "selector")
    assert ("border-radius", "property") in styles
    assert ("10", "number") in styles
    assert ("px", "unit") in styles
    assert (";", "punctuation") in styles


def test_tokenize_marks_functions_keywords_and_utilities():
    raw = _styles(tokenize_css(to_raw_snippet(BoxShadowParams(inset=True))))
    utility = _styles(tokenize_css(to_utility_snippet(BoxShadowParams())))

    assert ("-webkit-box-shadow", "property") in raw
    assert ("inset", "keyword") in raw
    assert ("rgba", "function") in raw
    assert ("@apply", "at_rule") in utility
    assert ("shadow-[10px_10px_10px_0px_rgba(79,70,229,1)]", "utility") in utility


def test_render_css_returns_markup_for_exact_code():
    code = to_raw_snippet(BorderRadiusParams())

    markup = render_css(code, "css", "dracula")

    assert markup.code == code
    assert markup.theme == "dracula"
    assert all(style in THEMES["dracula"].styles for _, _, style in markup.spans())


@pytest.mark.parametrize("language, theme", [("scss", "dracula"), ("css", "solarized")])
def test_render_css_rejects_unknown_language_or_theme(language, theme):
    with pytest.raises(HighlightError):
        render_css("a {}", language, theme)


def test_markup_spans_use_character_offsets():
    markup = Markup(
        code="ab cd",
        theme="dracula",
        segments=(Segment("ab", "selector"), Segment(" ", None), Segment("cd", "property")),
    )

    assert list(markup.spans()) == [(0, 2, "selector"), (3, 5, "property")]
