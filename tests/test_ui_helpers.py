import pytest

from snippad.highlight import THEMES, render_css
from snippad.ui.helpers import apply_markup


class FakeText:
    def __init__(self):
        self.content = "old"
        self.state = "disabled"
        self.options = {}
        self.tag_options = {}
        self.tags = []
        self.states = []

    def configure(self, **options):
        if "state" in options:
            self.state = options.pop("state")
            self.states.append(self.state)
        self.options.update(options)

    def tag_configure(self, tag, **options):
        self.tag_options[tag] = options

    def delete(self, start, end):
        assert self.state == "normal"
        self.content = ""

    def insert(self, index, text):
        assert self.state == "normal"
        self.content = text

    def tag_add(self, tag, start, end):
        self.tags.append((tag, start, end))


def test_apply_markup_replaces_content_and_tags_spans():
    code = ".border-radius {\n  border-radius: 10px;\n}"
    markup = render_css(code, "css", "github-light")
    text = FakeText()

    apply_markup(text, markup)

    assert text.content == code
    assert text.states == ["normal", "disabled"]
    assert ("selector", "1.0", "1.14") in text.tags
    assert ("property", "2.2", "2.15") in text.tags
    assert text.options["background"] == THEMES["github-light"].background
    assert text.tag_options["selector"] == {"foreground": THEMES["github-light"].styles["selector"]}


def test_apply_markup_restores_read_only_state_on_error():
    class BrokenText(FakeText):
        def insert(self, index, text):
            raise RuntimeError("widget destroyed")

    text = BrokenText()

    with pytest.raises(RuntimeError):
        apply_markup(text, render_css("a {}", "css", "dracula"))

    assert text.state == "disabled"
