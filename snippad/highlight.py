"""CSS highlighting and the background highlight pipeline.

The tokenizer and :func:`render_css` are pure. :class:`HighlightPipeline`
runs a renderer on worker threads and commits results on the caller's thread
when :meth:`HighlightPipeline.poll` is invoked from the Tk loop.
"""
from __future__ import annotations

import logging
import queue
import re
import threading
from collections.abc import Callable, Hashable, Iterator
from dataclasses import dataclass

_logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "css"
DEFAULT_THEME = "dracula"


class HighlightError(Exception):
    """Raised when a snippet cannot be rendered."""


@dataclass(frozen=True)
class Theme:
    name: str
    background: str
    foreground: str
    styles: dict[str, str]


THEMES: dict[str, Theme] = {
    "dracula": Theme(
        name="dracula",
        background="#282a36",
        foreground="#f8f8f2",
        styles={
            "comment": "#6272a4",
            "selector": "#50fa7b",
            "at_rule": "#ff79c6",
            "utility": "#f1fa8c",
            "property": "#8be9fd",
            "function": "#50fa7b",
            "keyword": "#ff79c6",
            "number": "#bd93f9",
            "unit": "#ff79c6",
            "string": "#f1fa8c",
            "punctuation": "#f8f8f2",
        },
    ),
    "github-light": Theme(
        name="github-light",
        background="#ffffff",
        foreground="#24292e",
        styles={
            "comment": "#6a737d",
            "selector": "#6f42c1",
            "at_rule": "#d73a49",
            "utility": "#032f62",
            "property": "#005cc5",
            "function": "#6f42c1",
            "keyword": "#d73a49",
            "number": "#005cc5",
            "unit": "#d73a49",
            "string": "#032f62",
            "punctuation": "#24292e",
        },
    ),
}


@dataclass(frozen=True)
class Segment:
    text: str
    style: str | None


@dataclass(frozen=True)
class Markup:
    """Styled runs for one exact snippet string."""

    code: str
    theme: str
    segments: tuple[Segment, ...]

    def spans(self) -> Iterator[tuple[int, int, str]]:
        """Yield ``(start, end, style)`` character offsets for styled runs."""

        offset = 0
        for seg in self.segments:
            end = offset + len(seg.text)
            if seg.style:
                yield offset, end, seg.style
            offset = end


CSS_TOKEN_RE = re.compile(
    r"""
    (?P<comment>/\*.*?\*/)
    |(?P<string>"[^"\n]*"|'[^'\n]*')
    |(?P<at_rule>@[A-Za-z-]+)
    |(?P<number>-?(?:\d+(?:\.\d+)?|\.\d+))(?P<unit>%|[A-Za-z]+)?
    |(?P<hashed>\#[\w-]+)
    |(?P<ident>-?[A-Za-z_][\w-]*(?:\[[^\]\n]*\])?)
    |(?P<punct>[{}():;,.\[\]])
    |(?P<space>\s+)
    |(?P<other>.)
    """,
    re.DOTALL | re.VERBOSE,
)


def tokenize_css(code: str) -> list[Segment]:
    """Split CSS into styled segments whose texts concatenate back to ``code``."""

    out: list[Segment] = []
    depth = 0
    in_value = False
    after_apply = False
    selector_dot = False

    def emit(text: str, style: str | None) -> None:
        if out and out[-1].style == style:
            out[-1] = Segment(out[-1].text + text, style)
        else:
            out.append(Segment(text, style))

    for m in CSS_TOKEN_RE.finditer(code):
        kind = m.lastgroup
        if kind == "unit":
            emit(m.group("number"), "number")
            emit(m.group("unit"), "unit")
            continue
        text = m.group(0)
        if kind == "comment":
            emit(text, "comment")
        elif kind == "string":
            emit(text, "string")
        elif kind == "at_rule":
            after_apply = text == "@apply"
            emit(text, "at_rule")
        elif kind == "number":
            emit(text, "number")
        elif kind == "hashed":
            emit(text, "selector" if depth == 0 else "number")
        elif kind == "ident":
            if depth == 0:
                style = "selector"
            elif after_apply:
                style = "utility"
            elif in_value:
                style = "function" if code.startswith("(", m.end()) else "keyword"
            else:
                style = "property"
            if selector_dot and style == "selector":
                # Fold the leading "." into the class selector run.
                out[-1] = Segment(out[-1].text, "selector")
            emit(text, style)
        elif kind == "punct":
            if text == "{":
                depth += 1
                in_value = False
            elif text == "}":
                depth = max(0, depth - 1)
                in_value = False
                after_apply = False
            elif text == ":" and depth > 0:
                in_value = True
            elif text == ";":
                in_value = False
                after_apply = False
            if text == "." and depth == 0:
                out.append(Segment(text, "punctuation"))
                selector_dot = True
                continue
            emit(text, "punctuation")
        else:
            emit(text, None)
        selector_dot = False
    return out


def render_css(code: str, language: str = DEFAULT_LANGUAGE, theme: str = DEFAULT_THEME) -> Markup:
    if language != "css":
        raise HighlightError(f"Unsupported language: {language}")
    if theme not in THEMES:
        raise HighlightError(f"Unknown theme: {theme}")
    return Markup(code=code, theme=theme, segments=tuple(tokenize_css(code)))


Renderer = Callable[[str, str, str], Markup]


def _spawn_thread(job: Callable[[], None]) -> None:
    threading.Thread(target=job, daemon=True).start()


@dataclass(frozen=True)
class _Result:
    channel: Hashable
    generation: int
    code: str
    markup: Markup | None
    error: str | None = None


class HighlightPipeline:
    """Render snippets off the UI thread; the newest request per channel wins.

    Every :meth:`request` bumps the channel's generation. Each channel has at
    most one worker; it renders only the newest code still waiting when it
    becomes free, so superseded requests are dropped without being rendered.
    :meth:`poll` also drops any result that is no longer the latest for its
    channel.
    """

    def __init__(
        self,
        renderer: Renderer = render_css,
        *,
        language: str = DEFAULT_LANGUAGE,
        theme: str = DEFAULT_THEME,
        spawn: Callable[[Callable[[], None]], None] = _spawn_thread,
    ) -> None:
        self._renderer = renderer
        self.language = language
        self.theme = theme
        self._spawn = spawn
        self._results: queue.Queue[_Result] = queue.Queue()
        self._generation: dict[Hashable, int] = {}
        self._requested: dict[Hashable, str] = {}
        self._markup: dict[Hashable, Markup] = {}
        self._lock = threading.Lock()
        self._waiting: dict[Hashable, tuple[int, str, str, str]] = {}
        self._busy: set[Hashable] = set()
        self._closed = False

    def markup(self, channel: Hashable) -> Markup | None:
        return self._markup.get(channel)

    def generation(self, channel: Hashable) -> int:
        return self._generation.get(channel, 0)

    def pending(self, channel: Hashable) -> bool:
        requested = self._requested.get(channel)
        current = self._markup.get(channel)
        return requested is not None and (current is None or current.code != requested)

    def request(self, channel: Hashable, code: str) -> int:
        if self._closed:
            return self.generation(channel)
        if self._requested.get(channel) == code:
            return self.generation(channel)
        generation = self.generation(channel) + 1
        self._generation[channel] = generation
        self._requested[channel] = code
        with self._lock:
            self._waiting[channel] = (generation, code, self.language, self.theme)
            if channel in self._busy:
                return generation
            self._busy.add(channel)
        self._spawn(lambda: self._work(channel))
        return generation

    def _work(self, channel: Hashable) -> None:
        while True:
            with self._lock:
                item = None if self._closed else self._waiting.pop(channel, None)
                if item is None:
                    self._busy.discard(channel)
                    return
            generation, code, language, theme = item
            try:
                markup = self._renderer(code, language, theme)
            except Exception as exc:  # noqa: BLE001 - any renderer failure keeps old markup
                self._results.put(_Result(channel, generation, code, None, str(exc) or repr(exc)))
                continue
            self._results.put(_Result(channel, generation, code, markup))

    def set_theme(self, theme: str) -> None:
        if theme == self.theme:
            return
        self.theme = theme
        requested = dict(self._requested)
        self._requested.clear()
        for channel, code in requested.items():
            self.request(channel, code)

    def poll(self) -> set[Hashable]:
        """Commit finished results that are still current; return changed channels."""

        changed: set[Hashable] = set()
        while True:
            try:
                result = self._results.get_nowait()
            except queue.Empty:
                break
            if self._closed or result.generation != self._generation.get(result.channel):
                _logger.debug(
                    "Discarding stale highlight for %s (generation %d)",
                    result.channel,
                    result.generation,
                )
                continue
            if result.markup is None:
                _logger.warning("Highlighting failed for %s: %s", result.channel, result.error)
                continue
            self._markup[result.channel] = result.markup
            changed.add(result.channel)
        return changed

    def close(self) -> None:
        with self._lock:
            self._closed = True
            self._waiting.clear()
        for channel in self._generation:
            self._generation[channel] += 1


__all__ = [
    "DEFAULT_LANGUAGE",
    "DEFAULT_THEME",
    "THEMES",
    "HighlightError",
    "HighlightPipeline",
    "Markup",
    "Renderer",
    "Segment",
    "Theme",
    "render_css",
    "tokenize_css",
]
