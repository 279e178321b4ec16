"""Glue between one tool's parameters, its snippets, highlighting and copy state."""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .clipboard import ClipboardAdapter
from .copy_status import COPY_RESET_MS, CopyStatus, CopyStatusMachine, Scheduler
from .highlight import DEFAULT_THEME, HighlightPipeline, Markup, Renderer, render_css
from .params import TOOL_FIELDS, FieldSpec, ParameterModel, ToolKind, ToolParams, default_params
from .snippet_format import to_raw_snippet, to_utility_snippet


class Channel(str, Enum):
    RAW = "raw"
    UTILITY = "utility"


@dataclass(frozen=True)
class Snippet:
    raw: str
    utility: str

    def for_channel(self, channel: Channel) -> str:
        return self.raw if channel is Channel.RAW else self.utility


def build_snippet(params: ToolParams) -> Snippet:
    return Snippet(raw=to_raw_snippet(params), utility=to_utility_snippet(params))


class GeneratorController:
    def __init__(
        self,
        kind: ToolKind | str,
        *,
        clipboard: ClipboardAdapter,
        scheduler: Scheduler,
        renderer: Renderer = render_css,
        theme: str = DEFAULT_THEME,
        reset_ms: int = COPY_RESET_MS,
        spawn: Callable[[Callable[[], None]], None] | None = None,
        on_status_change: Callable[[Channel, CopyStatus], None] | None = None,
    ) -> None:
        self.kind = ToolKind(kind)
        self.model = ParameterModel(default_params(self.kind))
        pipeline_kwargs = {"theme": theme}
        if spawn is not None:
            pipeline_kwargs["spawn"] = spawn
        self.pipeline = HighlightPipeline(renderer, **pipeline_kwargs)
        self._on_status_change = on_status_change
        self.copy_status: dict[Channel, CopyStatusMachine] = {
            channel: CopyStatusMachine(
                clipboard,
                scheduler,
                reset_ms=reset_ms,
                on_change=lambda state, ch=channel: self._status_changed(ch, state),
            )
            for channel in Channel
        }
        self._snippet = build_snippet(self.model.get())
        self._request_highlights()

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        return TOOL_FIELDS[self.kind]

    @property
    def params(self) -> ToolParams:
        return self.model.get()

    @property
    def snippet(self) -> Snippet:
        return self._snippet

    def update(self, field: str, value: object) -> Snippet:
        before = self.model.get()
        after = self.model.update(field, value)
        if after is not before:
            self._refresh()
        return self._snippet

    def reset(self) -> Snippet:
        self.model.reset()
        self._refresh()
        return self._snippet

    def _refresh(self) -> None:
        self._snippet = build_snippet(self.model.get())
        self._request_highlights()

    def _request_highlights(self) -> None:
        for channel in Channel:
            self.pipeline.request(channel, self._snippet.for_channel(channel))

    def set_theme(self, theme: str) -> None:
        self.pipeline.set_theme(theme)

    def poll(self) -> set[Channel]:
        return self.pipeline.poll()

    def markup(self, channel: Channel) -> Markup | None:
        return self.pipeline.markup(channel)

    def status(self, channel: Channel) -> CopyStatus:
        return self.copy_status[channel].state

    def copy(self, channel: Channel) -> bool:
        return self.copy_status[channel].copy(self._snippet.for_channel(channel))

    def _status_changed(self, channel: Channel, state: CopyStatus) -> None:
        if self._on_status_change is not None:
            self._on_status_change(channel, state)

    def close(self) -> None:
        self.pipeline.close()
        for machine in self.copy_status.values():
            machine.close()
