from __future__ import annotations

from typing import Any

import requests

from .highlight import THEMES, HighlightError, Markup, Segment

CONNECT_TIMEOUT = 5
READ_TIMEOUT = 30


def _parse_segments(data: Any, code: str, theme: str) -> tuple[Segment, ...]:
    if not isinstance(data, dict) or not isinstance(data.get("segments"), list):
        raise HighlightError("Highlight service returned no segments")
    known_styles = THEMES[theme].styles if theme in THEMES else {}
    segments: list[Segment] = []
    for item in data["segments"]:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise HighlightError(f"Malformed segment: {item!r}")
        text, style = item
        if not isinstance(text, str):
            raise HighlightError(f"Malformed segment: {item!r}")
        segments.append(Segment(text, style if style in known_styles else None))
    if "".join(seg.text for seg in segments) != code:
        # Markup is keyed by the exact code string; anything else would be stale.
        raise HighlightError("Highlight service returned text that does not match the request")
    return tuple(segments)


class RemoteHighlighter:
    """Renderer backed by an HTTP highlight service.

    The service receives ``{"code", "language", "theme"}`` and answers with
    ``{"segments": [[text, style], ...]}``.
    """

    def __init__(self, endpoint: str) -> None:
        self.endpoint = endpoint.rstrip("/")

    def __call__(self, code: str, language: str, theme: str) -> Markup:
        url = f"{self.endpoint}/v1/highlight"
        try:
            resp = requests.post(
                url,
                json={"code": code, "language": language, "theme": theme},
                timeout=(CONNECT_TIMEOUT, READ_TIMEOUT),
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise HighlightError(f"Highlight request to {url} failed: {exc}") from exc
        return Markup(code=code, theme=theme, segments=_parse_segments(data, code, theme))
