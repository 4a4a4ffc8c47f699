"""Human readable templates for structured log events.

Templates live in ``event_templates.json`` as ``{domain: {action: template}}``
and are formatted with the event's keyword context.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from importlib import resources

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}
_JSON_FILENAME = "event_templates.json"


def _flatten(raw: object) -> dict[tuple[str, str], str]:
    if not isinstance(raw, Mapping):
        return {}
    return {
        (domain, action): template
        for domain, actions in raw.items()
        if isinstance(domain, str) and isinstance(actions, Mapping)
        for action, template in actions.items()
        if isinstance(action, str) and isinstance(template, str)
    }


def _load_event_templates() -> dict[tuple[str, str], str]:
    try:
        text = resources.files(__package__).joinpath(_JSON_FILENAME).read_text(
            encoding="utf-8"
        )
        return _flatten(json.loads(text))
    except FileNotFoundError:
        return {("app", "load_error"): "Event templates file missing"}
    except (OSError, ValueError) as e:
        return {("app", "load_error"): f"Failed to load event templates: {e}"[:200]}


def reload_event_templates() -> None:
    global EVENT_TEMPLATES  # noqa: PLW0603
    EVENT_TEMPLATES = _load_event_templates()


def render_event(domain: str, action: str, context: Mapping[str, object]) -> str | None:
    """Format the template of ``domain``/``action``; ``None`` when there is none.

    A template referencing a field missing from ``context`` is returned unformatted.
    """
    template = EVENT_TEMPLATES.get((domain, action))
    if template is None:
        return None
    try:
        return template.format(**context)
    except (KeyError, IndexError, ValueError):
        return template


reload_event_templates()

__all__ = ["EVENT_TEMPLATES", "reload_event_templates", "render_event"]
