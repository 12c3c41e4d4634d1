# topmark:header:start
#
#   project      : MediaConf
#   file         : describe.py
#   file_relpath : src/mediaconf/config/describe.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""JSON-friendly descriptions of resolved configurations.

Used by the CLI ``show`` command for both the human tree view and the machine
(``json``) output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mediaconf.detect.composite import CompositeDetector
from mediaconf.parse.base import Parser
from mediaconf.parse.composite import CompositeParser
from mediaconf.parse.decorator import ParserDecorator
from mediaconf.translate.base import DefaultTranslator

if TYPE_CHECKING:
    from mediaconf.config.model import MediaConfig

ComponentPayload = dict[str, Any]


def qualified_name(obj: Any) -> str:
    """Return ``module.Class`` for an instance."""
    cls: type[Any] = obj.__class__
    return f"{cls.__module__}.{cls.__qualname__}"


def describe_component(component: Any) -> ComponentPayload:
    """Describe a detector, parser or translator and, recursively, its children.

    Args:
        component (Any): Any implementation instance.

    Returns:
        ComponentPayload: ``class`` plus ``types``, ``children`` or ``wrapped`` as
        applicable.
    """
    payload: ComponentPayload = {"class": qualified_name(component)}
    if isinstance(component, Parser):
        payload["types"] = sorted(str(t) for t in component.get_supported_types())
    if isinstance(component, CompositeParser):
        payload["children"] = [describe_component(p) for p in component.parsers]
    elif isinstance(component, ParserDecorator):
        payload["wrapped"] = describe_component(component.wrapped_parser)
    elif isinstance(component, CompositeDetector):
        payload["children"] = [describe_component(d) for d in component.detectors]
    elif isinstance(component, DefaultTranslator):
        payload["children"] = [describe_component(t) for t in component.translators]
    return payload


def describe_config(config: MediaConfig) -> dict[str, Any]:
    """Describe a whole configuration."""
    return {
        "source": config.source,
        "mime_repository": {
            "source": config.mime_repository.source,
            "types": len(config.media_type_registry),
        },
        "detector": describe_component(config.detector),
        "parser": describe_component(config.parser),
        "translator": describe_component(config.translator),
    }


def render_tree(payload: ComponentPayload, indent: int = 0) -> list[str]:
    """Render a component payload as indented text lines."""
    pad: str = "  " * indent
    line: str = f"{pad}- {payload['class']}"
    types: list[str] | None = payload.get("types")
    if types is not None and "children" not in payload:
        line += f" [{', '.join(types) if types else 'no types'}]"
    lines: list[str] = [line]
    if "wrapped" in payload:
        lines.extend(render_tree(payload["wrapped"], indent + 1))
    for child in payload.get("children", []):
        lines.extend(render_tree(child, indent + 1))
    return lines
