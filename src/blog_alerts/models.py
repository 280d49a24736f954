"""Data models for alert blocks and rendered posts."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

# Element names accepted for the container and title wrappers
HTML_TAG_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9-]*\Z")


class AlertKind(str, Enum):
    """Recognised alert tags, written as ``[!TAG]`` in markdown."""

    NOTE = "NOTE"
    TIP = "TIP"
    IMPORTANT = "IMPORTANT"
    CAUTION = "CAUTION"
    WARNING = "WARNING"


@dataclass(frozen=True)
class AlertStyle:
    """Presentation of one alert kind.

    Attributes:
        style_class: CSS class added next to ``alert`` on the container.
        label: Title markup (icon plus text), inserted verbatim.
    """

    style_class: str
    label: str


DEFAULT_ALERT_STYLES: MappingProxyType[AlertKind, AlertStyle] = MappingProxyType(
    {
        AlertKind.NOTE: AlertStyle(
            style_class="is-info",
            label='<ion-icon name="alert-circle-outline"></ion-icon> Note',
        ),
        AlertKind.TIP: AlertStyle(
            style_class="is-success",
            label='<ion-icon name="leaf-outline"></ion-icon> Tip',
        ),
        AlertKind.IMPORTANT: AlertStyle(
            style_class="is-important",
            label='<ion-icon name="hand-right-outline"></ion-icon> Important',
        ),
        AlertKind.CAUTION: AlertStyle(
            style_class="is-caution",
            label='<ion-icon name="skull-outline"></ion-icon> Caution',
        ),
        AlertKind.WARNING: AlertStyle(
            style_class="is-warning",
            label='<ion-icon name="warning-outline"></ion-icon> Warning',
        ),
    }
)


@dataclass(frozen=True)
class RenderedAlert:
    """An alert block ready to be written back into the document.

    Attributes:
        kind: The alert tag that was matched.
        style: Style applied to the container and title.
        lines: Body lines, one paragraph each.
    """

    kind: AlertKind
    style: AlertStyle
    lines: tuple[str, ...]

    def to_html(self, container_tag: str = "div", title_tag: str = "p") -> str:
        """Build the container markup with no whitespace between elements.

        An alert without body lines still gets one empty paragraph.
        """
        paragraphs = "".join(f"<p>{line}</p>" for line in self.lines or ("",))
        return (
            f'<{container_tag} class="alert {self.style.style_class}">'
            f'<{title_tag} class="alert-title">{self.style.label}</{title_tag}>'
            f"{paragraphs}"
            f"</{container_tag}>"
        )


@dataclass
class Post:
    """A rendered document as handed over by the site generator.

    Only ``content`` is read or written by the alert filter.
    """

    content: str
    source: str = ""
    title: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
