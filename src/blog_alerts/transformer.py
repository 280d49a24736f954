"""Alert blockquote transformer.

This module rewrites rendered HTML so that blockquotes written as
GitHub-style alerts::

    > [!NOTE]
    > Useful information.

become styled containers::

    <div class="alert is-info"><p class="alert-title">...</p><p>Useful information.</p></div>

Everything outside a matched blockquote is passed through unchanged.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING

from blog_alerts.models import (
    DEFAULT_ALERT_STYLES,
    HTML_TAG_NAME_PATTERN,
    AlertKind,
    AlertStyle,
    RenderedAlert,
)

if TYPE_CHECKING:
    from blog_alerts.config import Settings

logger = logging.getLogger(__name__)

# Hard line breaks emitted by markdown renderers
LINE_BREAK_PATTERN = re.compile(r"<br\s*/?>")

# <blockquote><p>[!TAG] body</p></blockquote>, the body holding no </p>.
# Spaces separating the marker from inline body text are not part of the body.
ALERT_PATTERN = re.compile(
    r"<blockquote>\s*<p>\[!(?P<tag>"
    + "|".join(re.escape(kind.value) for kind in AlertKind)
    + r")\][ \t]*(?P<body>(?:(?!</p>).)*)</p>\s*</blockquote>",
    re.DOTALL,
)

# Any bracketed tag at the head of a blockquote, recognised or not
CANDIDATE_PATTERN = re.compile(r"<blockquote>\s*<p>\[!(?P<tag>[^\]<]*)\]")

DEFAULT_CONTAINER_TAG = "div"
DEFAULT_TITLE_TAG = "p"


class AlertConfigError(Exception):
    """Raised when the alert style table or markup settings are invalid."""


def split_body_lines(body: str) -> list[str]:
    """Split an alert body into paragraph lines.

    The body is split on line-break tags. A single leading empty line,
    left when the tag sits alone on the first line, is dropped. Other
    lines are kept verbatim, empty ones included.

    Args:
        body: Paragraph content following the ``[!TAG]`` marker.

    Returns:
        Lines in document order.
    """
    lines = LINE_BREAK_PATTERN.split(body)
    if lines[0] == "":
        lines.pop(0)
    return lines


def _tag_names(keys: set[object]) -> str:
    names = sorted(str(getattr(key, "value", key)) for key in keys)
    return ", ".join(names) or "none"


class AlertTransformer:
    """Rewrites alert blockquotes in rendered HTML into styled containers.

    The transformer only holds read-only configuration, so a single
    instance can be shared between documents and threads.

    Example:
        ```python
        transformer = AlertTransformer()
        html = transformer.transform("<blockquote><p>[!TIP] Hi</p></blockquote>")
        ```
    """

    def __init__(
        self,
        styles: Mapping[AlertKind, AlertStyle] = DEFAULT_ALERT_STYLES,
        container_tag: str = DEFAULT_CONTAINER_TAG,
        title_tag: str = DEFAULT_TITLE_TAG,
    ) -> None:
        """Initialize the transformer.

        Args:
            styles: Style for every alert kind. Must cover exactly the
                members of AlertKind.
            container_tag: Element wrapping the whole alert.
            title_tag: Element holding the alert label.

        Raises:
            AlertConfigError: If the style table does not match AlertKind
                or a tag name is not a valid element name.
        """
        missing = set(AlertKind) - set(styles)
        unknown = set(styles) - set(AlertKind)
        if missing or unknown:
            raise AlertConfigError(
                "Alert styles must cover exactly "
                f"{', '.join(kind.value for kind in AlertKind)} "
                f"(missing: {_tag_names(missing)}, "
                f"unknown: {_tag_names(unknown)})"
            )
        for tag in (container_tag, title_tag):
            if not HTML_TAG_NAME_PATTERN.match(tag):
                raise AlertConfigError(f"Invalid HTML tag name: {tag!r}")

        self._styles: dict[AlertKind, AlertStyle] = {kind: styles[kind] for kind in AlertKind}
        self.container_tag = container_tag
        self.title_tag = title_tag

    @classmethod
    def from_settings(cls, settings: Settings) -> AlertTransformer:
        """Create a transformer from application settings.

        Label overrides replace the default label of their kind; the
        style classes are kept.
        """
        alert_settings = settings.alerts
        styles = {
            kind: AlertStyle(
                style_class=style.style_class,
                label=alert_settings.labels.get(kind.value, style.label),
            )
            for kind, style in DEFAULT_ALERT_STYLES.items()
        }
        return cls(
            styles=styles,
            container_tag=alert_settings.container_tag,
            title_tag=alert_settings.title_tag,
        )

    def style_for(self, kind: AlertKind) -> AlertStyle:
        """Return the style configured for an alert kind."""
        return self._styles[kind]

    def transform(self, html: str) -> str:
        """Rewrite every alert blockquote in a rendered document.

        Args:
            html: Rendered HTML body.

        Returns:
            HTML with alerts replaced and all other content untouched.
        """
        result, _ = self.transform_with_count(html)
        return result

    def transform_with_count(self, html: str) -> tuple[str, int]:
        """Rewrite alerts and report how many were replaced."""
        self._log_unrecognized(html)
        result, count = ALERT_PATTERN.subn(self._replace, html)
        if count:
            logger.debug("Rendered %d alert block(s)", count)
        return result, count

    def find_alerts(self, html: str) -> list[RenderedAlert]:
        """Return the alerts found in a document, in document order."""
        return [
            self.build_alert(AlertKind(match["tag"]), match["body"])
            for match in ALERT_PATTERN.finditer(html)
        ]

    def build_alert(self, kind: AlertKind, body: str) -> RenderedAlert:
        """Build the rendered alert for a kind and its raw body text."""
        return RenderedAlert(
            kind=kind,
            style=self._styles[kind],
            lines=tuple(split_body_lines(body)),
        )

    def render(self, kind: AlertKind, body: str) -> str:
        """Render one alert container from a kind and raw body text."""
        return self.build_alert(kind, body).to_html(self.container_tag, self.title_tag)

    def _replace(self, match: re.Match[str]) -> str:
        return self.render(AlertKind(match["tag"]), match["body"])

    def _log_unrecognized(self, html: str) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        for match in CANDIDATE_PATTERN.finditer(html):
            tag = match["tag"]
            if tag not in AlertKind.__members__:
                logger.debug("Leaving unrecognized alert tag [!%s] untouched", tag)
