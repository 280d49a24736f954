"""Blog Alerts - Markdown alert blocks rendered as styled HTML callouts."""

__version__ = "0.1.0"

from blog_alerts.filters import FilterRegistry, after_post_render, default_registry
from blog_alerts.models import (
    DEFAULT_ALERT_STYLES,
    AlertKind,
    AlertStyle,
    Post,
    RenderedAlert,
)
from blog_alerts.transformer import AlertConfigError, AlertTransformer, split_body_lines

__all__ = [
    "DEFAULT_ALERT_STYLES",
    "AlertConfigError",
    "AlertKind",
    "AlertStyle",
    "AlertTransformer",
    "FilterRegistry",
    "Post",
    "RenderedAlert",
    "__version__",
    "after_post_render",
    "default_registry",
    "split_body_lines",
]
