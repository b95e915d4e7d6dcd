"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    CSS_PREVIEW,
    HTML_TEMPLATE,
    IMAGE_EXTENSIONS,
    PREVIEW_CLASSES,
    preview_css,
)
from .i18n import translate
from .logging_setup import MultiLineFormatter, configure_logging

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "CSS_PREVIEW",
    "HTML_TEMPLATE",
    "IMAGE_EXTENSIONS",
    "PREVIEW_CLASSES",
    "preview_css",
    "translate",
    "MultiLineFormatter",
    "configure_logging",
]
