"""Notification template resolution and rendering."""

from infrastructure.notifications.templates.defaults import (
    DEFAULT_TEMPLATES,
    get_builtin_template,
    get_builtin_templates_for_event,
    get_generic_template,
)
from infrastructure.notifications.templates.renderer import (
    TemplateRenderer,
    build_common_variables,
    render_string,
)

__all__ = [
    "DEFAULT_TEMPLATES",
    "TemplateRenderer",
    "build_common_variables",
    "get_builtin_template",
    "get_builtin_templates_for_event",
    "get_generic_template",
    "render_string",
]
