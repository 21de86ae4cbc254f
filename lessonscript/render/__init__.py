"""Rendering seam: tag-to-widget dispatch and a plain-text outline."""

from .widgets import Widget, group_title, render_outline, widget_for

__all__ = ["Widget", "group_title", "render_outline", "widget_for"]
