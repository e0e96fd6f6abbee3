"""Grouping of extracted glyphs into drawable text lines."""

from .lines import group_lines, is_control, layout_pages

__all__ = ["group_lines", "is_control", "layout_pages"]
