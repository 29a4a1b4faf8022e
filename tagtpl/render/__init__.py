"""
Rendering of compiled templates: node evaluation and output filters.
"""

from .renderer import TemplateRenderer, default_escape
from .filters import apply_filter, apply_filters, RAW_FILTERS

__all__ = [
    "TemplateRenderer",
    "default_escape",
    "apply_filter",
    "apply_filters",
    "RAW_FILTERS",
]
