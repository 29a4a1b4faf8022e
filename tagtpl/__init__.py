"""
tagtpl: text templates with <{ ... }> control tags.

    from tagtpl import render
    render("page.tpl", {"user": {"name": "Ann"}})
"""

from .config import EngineConfig, load_engine_config
from .engine import TemplateEngine, get_default_engine, render
from .errors import (
    TagTplError,
    SourceUnavailableError,
    TemplateSyntaxError,
    ExpressionError,
    ConfigLoadError,
)
from .template import tokenize, parse
from .version import tool_version

__version__ = tool_version()

__all__ = [
    "render",
    "tokenize",
    "parse",
    "TemplateEngine",
    "get_default_engine",
    "EngineConfig",
    "load_engine_config",
    "TagTplError",
    "SourceUnavailableError",
    "TemplateSyntaxError",
    "ExpressionError",
    "ConfigLoadError",
    "__version__",
]
