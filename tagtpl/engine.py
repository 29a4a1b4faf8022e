"""
Template engine: compile-on-demand with an mtime-validated cache.

Compiles template files lazily, reuses compiled templates until the source
modification time changes, and renders them against a context.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, List, Mapping, Optional, Tuple

from .cache import CompiledTemplate, TemplateCache
from .config import EngineConfig, load_engine_config
from .render.filters import EscapeFunc
from .render.renderer import TemplateRenderer
from .source import FileSystemSource, TemplateSource
from .template.lexer import tokenize
from .template.nodes import TemplateNode
from .template.parser import parse

logger = logging.getLogger(__name__)


class TemplateEngine:
    """
    Compiles and renders templates.

    An engine owns its compile cache and configuration; engines are
    independent of each other. All methods are safe to call from several
    threads at once.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        source: Optional[TemplateSource] = None,
        escape: Optional[EscapeFunc] = None,
    ):
        """
        Initializes the engine.

        Args:
            config: Engine settings (defaults: auto-escaping on)
            source: Template storage (defaults to the local filesystem)
            escape: Escaping function for auto-escaping and the "escape" filter
        """
        self.config = config or EngineConfig()
        self.source = source or FileSystemSource()
        self.renderer = TemplateRenderer(autoescape=self.config.autoescape, escape=escape)
        self._cache = TemplateCache()

    # -------------------- compilation --------------------

    def compile_text(self, text: str) -> Tuple[TemplateNode, ...]:
        """
        Compiles template text without caching.

        Raises:
            TemplateSyntaxError: If the block structure is malformed
        """
        return tuple(parse(tokenize(text)))

    def get_or_compile(self, path: str) -> CompiledTemplate:
        """
        Returns the compiled template for a file, compiling it if needed.

        A cached entry is reused while its recorded modification time equals
        the current one. Failures leave the cache untouched.

        Args:
            path: Template file path

        Returns:
            Compiled template

        Raises:
            SourceUnavailableError: If the file cannot be stat'd or read
            TemplateSyntaxError: If the template fails to parse
        """
        key = self.source.resolve_path(path)
        mod_time = self.source.stat_mod_time(key)

        cached = self._cache.get(key, mod_time)
        if cached is not None:
            logger.debug(f"Template cache hit: {key}")
            return cached

        logger.debug(f"Compiling template {key} (mtime={mod_time})")
        data = self.source.read_source(key)
        nodes = self.compile_text(data.decode("utf-8", errors="ignore"))

        compiled = CompiledTemplate(path=key, nodes=nodes, mod_time=mod_time)
        self._cache.put(compiled)
        return compiled

    def clear_cache(self) -> None:
        """Forgets all compiled templates."""
        self._cache.clear()

    def cached_paths(self) -> List[str]:
        """Returns resolved paths of the currently cached templates."""
        return self._cache.paths()

    # -------------------- rendering --------------------

    def render(self, path: str, context: Optional[Mapping[str, Any]] = None) -> str:
        """
        Renders a template file.

        Args:
            path: Template file path
            context: Variables available to the template

        Returns:
            Rendered text

        Raises:
            SourceUnavailableError: If the file cannot be stat'd or read
            TemplateSyntaxError: If the template fails to parse
        """
        compiled = self.get_or_compile(path)
        return self.renderer.render(compiled.nodes, context)

    def render_text(self, text: str, context: Optional[Mapping[str, Any]] = None) -> str:
        """Compiles and renders template text in one step, bypassing the cache."""
        return self.renderer.render(self.compile_text(text), context)


_default_engine: Optional[TemplateEngine] = None
_default_engine_lock = threading.Lock()


def get_default_engine() -> TemplateEngine:
    """
    Returns the process-wide engine used by the module-level render().

    Created on first use with defaults and environment overrides applied.
    """
    global _default_engine
    if _default_engine is None:
        with _default_engine_lock:
            if _default_engine is None:
                _default_engine = TemplateEngine(config=load_engine_config())
    return _default_engine


def render(path: str, context: Optional[Mapping[str, Any]] = None) -> str:
    """
    Renders a template file with the default engine.

    Args:
        path: Template file path
        context: Variables available to the template

    Returns:
        Rendered text
    """
    return get_default_engine().render(path, context)


__all__ = ["TemplateEngine", "get_default_engine", "render"]
