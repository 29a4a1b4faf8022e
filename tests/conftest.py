from pathlib import Path

import pytest

from tagtpl import TemplateEngine, EngineConfig
from tagtpl.config import AUTOESCAPE_ENV
from tagtpl.source import FileSystemSource

from tests.infrastructure.file_utils import write


class CountingSource(FileSystemSource):
    """Filesystem source counting reads, i.e. compilations."""

    def __init__(self):
        self.reads = 0

    def read_source(self, path: str) -> bytes:
        self.reads += 1
        return super().read_source(path)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # the engine config must not be influenced by the developer's shell
    monkeypatch.delenv(AUTOESCAPE_ENV, raising=False)


@pytest.fixture
def counting_source() -> CountingSource:
    return CountingSource()


@pytest.fixture
def engine(counting_source) -> TemplateEngine:
    return TemplateEngine(source=counting_source)


@pytest.fixture
def raw_engine() -> TemplateEngine:
    """Engine with auto-escaping disabled."""
    return TemplateEngine(config=EngineConfig(autoescape=False))


@pytest.fixture
def tpl_dir(tmp_path: Path) -> Path:
    """Directory with a couple of ready-made templates."""
    write(tmp_path / "hello.tpl", "Hello, <{ name | \"stranger\" }>!")
    write(
        tmp_path / "list.tpl",
        "<{ for i, x in items }><{ i }>:<{ x }>(<{ loop.First }>,<{ loop.Last }>) <{ /for }>",
    )
    return tmp_path
