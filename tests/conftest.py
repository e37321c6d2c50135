"""
Test configuration and shared fixtures for Tool Search Gateway tests.

Embedding tests run against a tiny hand-written vector table placed in a
temporary cache directory, so no test touches the network.
"""

import io
import zipfile
from pathlib import Path

import pytest

from tool_search_gateway.models.tool import Tool

DIMENSION = 50

# A few words spread over distinct axes so similarity is easy to reason about
WORD_AXES = {
    "deploy": {0: 1.0},
    "deployment": {0: 0.9, 1: 0.1},
    "kubernetes": {0: 0.8, 3: 0.2},
    "cluster": {0: 0.7, 3: 0.3},
    "search": {1: 1.0},
    "web": {1: 0.8, 2: 0.2},
    "query": {1: 0.9, 4: 0.1},
    "file": {2: 1.0},
    "read": {2: 0.8, 1: 0.2},
    "filesystem": {2: 0.9, 3: 0.1},
    "math": {4: 1.0},
    "calculate": {4: 0.9, 0: 0.1},
}


def vector_line(word: str, axes: dict[int, float], dimension: int = DIMENSION) -> str:
    values = [0.0] * dimension
    for axis, value in axes.items():
        values[axis] = value
    return " ".join([word] + [f"{v:.4f}" for v in values])


def glove_text() -> str:
    return "\n".join(vector_line(word, axes) for word, axes in WORD_AXES.items()) + "\n"


def zip_bytes(members: dict[str, str]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in members.items():
            archive.writestr(name, content)
    return buffer.getvalue()


@pytest.fixture
def glove_cache(tmp_path: Path) -> Path:
    """Cache directory pre-populated with a small 50d vector table."""
    cache_dir = tmp_path / "glove"
    cache_dir.mkdir()
    (cache_dir / "glove.6B.50d.txt").write_text(glove_text())
    return cache_dir


@pytest.fixture
def glove_archive() -> bytes:
    """ZIP archive shaped like the upstream GloVe download."""
    return zip_bytes({
        "glove.6B.50d.txt": glove_text(),
        "glove.6B.100d.txt": vector_line("unused", {0: 1.0}, 100) + "\n",
    })


@pytest.fixture
def sample_tools() -> list[Tool]:
    """Catalog representing tools aggregated from several servers."""
    return [
        Tool(
            name="k8s_deploy",
            category="infrastructure",
            description="Deploy services to a kubernetes cluster",
            inputSchema={
                "type": "object",
                "properties": {"manifest": {"type": "string"}},
                "required": ["manifest"],
            },
            server="infra_server",
        ),
        Tool(
            name="web_search",
            category="research",
            description="Search the web and return matching pages",
            inputSchema={
                "type": "object",
                "properties": {"query": {"type": "string"}},
            },
            server="search_server",
        ),
        Tool(
            name="read_file",
            category="filesystem",
            description="Read a file from the local filesystem",
            inputSchema={"type": "object", "properties": {"path": {"type": "string"}}},
            server="fs_server",
        ),
        Tool(
            name="calculator",
            category="math",
            description="Calculate arithmetic expressions",
            server="math_server",
        ),
    ]
