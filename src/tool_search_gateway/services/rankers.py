"""External ranking collaborators used by the rerank search strategy.

A ranker receives the query, the serialized tool catalog and the number of
tools wanted, and answers with tool names ordered most relevant first. The
names are not guaranteed to exist in the catalog.
"""

import json
import logging
import re
import subprocess
from typing import List, Optional, Protocol, Sequence

from .errors import ConfigurationError, RankerError

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """You select tools for an AI agent.

Below is a JSON array describing the available tools (name, category, description, parameters).
Pick at most {top_k} tools that are most useful for the request, ordered from most to least relevant.
Respond with ONLY a JSON array of tool names, for example ["tool_a", "tool_b"]. Use names exactly as listed.

Request: {query}

Tools:
{catalog}
"""

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


class ToolRanker(Protocol):
    """Capability the rerank search strategy depends on."""

    def rank(self, query: str, catalog: bytes, top_k: int) -> List[str]: ...


def build_prompt(query: str, catalog: bytes, top_k: int) -> str:
    return PROMPT_TEMPLATE.format(
        top_k=top_k, query=query, catalog=catalog.decode("utf-8")
    )


def parse_tool_names(output: str) -> List[str]:
    """Extract a JSON array of tool names from free-form model output."""
    fenced = _FENCE_RE.search(output)
    text = fenced.group(1) if fenced else output

    start = text.find("[")
    if start == -1:
        raise RankerError("Ranker output contains no JSON array", {"output": output[:500]})

    # First bracket that opens a valid array wins; prose around it is ignored
    decoder = json.JSONDecoder()
    last_error: json.JSONDecodeError | None = None
    while start != -1:
        try:
            names, _ = decoder.raw_decode(text, start)
        except json.JSONDecodeError as e:
            last_error = e
        else:
            if isinstance(names, list):
                return [name for name in names if isinstance(name, str)]
        start = text.find("[", start + 1)

    raise RankerError(
        f"Ranker output is not valid JSON: {last_error}", {"output": output[:500]}
    ) from last_error


class CLIToolRanker:
    """Asks a reasoning CLI to rank tools, one subprocess per search."""

    def __init__(self, command: Sequence[str], timeout: Optional[float] = None, name: str = "cli"):
        if not command:
            raise ConfigurationError("Ranker command cannot be empty")
        self.command = list(command)
        self.timeout = timeout
        self.name = name

    def rank(self, query: str, catalog: bytes, top_k: int) -> List[str]:
        prompt = build_prompt(query, catalog, top_k)
        logger.debug(f"Running {self.name} ranker: {' '.join(self.command)}")

        try:
            result = subprocess.run(
                self.command,
                input=prompt,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise RankerError(
                f"{self.name} ranker timed out after {self.timeout}s", {"command": self.command}
            ) from e
        except OSError as e:
            raise RankerError(f"Failed to run {self.name} ranker: {e}", {"command": self.command}) from e

        if result.returncode != 0:
            raise RankerError(
                f"{self.name} ranker exited with code {result.returncode}",
                {"command": self.command, "stderr": result.stderr.strip()[:500]},
            )

        names = parse_tool_names(result.stdout)
        logger.debug(f"{self.name} ranker returned {len(names)} names")
        return names


def claude_ranker(model: str = "haiku", timeout: Optional[float] = None) -> CLIToolRanker:
    """Ranker backed by the Claude CLI in print mode."""
    return CLIToolRanker(["claude", "-p", "--model", model], timeout=timeout, name="claude")


def codex_ranker(timeout: Optional[float] = None) -> CLIToolRanker:
    """Ranker backed by the Codex CLI reading its prompt from stdin."""
    return CLIToolRanker(["codex", "exec", "-"], timeout=timeout, name="codex")
