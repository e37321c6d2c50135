"""Static word-vector embeddings backed by pretrained GloVe tables.

The vector file for a preset is downloaded once into a cache directory and
reused afterwards. Text embeddings are the L2-normalized mean of the vectors
of the text's in-vocabulary tokens.
"""

import logging
import os
import shutil
import tempfile
import threading
import zipfile
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Protocol

import httpx
import numpy as np

from .errors import ArchiveError, ConfigurationError, DownloadCancelledError, ModelDownloadError
from .text import tokenize
from .vector_math import Vector, average, normalize, zero_vector

logger = logging.getLogger(__name__)

DOWNLOAD_CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class EmbeddingPreset:
    """Where a pretrained vector table comes from and its shape."""
    url: str
    filename: str
    dimension: int


EMBEDDING_PRESETS: Mapping[str, EmbeddingPreset] = MappingProxyType({
    "6B.50d": EmbeddingPreset("http://nlp.stanford.edu/data/glove.6B.zip", "glove.6B.50d.txt", 50),
    "6B.100d": EmbeddingPreset("http://nlp.stanford.edu/data/glove.6B.zip", "glove.6B.100d.txt", 100),
    "6B.200d": EmbeddingPreset("http://nlp.stanford.edu/data/glove.6B.zip", "glove.6B.200d.txt", 200),
    "6B.300d": EmbeddingPreset("http://nlp.stanford.edu/data/glove.6B.zip", "glove.6B.300d.txt", 300),
})

# One lock per cached vector file
_cache_locks: Dict[Path, threading.Lock] = {}
_cache_locks_guard = threading.Lock()


class TextEmbedder(Protocol):
    """Anything that turns text into a fixed-length vector."""

    @property
    def dimension(self) -> int: ...

    def generate(self, text: str) -> Vector: ...


def get_preset(name: str) -> EmbeddingPreset:
    """Look up a preset by name."""
    try:
        return EMBEDDING_PRESETS[name]
    except KeyError:
        available = ", ".join(EMBEDDING_PRESETS)
        raise ConfigurationError(
            f"Unknown embedding model: {name} (available: {available})",
            {"model": name, "available": list(EMBEDDING_PRESETS)},
        ) from None


def _lock_for(path: Path) -> threading.Lock:
    key = path.resolve()
    with _cache_locks_guard:
        lock = _cache_locks.get(key)
        if lock is None:
            lock = _cache_locks[key] = threading.Lock()
        return lock


def ensure_vector_file(
    preset: EmbeddingPreset,
    cache_dir: Path,
    client: Optional[httpx.Client] = None,
    timeout: Optional[float] = None,
    cancel_event: Optional[threading.Event] = None,
) -> Path:
    """Return the cached vector file for a preset, downloading it if needed.

    Concurrent callers for the same file wait for the first download and then
    reuse its result.
    """
    cache_dir.mkdir(parents=True, exist_ok=True)
    model_path = cache_dir / preset.filename

    with _lock_for(model_path):
        if model_path.exists():
            logger.info(f"Using cached embedding vectors: {model_path}")
            return model_path

        logger.info(f"Embedding vectors not found, downloading to {model_path}")
        download_and_extract(preset.url, preset.filename, cache_dir, client, timeout, cancel_event)
        logger.info(f"Embedding vectors downloaded: {model_path}")
        return model_path


def download_and_extract(
    url: str,
    member: str,
    cache_dir: Path,
    client: Optional[httpx.Client] = None,
    timeout: Optional[float] = None,
    cancel_event: Optional[threading.Event] = None,
) -> Path:
    """Download a ZIP archive and keep only one member of it."""
    fd, tmp_name = tempfile.mkstemp(dir=cache_dir, prefix=".download-", suffix=".zip")
    os.close(fd)
    archive_path = Path(tmp_name)

    try:
        written = _download(url, archive_path, client, timeout, cancel_event)
        logger.info(f"Download complete: {written // (1024 * 1024)} MB")

        logger.info(f"Extracting {member}")
        return extract_member(archive_path, member, cache_dir)
    finally:
        archive_path.unlink(missing_ok=True)


def _download(
    url: str,
    dest: Path,
    client: Optional[httpx.Client],
    timeout: Optional[float],
    cancel_event: Optional[threading.Event],
) -> int:
    if cancel_event is not None and cancel_event.is_set():
        raise DownloadCancelledError("Download cancelled", {"url": url, "bytes_written": 0})

    owns_client = client is None
    http = client or httpx.Client(follow_redirects=True, timeout=timeout)

    logger.info(f"Downloading embedding archive from {url}")
    written = 0
    try:
        with http.stream("GET", url) as response:
            if not response.is_success:
                raise ModelDownloadError(
                    f"Download failed with status: {response.status_code}",
                    {"url": url, "status_code": response.status_code},
                )
            with open(dest, "wb") as out:
                for chunk in response.iter_bytes(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if cancel_event is not None and cancel_event.is_set():
                        raise DownloadCancelledError(
                            "Download cancelled", {"url": url, "bytes_written": written}
                        )
                    out.write(chunk)
                    written += len(chunk)
    except httpx.HTTPError as e:
        raise ModelDownloadError(f"Failed to download {url}: {e}", {"url": url}) from e
    finally:
        if owns_client:
            http.close()

    return written


def extract_member(archive_path: Path, member: str, dest_dir: Path) -> Path:
    """Extract a single named member from a ZIP archive into dest_dir."""
    dest_path = dest_dir / Path(member).name
    partial_path = dest_path.with_name(dest_path.name + ".part")

    try:
        with zipfile.ZipFile(archive_path) as archive:
            try:
                info = archive.getinfo(member)
            except KeyError:
                raise ArchiveError(
                    f"File {member} not found in archive", {"member": member}
                ) from None

            with archive.open(info) as src, open(partial_path, "wb") as out:
                shutil.copyfileobj(src, out)
    except zipfile.BadZipFile as e:
        partial_path.unlink(missing_ok=True)
        raise ArchiveError(f"Corrupt archive: {e}", {"member": member}) from e
    except BaseException:
        partial_path.unlink(missing_ok=True)
        raise

    os.replace(partial_path, dest_path)
    return dest_path


def _parse_vector(fields: list[str], dimension: int) -> Vector:
    # Unparsable fields stay zero instead of rejecting the line
    vector = zero_vector(dimension)
    values = fields[:dimension]
    try:
        vector[: len(values)] = np.asarray(values, dtype=np.float32)
    except ValueError:
        for i, raw in enumerate(values):
            try:
                vector[i] = float(raw)
            except ValueError:
                continue
    return vector


def load_vectors(path: Path, dimension: int) -> Dict[str, Vector]:
    """Read a `word v1 ... vN` text file into a word -> vector table."""
    vectors: Dict[str, Vector] = {}

    with open(path, encoding="utf-8", errors="replace") as f:
        for line_count, line in enumerate(f, start=1):
            if line_count % 100_000 == 0:
                logger.debug(f"Loading embedding vectors... {line_count} lines read")

            parts = line.split()
            if len(parts) < 2:
                continue

            vectors[parts[0]] = _parse_vector(parts[1:], dimension)

    logger.info(f"Embedding vectors loaded: {len(vectors)} words")
    return vectors


class StaticEmbeddingModel:
    """Text embeddings from averaged pretrained word vectors."""

    def __init__(
        self,
        preset_name: str = "6B.50d",
        cache_dir: str | Path = "/tmp/glove",
        *,
        client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        """Resolve the preset, fetch its vector file if needed and load it.

        Args:
            preset_name: One of the keys of EMBEDDING_PRESETS
            cache_dir: Directory holding downloaded vector files
            client: Optional httpx client used for the download
            timeout: httpx timeout in seconds when no client is given
            cancel_event: Set it to abort a download in progress
        """
        preset = get_preset(preset_name)
        self.preset_name = preset_name
        self.cache_dir = Path(cache_dir).expanduser()
        self._dimension = preset.dimension

        model_path = ensure_vector_file(preset, self.cache_dir, client, timeout, cancel_event)
        self._vectors = load_vectors(model_path, preset.dimension)

        logger.info(
            f"Embedding model ready: {preset_name} "
            f"(vocabulary_size={len(self._vectors)}, dimension={self._dimension})"
        )

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def vocabulary_size(self) -> int:
        return len(self._vectors)

    def generate(self, text: str) -> Vector:
        """Embed text as the normalized mean of its known word vectors."""
        found = [self._vectors[token] for token in tokenize(text) if token in self._vectors]
        if not found:
            return zero_vector(self._dimension)
        return normalize(average(found))
