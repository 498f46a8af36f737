from __future__ import annotations
import os, json, logging
from typing import Any, Optional, Type, TypeVar
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

# Load env from a local .env (works whether launched from the project dir or by an MCP client)
load_dotenv()
load_dotenv(dotenv_path=Path(__file__).parent / ".env", override=False)

# ------------------------------------------------------------------------------
# Environment / Config
# ------------------------------------------------------------------------------

# Directory holding the pre-generated JSON corpora
DATA_DIR = Path(os.getenv("ORDERLY_MCP_DATA_DIR") or Path(__file__).parent / "guides" / "data")

LOG_LEVEL = os.getenv("ORDERLY_MCP_LOG_LEVEL", "INFO").upper()

# "stdio" for local MCP clients, "streamable-http" for hosted deployments
TRANSPORT = os.getenv("ORDERLY_MCP_TRANSPORT", "stdio").strip().lower()
HOST = os.getenv("ORDERLY_MCP_HOST", "127.0.0.1")
PORT = int(os.getenv("ORDERLY_MCP_PORT", "3000"))

CORPUS_FILES = {
    "docs": "documentation.json",
    "sdk_patterns": "sdk-patterns.json",
    "python_sdk": "python-sdk-patterns.json",
    "workflows": "workflows.json",
    "components": "component-guides.json",
    "api": "api.json",
    "indexer_api": "indexer-api.json",
    "orderly_one_api": "orderly-one-api.json",
    "contracts": "contracts.json",
}

OVERVIEW_FILE = Path("resources") / "overview.md"

log = logging.getLogger("orderly-data")

M = TypeVar("M", bound=BaseModel)


class CorpusError(RuntimeError):
    """A static corpus is missing or malformed. This is a deployment problem, not a bad query."""


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------

def _path(name: str, data_dir: Optional[Path] = None) -> Path:
    root = Path(data_dir) if data_dir is not None else DATA_DIR
    return root / CORPUS_FILES.get(name, name)

def read_json(name: str, data_dir: Optional[Path] = None) -> Any:
    """Read one corpus file by short name (see CORPUS_FILES) or file name."""
    path = _path(name, data_dir)
    try:
        with path.open(encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError as e:
        log.error("Corpus file missing: %s", path)
        raise CorpusError(f"Corpus file not found: {path}") from e
    except json.JSONDecodeError as e:
        log.error("Corpus file is not valid JSON: %s (%s)", path, e)
        raise CorpusError(f"Corpus file {path} is not valid JSON: {e}") from e

def load_corpus(name: str, model: Type[M], data_dir: Optional[Path] = None) -> M:
    """Read and validate a corpus against its record model."""
    raw = read_json(name, data_dir)
    try:
        corpus = model.model_validate(raw)
    except ValidationError as e:
        log.error("Corpus %s failed validation: %s", name, e)
        raise CorpusError(f"Corpus {name!r} does not match {model.__name__}: {e}") from e
    log.info("Loaded corpus %s from %s", name, _path(name, data_dir))
    return corpus

def read_text(relative: Path | str, data_dir: Optional[Path] = None) -> str:
    root = Path(data_dir) if data_dir is not None else DATA_DIR
    path = root / relative
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        log.error("Resource file missing: %s", path)
        raise CorpusError(f"Resource file not found: {path}") from e
