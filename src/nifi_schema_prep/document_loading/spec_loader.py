"""Specification text loading service."""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path

from .spec_document import SpecDocument

_LOGGER = logging.getLogger(__name__)


class ParseError(Exception):
    """Raised when the specification text is not well-formed JSON."""


def load_spec_document(text: str, *, source_path: Path | None = None) -> SpecDocument:
    """Parse specification text into a generic tree."""
    try:
        root = json.loads(text)
    except json.JSONDecodeError as exc:
        origin = f" ({source_path})" if source_path else ""
        raise ParseError(f"Invalid specification document{origin}: {exc}") from exc

    content_hash = hashlib.sha256(text.encode("utf-8")).hexdigest()
    _LOGGER.info("Loaded specification document%s", f" from {source_path}" if source_path else "")
    return SpecDocument(root=root, content_hash=content_hash, source_path=source_path)


def read_spec_document(path: Path | str) -> SpecDocument:
    """Read and parse a specification file from disk."""
    spec_path = Path(path)
    try:
        text = spec_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ParseError(f"Specification file not found: {spec_path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseError(f"Failed to read specification file {spec_path}: {exc}") from exc
    return load_spec_document(text, source_path=spec_path)
