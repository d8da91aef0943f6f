"""Document loading exports."""

from .spec_document import SpecDocument
from .spec_loader import ParseError, load_spec_document, read_spec_document
from .spec_sections import MissingSectionError, schemas_section

__all__ = [
    "MissingSectionError",
    "ParseError",
    "SpecDocument",
    "load_spec_document",
    "read_spec_document",
    "schemas_section",
]
