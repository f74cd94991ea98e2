"""Response decoding and projection."""

from .envelope import Envelope, decode_envelope, load_payload
from .projection import Outcome, project, project_first, project_map

__all__ = [
    "Envelope",
    "Outcome",
    "decode_envelope",
    "load_payload",
    "project",
    "project_first",
    "project_map",
]
