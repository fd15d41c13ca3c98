"""
Relocation — move a settled file to its destination.

Public API:
    Relocator — Rename first, copy-then-delete fallback
    RelocationMethod — RENAMED or COPIED
    RelocationError — Failure naming the stage that broke
    relocate — One-shot move with default settings
"""

from .errors import RelocationError
from .relocator import Relocator, RelocationMethod, relocate

__all__ = [
    "RelocationError",
    "Relocator",
    "RelocationMethod",
    "relocate",
]
