"""
Watch rule table.

Immutable mapping of source directory -> WatchRule. Built once from
configuration before any watch source starts, then handed explicitly to
each source and to the dispatcher. Concurrent reads need no locking because
nothing ever writes to it.
"""

import os
from types import MappingProxyType
from typing import Iterable, Iterator, List, Optional, Tuple

from ..config.models import ShuttleConfig
from .errors import DuplicateWatchFolderError
from .models import WatchRule


def normalize_dir(path: str) -> str:
    """Canonical key form for a directory path."""
    return os.path.normpath(path)


class RuleTable:
    """
    Read-only table of watch rules keyed by source directory.
    """

    def __init__(self, rules: Iterable[WatchRule] = ()):
        """
        Build the table.

        Raises:
            DuplicateWatchFolderError: If two rules share a source directory
        """
        table = {}
        for rule in rules:
            key = normalize_dir(rule.source)
            if key in table:
                raise DuplicateWatchFolderError(
                    f"Watch folder source already exists: {rule.source}"
                )
            table[key] = rule
        self._rules = MappingProxyType(table)

    @classmethod
    def from_config(cls, config: ShuttleConfig) -> "RuleTable":
        return cls(
            WatchRule(
                source=folder.source,
                destination=folder.destination,
                is_share=folder.is_share,
                command=folder.command,
            )
            for folder in config.folders
        )

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[WatchRule]:
        return iter(self._rules.values())

    def __contains__(self, source: object) -> bool:
        return isinstance(source, str) and normalize_dir(source) in self._rules

    def sources(self) -> List[str]:
        """Source directories in sorted order."""
        return sorted(self._rules)

    def get(self, source: str) -> Optional[WatchRule]:
        """Rule for exactly this source directory, or None."""
        return self._rules.get(normalize_dir(source))

    def rule_for_file(self, file_path: str) -> Optional[WatchRule]:
        """
        Rule for the directory directly containing file_path.

        Files in subdirectories of a watched directory do not match.
        """
        return self.get(os.path.dirname(normalize_dir(file_path)))

    def partition(self) -> Tuple["RuleTable", "RuleTable"]:
        """
        Split into (local, shared) tables.

        Local rules are watched with native events, shared rules are polled.
        The two tables are disjoint.
        """
        local = RuleTable(r for r in self if not r.is_share)
        shared = RuleTable(r for r in self if r.is_share)
        return local, shared
