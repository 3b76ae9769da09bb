"""
Exclusion pattern matching for directory scanning.

Rules come in two flavours:
- Wildcard rules (containing '*'): '*' matches any character sequence,
  tested against the entry name.
- Literal rules: match when the entry name equals the rule, or when the
  entry's relative path contains the rule anywhere.

Literal rules are substring matches on the relative path, so a rule like
'git' also excludes a folder named 'legit'. This is intentional and kept
for compatibility with existing config files.

Empty rules would match every relative path, so they are dropped with a
warning instead of excluding the whole tree.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Sequence

WILDCARD = '*'


class PatternMatcher:
    """
    Pre-compiled exclusion rule set.

    Usage:
        matcher = PatternMatcher(['.git', 'node_modules', '*.tmp'])
        if matcher.matches(name, relative_path):
            ...  # skip entry and its subtree
    """

    def __init__(self, rules: Iterable[str]):
        self._wildcard_patterns: list[re.Pattern] = []
        self._literal_rules: list[str] = []

        for rule in rules:
            self._add_rule(rule)

    def _add_rule(self, rule: str) -> None:
        """Compile a single rule."""
        if not rule:
            logging.warning("PatternMatcher - Ignoring empty exclusion rule")
            return

        if WILDCARD in rule:
            self._wildcard_patterns.append(re.compile(self._rule_to_regex(rule)))
        else:
            self._literal_rules.append(rule)

    @staticmethod
    def _rule_to_regex(rule: str) -> str:
        """Convert a wildcard rule to an unanchored regex."""
        return '.*'.join(re.escape(chunk) for chunk in rule.split(WILDCARD))

    @property
    def rule_count(self) -> int:
        return len(self._wildcard_patterns) + len(self._literal_rules)

    def matches(self, entry_name: str, entry_relative_path: str) -> bool:
        """
        Check if an entry should be excluded.

        Args:
            entry_name: Final path segment of the entry
            entry_relative_path: Path of the entry relative to the scan root

        Returns:
            True if any rule matches.
        """
        for pattern in self._wildcard_patterns:
            if pattern.search(entry_name):
                return True

        for rule in self._literal_rules:
            if entry_name == rule or rule in entry_relative_path:
                return True

        return False


def matches(entry_name: str, entry_relative_path: str, rules: Sequence[str]) -> bool:
    """Check a single entry against a rule list without keeping a compiled matcher."""
    return PatternMatcher(rules).matches(entry_name, entry_relative_path)
