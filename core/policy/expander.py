"""Rewrite wildcard Action/NotAction values into concrete permissions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from core.errors import MalformedActionValue
from core.index import PrefixIndex
from core.models import PolicyDocument, PolicyStatement
from core.query import strip_wildcards, unique

logger = logging.getLogger(__name__)

_FIELDS = (("action", "Action"), ("not_action", "NotAction"))


@dataclass(slots=True)
class ExpansionResult:
    document: PolicyDocument
    errors: list[MalformedActionValue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True, slots=True)
class PolicyExpander:
    """Expand policy documents against a shared, read-only index.

    The expander keeps no state between calls; one instance can serve many
    documents, including from several threads at once.
    """

    index: PrefixIndex

    def expand(self, document: PolicyDocument) -> ExpansionResult:
        errors: list[MalformedActionValue] = []
        statements = [
            self._expand_statement(position, statement, errors)
            for position, statement in enumerate(document.statements)
        ]
        expanded = document.model_copy(update={"statements": statements})
        expanded.model_fields_set.add("statements")
        return ExpansionResult(document=expanded, errors=errors)

    def expand_pattern(self, pattern: str) -> list[str]:
        """Expand a single action pattern such as ``s3:Get*``."""
        matches = unique(self.index.search_prefix(strip_wildcards(pattern)))
        if not matches:
            logger.debug("Pattern %r matched no known action", pattern)
        return matches

    def expand_value(self, value: Any) -> list[str] | None:
        """Expand a string or list of strings; ``None`` signals an unsupported shape."""
        if isinstance(value, str):
            return self.expand_pattern(value)
        if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
            union: set[str] = set()
            for item in value:
                union.update(self.expand_pattern(item))
            return sorted(union)
        return None

    # ------------------------------------------------------------------
    def _expand_statement(
        self,
        position: int,
        statement: PolicyStatement,
        errors: list[MalformedActionValue],
    ) -> PolicyStatement:
        updates: dict[str, list[str]] = {}
        for attribute, label in _FIELDS:
            if attribute not in statement.model_fields_set:
                continue
            expanded = self.expand_value(getattr(statement, attribute))
            if expanded is None:
                error = MalformedActionValue(position, label)
                logger.warning("%s", error)
                errors.append(error)
                expanded = []
            updates[attribute] = expanded
        expanded_statement = statement.model_copy(update=updates, deep=True)
        expanded_statement.model_fields_set.update(updates)
        return expanded_statement


def expand_policy(document: PolicyDocument, index: PrefixIndex) -> tuple[PolicyDocument, list[MalformedActionValue]]:
    result = PolicyExpander(index).expand(document)
    return result.document, result.errors


__all__ = ["ExpansionResult", "PolicyExpander", "expand_policy"]
