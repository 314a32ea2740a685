"""Policy document rewriting."""

from .expander import ExpansionResult, PolicyExpander, expand_policy

__all__ = ["ExpansionResult", "PolicyExpander", "expand_policy"]
