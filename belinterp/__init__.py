"""Lexer, expression tree, scopes and built-in procedures for the Bel scripting language."""

__version__ = "0.1.0"

__all__ = ["cursor", "environment", "errors", "expression", "function", "lexer", "operators"]