"""Sheetlint model layer -- public type re-exports."""

from sheetlint.model.finding import Finding, Severity
from sheetlint.model.nodes import (
    AtStatementNode,
    CommentNode,
    CommentStyle,
    DeclarationNode,
    Node,
    RuleNode,
    Selector,
    StylesheetNode,
)
from sheetlint.model.token import Position, Token, TokenKind

__all__ = [
    # tokens
    "Position",
    "Token",
    "TokenKind",
    # nodes
    "StylesheetNode",
    "RuleNode",
    "Selector",
    "DeclarationNode",
    "AtStatementNode",
    "CommentNode",
    "CommentStyle",
    "Node",
    # findings
    "Severity",
    "Finding",
]
