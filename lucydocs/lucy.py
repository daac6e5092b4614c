"""Pygments lexers for the Lucy state machine language.

Key classes:
- LucyLexer: Standalone Lucy source.
- LucyTemplateLexer: JavaScript with Lucy inside ``lucy`...``` tagged templates.
"""

from __future__ import annotations

from pygments.lexer import RegexLexer, bygroups, inherit, using
from pygments.lexers.javascript import JavascriptLexer
from pygments.token import (
    Comment,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Whitespace,
)

from .highlight import LexerRegistry


class LucyLexer(RegexLexer):
    """Lexer for Lucy machine definitions.

    Covers imports, machine and state declarations, transitions, actions,
    guards, invocations and delays.
    """

    name = "Lucy"
    aliases = ["lucy"]
    filenames = ["*.lucy"]

    tokens = {
        "root": [
            (r"\s+", Whitespace),
            (r"//.*?$", Comment.Single),
            (r"/\*", Comment.Multiline, "comment"),
            (r'"(\\\\|\\[^\\]|[^"\\])*"', String.Double),
            (r"'(\\\\|\\[^\\]|[^'\\])*'", String.Single),
            (r"\b(use|from)\b", Keyword.Namespace),
            (r"\b(initial|final)\b", Keyword),
            (
                r"\b(machine|state)(\s+)([A-Za-z_][\w-]*)",
                bygroups(Keyword.Declaration, Whitespace, Name.Class),
            ),
            (
                r"\b(action|guard)(\s+)([A-Za-z_]\w*)",
                bygroups(Keyword.Declaration, Whitespace, Name.Function),
            ),
            (r"\b(invoke|on|delay|assign|spawn|send)\b", Keyword.Reserved),
            (r"@(entry|exit)\b", Name.Decorator),
            (r":[A-Za-z_]\w*", Name.Variable),
            (r"\d+(\.\d+)?(ms|s|m|h)?\b", Number),
            (r"=>|=", Operator),
            (r"[{}()\[\],.]", Punctuation),
            (r"[A-Za-z_][\w-]*", Name),
        ],
        "comment": [
            (r"[^*/]+", Comment.Multiline),
            (r"\*/", Comment.Multiline, "#pop"),
            (r"[*/]", Comment.Multiline),
        ],
    }


class LucyTemplateLexer(JavascriptLexer):
    """JavaScript lexer that highlights ``lucy`...``` templates as Lucy."""

    name = "Lucy template"
    aliases = ["lucy-template", "lucytemplate"]
    filenames = []

    tokens = {
        "root": [
            (
                r"\b(lucy)(`)((?:\\.|[^\\`])*)(`)",
                bygroups(
                    Name.Function, String.Backtick, using(LucyLexer), String.Backtick
                ),
            ),
            inherit,
        ],
    }


def register_lucy(registry: LexerRegistry) -> None:
    """Highlight plugin init hook adding the Lucy grammars."""
    registry.register(LucyLexer)
    registry.register(LucyTemplateLexer)
