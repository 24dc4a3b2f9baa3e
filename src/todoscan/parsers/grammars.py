"""
Builtin comment grammars, keyed by parser identifier.
"""

from __future__ import annotations

from .base import CommentGrammar, ParserFactory

_HTML_BLOCK = (r"<!--", r"-->")
_C_BLOCK = (r"/\*", r"\*/")
_C_BLOCK_PREFIX = r"[ \t]*\**!?[ \t]*"
# ### only delimits a block when alone on its line; banners like ##### don't
_HERECOMMENT = r"^[ \t]*###[ \t]*$"

GRAMMARS: tuple[CommentGrammar, ...] = (
    # C family: // and /* */
    CommentGrammar(
        name="defaultParser",
        line_markers=(r"//+",),
        blocks=(_C_BLOCK,),
        block_prefix=_C_BLOCK_PREFIX,
    ),
    CommentGrammar(
        name="coffeeParser",
        line_markers=(r"#+",),
        blocks=((_HERECOMMENT, _HERECOMMENT),),
        block_prefix=r"[ \t]*#*[ \t]*",
    ),
    # Triple-quoted strings often open right after "(" or "=", so no anchoring
    CommentGrammar(
        name="pythonParser",
        line_markers=(r"#+",),
        blocks=((r'"""', r'"""'), (r"'''", r"'''")),
        anchor_blocks=False,
    ),
    # Markup comments commonly sit directly after a tag
    CommentGrammar(
        name="twigParser",
        blocks=(_HTML_BLOCK, (r"\{#", r"#\}")),
        anchor_blocks=False,
    ),
    CommentGrammar(
        name="hbsParser",
        blocks=(_HTML_BLOCK, (r"\{\{!--", r"--\}\}"), (r"\{\{!", r"\}\}")),
        anchor_blocks=False,
    ),
    CommentGrammar(
        name="ejsParser",
        blocks=(_HTML_BLOCK, (r"<%#", r"%>")),
        anchor_blocks=False,
    ),
    CommentGrammar(
        name="ssParser",
        blocks=((r"<%--", r"--%>"), _HTML_BLOCK),
        anchor_blocks=False,
    ),
    CommentGrammar(
        name="jadeParser",
        line_markers=(r"//-?",),
    ),
    # Haml: -# silent comments, / HTML comments
    CommentGrammar(
        name="hamlParser",
        line_markers=(r"-#", r"/"),
    ),
    CommentGrammar(
        name="haskellParser",
        line_markers=(r"--+",),
        blocks=((r"\{-", r"-\}"),),
    ),
    CommentGrammar(
        name="luaParser",
        line_markers=(r"--",),
        blocks=((r"--\[=*\[", r"\]=*\]"),),
    ),
    CommentGrammar(
        name="erlangParser",
        line_markers=(r"%+",),
    ),
    CommentGrammar(
        name="latexParser",
        line_markers=(r"%+",),
        blocks=((r"\\begin\{comment\}", r"\\end\{comment\}"),),
    ),
    CommentGrammar(
        name="pascalParser",
        line_markers=(r"//",),
        blocks=((r"\{", r"\}"), (r"\(\*", r"\*\)")),
    ),
    CommentGrammar(
        name="clojureParser",
        line_markers=(r";+",),
    ),
    CommentGrammar(
        name="fsharpParser",
        line_markers=(r"//+",),
        blocks=((r"\(\*", r"\*\)"),),
        block_prefix=r"[ \t]*\**[ \t]*",
    ),
)

BUILTIN_PARSERS: dict[str, ParserFactory] = {g.name: g for g in GRAMMARS}
