"""
Custom Pygments lexer for EDBML syntax highlighting

Highlights template source for inspection and debugging, and renders
compiled function bodies as HTML.

Token types:
- Comment.Preproc / Keyword.Declaration: processing instructions (<?param?>)
- Name.Tag: markup line opener
- String: literal markup text
- Operator + Punctuation: capture sigils and braces (${ }, #{ }, ?{ })
- Name.Attribute: attribute shorthand (@class, -@id)
- Name.Decorator: render-all shorthand (@@)
- Script lines and captured expressions are delegated to JavascriptLexer
"""

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import RegexLexer, bygroups, using
from pygments.lexers import JavascriptLexer
from pygments.token import (
    Comment,
    Keyword,
    Name,
    Operator,
    Punctuation,
    String,
    Text,
)


class EdbmlLexer(RegexLexer):
    """
    Lexer for EDBML templates

    Example:
        <li class="@class">${item.label}</li>

    Tokens:
        < → Name.Tag
        li class=" → String
        @ class → Operator, Name.Attribute
        ${ → Operator, Punctuation
        item.label → (JavaScript)
        } → Punctuation
    """

    name = 'EDBML'
    aliases = ['edbml']
    filenames = ['*.edbml']

    tokens = {
        'root': [
            # HTML and block comments
            (r'<!--[\s\S]*?-->', Comment.Multiline),
            (r'/\*[\s\S]*?\*/', Comment.Multiline),

            # Processing instructions
            (r'(<\?)(\s*[A-Za-z_][\w.-]*)([\s\S]*?)(\?>)',
             bygroups(Comment.Preproc, Keyword.Declaration, Name.Attribute, Comment.Preproc)),

            # Markup line
            (r'^<', Name.Tag, 'markup'),

            # Script
            (r'[^\n]+', using(JavascriptLexer)),
            (r'\n', Text),
        ],

        'markup': [
            # Soft continuation keeps the string open
            (r'\+\n\+?', Operator),
            (r'\n', Text, '#pop'),

            # Captures
            (r'([$#?])(\{)', bygroups(Operator, Punctuation), 'capture'),

            # Attribute shorthand
            (r'@@', Name.Decorator),
            (r'(-?@)([A-Za-z_.\-][\w.\-]*)', bygroups(Operator, Name.Attribute)),

            # Literal markup
            (r'[^$#?@+\n-]+', String),
            (r'.', String),
        ],

        'capture': [
            (r'\{', Punctuation, '#push'),
            (r'\}', Punctuation, '#pop'),
            (r'[^{}]+', using(JavascriptLexer)),
        ],
    }


def template_highlight(source: str, style: str = "default") -> str:
    """
    Render EDBML template source as highlighted HTML

    Args:
        source: Template text
        style: Pygments style name

    Returns:
        HTML fragment with inline styles
    """
    formatter = HtmlFormatter(style=style, noclasses=True)
    return highlight(source, EdbmlLexer(), formatter)


def javascript_highlight(code: str, style: str = "default") -> str:
    """Render compiled JavaScript as highlighted HTML"""
    formatter = HtmlFormatter(style=style, noclasses=True)
    return highlight(code, JavascriptLexer(), formatter)
