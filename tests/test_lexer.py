"""
Pygments lexer tests

Tests token classification of EDBML templates.
"""

from pygments.token import Comment, Keyword, Name, Operator, Punctuation, String

from edbml.lib.lexer import EdbmlLexer, template_highlight


def tokens(source):
    return [(token, value) for token, value in EdbmlLexer().get_tokens(source) if value.strip()]


class TestEdbmlLexer:
    """Test token types"""

    def test_markup_line(self):
        """Markup opener, text, shorthand and capture"""
        result = tokens("<p @class>${x}</p>\n")

        assert (Name.Tag, "<") in result
        assert (Name.Attribute, "class") in result
        assert (Operator, "$") in result
        assert (Punctuation, "{") in result
        assert (Punctuation, "}") in result
        assert (String, "</p>") in result

    def test_render_all(self):
        assert (Name.Decorator, "@@") in tokens("<div @@>\n")

    def test_processing_instruction(self):
        result = tokens("<?param name=\"x\"?>\n")

        assert (Comment.Preproc, "<?") in result
        assert (Keyword.Declaration, "param") in result

    def test_html_comment(self):
        assert (Comment.Multiline, "<!-- note -->") in tokens("<!-- note -->\n")

    def test_highlight_html(self):
        html = template_highlight("<p>${title}</p>\n")

        assert "<pre" in html
        assert "title" in html
