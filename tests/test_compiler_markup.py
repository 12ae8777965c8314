"""
Character compiler tests - markup mode

Tests mode switching, interpolation/injection operators, attribute
shorthand, continuation lines and the unique-name counter.
"""

import pytest
from loguru import logger

from edbml.lib.compiler import Compiler
from edbml.lib.function import FunctionCompiler
from edbml.lib.output import Output
from edbml.lib.scanner import Scanner
from edbml.lib.unparse import Unparser, escape
from edbml.models.scan import Mode, ScanState

PREAMBLE = "'use strict';\n"
EPILOGUE = "\n\nreturn out.write ();"


def body(source):
    """Compile source and strip the fixed preamble and epilogue"""
    compiled = Compiler().body_compile(source)
    assert compiled.startswith(PREAMBLE)
    assert compiled.endswith(EPILOGUE)
    return compiled[len(PREAMBLE):-len(EPILOGUE)]


@pytest.fixture
def messages():
    """Collect loguru messages emitted while a test runs"""
    collected = []
    handler_id = logger.add(collected.append, level="DEBUG", format="{message}")
    yield collected
    logger.remove(handler_id)


class TestModeSwitching:
    """Test script/markup line classification"""

    def test_script_passthrough(self):
        """Script lines are copied verbatim"""
        assert body("var x = 1;\nx++;") == "var x = 1;\nx++;"

    def test_markup_line(self):
        """A line starting with '<' becomes a string append"""
        assert body("<p>hello</p>") == "out.html += '<p>hello</p>';"

    def test_markup_inside_script_block(self):
        """Markup lines interleave with script lines"""
        source = "if (ok) {\n<p>yes</p>\n}"
        assert body(source) == "if (ok) {\nout.html += '<p>yes</p>';\n}"

    def test_indented_markup_is_script(self):
        """'<' only opens markup as the first character of a line"""
        assert body("  <p>") == "  <p>"

    def test_generated_lines_never_start_with_markup(self):
        """No generated line begins with '<'"""
        source = "<ul>\nfor (var i = 0; i < 3; i++) {\n<li>${i}</li>\n}\n</ul>"
        compiled = Compiler().body_compile(source)
        assert not any(line.startswith("<") for line in compiled.split("\n"))

    def test_capture_lines_never_start_with_markup(self):
        """Capture continuation lines opening with '<' are indented"""
        compiled = FunctionCompiler().compile("<p>${a\n< b}</p>\n<b #{x\n<y}>").source

        assert not any(line.startswith("<") for line in compiled.split("\n"))
        assert "' + (a\n < b) + '" in compiled
        assert "{\nx\n <y;\n}" in compiled


class TestPeek:
    """Test ${expr} inline reads"""

    def test_simple_expression(self):
        """Expression spliced by direct concatenation"""
        assert body("<p>${title}</p>") == "out.html += '<p>' + (title) + '</p>';"

    def test_nested_braces(self):
        """Braces inside the expression are balanced"""
        assert body("<p>${ {a: 1}.a }</p>") == "out.html += '<p>' + ( {a: 1}.a ) + '</p>';"

    def test_quotes_inside_expression_not_escaped(self):
        """Expression text is script, not markup"""
        assert body("<p>${'x'}</p>") == "out.html += '<p>' + ('x') + '</p>';"

    def test_no_helper_hoisted(self):
        """Peek never hoists a helper or advances the counter"""
        compiler = Compiler()
        compiled = compiler.body_compile("<p>${title}</p>")

        assert "edb.$set" not in compiled
        assert compiler.keyindex == 1

    def test_expression_across_lines(self):
        """An open capture continues on the next line"""
        assert body("<p>${a +\nb}</p>") == "out.html += '<p>' + (a +\nb) + '</p>';"

    def test_dollar_without_brace_is_text(self):
        """A sigil not followed by '{' is literal"""
        assert body("<p>$5</p>") == "out.html += '<p>$5</p>';"


class TestPokeAndGeek:
    """Test #{expr} and ?{expr} outline/inline combos"""

    def test_poke(self):
        """Hoisted callback ahead of the block, reference at the call site"""
        assert body("<button #{save()}>Save</button>") == (
            "var $edb1 = edb.$set(function(value, checked) {\nsave();\n}, this);\n"
            "out.html += '<button edb.$run(event,&quot;' + $edb1 + '&quot;);>Save</button>';"
        )

    def test_geek(self):
        """Hoisted getter, reference reads through edb.$get"""
        assert body("<input value=\"?{user.name}\"/>") == (
            "var $edb1 = edb.$set(function() {\nreturn user.name;\n}, this);\n"
            "out.html += '<input value=\"edb.$get(&quot;' + $edb1 + '&quot;);\"/>';"
        )

    def test_counter_advances_by_one(self):
        """One name per injection regardless of expression length"""
        compiler = Compiler()
        compiler.body_compile("<button #{a.very.long.expression(with, many, args)}>")

        assert compiler.keyindex == 2

    def test_two_captures_same_block(self):
        """Distinct names, hoisted in creation order ahead of the block"""
        compiled = body("<a onclick=\"#{a()}\" title=\"?{b}\">")
        first = compiled.index("var $edb1")
        second = compiled.index("var $edb2")
        opening = compiled.index("out.html +=")

        assert first < second < opening

    def test_captures_in_separate_blocks(self):
        """Each helper is hoisted ahead of its own markup block"""
        compiled = body("<a onclick=\"#{a()}\">\nvar x = 1;\n<a onclick=\"#{b()}\">")
        lines = compiled.split("\n")

        assert lines.index("var x = 1;") < lines.index("var $edb2 = edb.$set(function(value, checked) {")
        assert lines[0] == "var $edb1 = edb.$set(function(value, checked) {"

    def test_names_not_reused_across_calls(self):
        """The counter survives between compilations"""
        compiler = Compiler()
        first = compiler.body_compile("<b #{a()}>")
        second = compiler.body_compile("<b #{a()}>")

        assert "$edb1" in first
        assert "$edb2" in second
        assert "$edb1" not in second


class TestMarkupText:
    """Test escaping and continuation of markup text"""

    def test_single_quote_escaped(self):
        """Bare quotes cannot end the string literal"""
        assert body("<p>it's</p>") == "out.html += '<p>it\\'s</p>';"

    def test_backslash_escaped(self):
        """Backslashes are escaped too"""
        assert body("<p>a\\b</p>") == "out.html += '<p>a\\\\b</p>';"

    def test_trailing_plus_continues(self):
        """'+' at line end keeps the string open on the next line"""
        assert body("<div +\nclass=\"x\">") == (
            "out.html += '<div ' +\n'class=\"x\">';"
        )

    def test_continued_value_joined(self):
        """A continued line adds no newline to the rendered markup"""
        compiled = body("<a href=\"x+\n+y\">")

        assert compiled.startswith("out.html += '<a href=\"x' +\n'y\">'")
        assert "\\n" not in compiled

    def test_crlf_line_endings(self):
        """CRLF input continues and splits lines like LF input"""
        assert body("<div +\r\nclass=\"x\">") == body("<div +\nclass=\"x\">")
        assert "\r" not in body("<p>a</p>\r\n<p>b</p>")

    def test_leading_plus_consumed(self):
        """'+' at the start of a continued line is a marker, not text"""
        compiled = Compiler().body_compile("<div +\n+ class=\"x\">")

        assert "+ class" not in compiled
        assert " class=\"x\">" in compiled

    def test_open_string_closed_at_end(self):
        """Scanning that ends inside markup closes the literal"""
        compiled = Compiler().body_compile("<p>a +")

        assert compiled.endswith("\n'';\nreturn out.write ();")


class TestAttributeShorthand:
    """Test @name, -@name and @@"""

    def test_render_attribute(self):
        """@name renders the attribute"""
        assert body("<div @class>") == "out.html += '<div ' + att.$html ( 'class' ) + '>';"

    def test_pop_attribute(self):
        """-@name suppresses the attribute and drops the '-'"""
        assert body("<div -@id>") == "out.html += '<div ' + att.$pop ( 'id' ) + '>';"

    def test_render_all(self):
        """@@ renders all pending attributes"""
        assert body("<div @@>") == "out.html += '<div ' + att.$all () + '>';"

    def test_qualified_name(self):
        """Names may hold dashes, underscores and dots"""
        assert "att.$html ( 'data-x_y.z' )" in body("<div @data-x_y.z>")

    def test_missing_name_left_as_text(self, messages):
        """'@' without a name is literal and reported"""
        result = FunctionCompiler().compile("<p>a @ b</p>")

        assert "a @ b" in result.source
        assert any("without attribute name" in m for m in messages)

    def test_inside_poke_not_implemented(self, messages):
        """@ right after #{ is reported and generates nothing"""
        result = FunctionCompiler().compile("<p #{@x}>")

        assert "att.$" not in result.source
        assert any("not implemented" in m for m in messages)


class TestTagMode:
    """Test the tag-mode extension handler"""

    def test_reference_and_close(self):
        """${ marks a reference, '>' returns to script, nothing emitted"""
        state = ScanState()
        state.tag_enter()
        output = Output()

        Scanner().run(Compiler(), "a${b}>c", state, output)

        assert state.refs is True
        assert state.mode is Mode.SCRIPT
        assert Unparser().unparse(output.body, output.outlines) == "c\n"


class TestEscape:
    """Test the single escaping routine"""

    def test_escape(self):
        assert escape("a\\b'c\r") == "a\\\\b\\'c\\r"

    def test_plain_text_untouched(self):
        assert escape("<p class=\"x\">") == "<p class=\"x\">"
