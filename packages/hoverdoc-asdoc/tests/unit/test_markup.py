from hoverdoc.asdoc import render, render_inline


def test_inline_link_tags():
    assert render("See {@link flash.display.Sprite}.", use_markdown=True) == (
        "See `flash.display.Sprite`."
    )
    assert render("See {@link flash.display.Sprite}.", use_markdown=False) == (
        "See flash.display.Sprite."
    )


def test_anchor_becomes_markdown_link():
    text = 'Read <a href="http://example.com/a?b=1&amp;c=2">the docs</a>'

    assert render(text, use_markdown=True) == (
        "Read [the docs](http://example.com/a?b=1&c=2)"
    )
    assert render(text, use_markdown=False) == "Read the docs"


def test_emphasis():
    text = "<i>one</i> <em>two</em> <strong>three</strong>"

    assert render(text, use_markdown=True) == "_one_ _two_ **three**"
    assert render(text, use_markdown=False) == "one two three"


def test_entities_are_unescaped_after_tags_are_removed():
    assert render("a &lt;b&gt; <b>c</b>", use_markdown=False) == "a <b> c"


def test_list_items_become_bullets():
    text = "Items:<ul><li>one</li><li>two</li></ul>"

    assert render(text, use_markdown=True) == "Items:\n- one\n- two"


def test_line_breaks():
    assert render("first<br/>second", use_markdown=False) == "first\nsecond"


def test_paragraph_whitespace_is_collapsed():
    text = "  one\n   two   three\n\n\n  four  "

    assert render(text, use_markdown=False) == "one two three\n\nfour"


def test_pre_block_in_plain_text_keeps_layout():
    text = "Before<pre>\n  a &lt; b\n    c\n</pre>After"

    assert render(text, use_markdown=False) == "Before\n\na < b\n  c\n\nAfter"


def test_empty_input():
    assert render("   \n  ", use_markdown=True) == ""


def test_render_inline_keeps_whitespace_inside_the_line():
    assert render_inline("count\tthe  number", use_markdown=False) == "count\tthe  number"


def test_nul_bytes_in_text_cannot_address_code_blocks():
    text = "Slot \x000\x00 and \x007\x00.\n<listing>x = 1;</listing>"

    assert render(text, use_markdown=True) == "Slot 0 and 7.\n\n```\nx = 1;\n```"
    assert render("hello \x007\x00 world", use_markdown=False) == "hello 7 world"
