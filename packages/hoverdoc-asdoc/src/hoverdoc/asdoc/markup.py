import html
import re
import textwrap
from typing import List

_CODE_BLOCK = re.compile(
    r"<(listing|pre)\b[^>]*>(.*?)</\1\s*>", re.IGNORECASE | re.DOTALL
)
_PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n|<p\b[^>]*>|</p\s*>", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")
_INLINE_LINK = re.compile(r"\{@link\s+([^}]*)\}")
_ANCHOR = re.compile(
    r"<a\b[^>]*?href\s*=\s*[\"']([^\"']*)[\"'][^>]*>(.*?)</a\s*>",
    re.IGNORECASE | re.DOTALL,
)
_LINE_BREAK = re.compile(r"<br\s*/?>", re.IGNORECASE)
_LIST_ITEM = re.compile(r"<li\b[^>]*>", re.IGNORECASE)
_ANY_TAG = re.compile(r"</?[a-zA-Z][^>]*>")
_PLACEHOLDER = re.compile("\x00(\\d+)\x00")

_MARKDOWN_INLINE = [
    (re.compile(r"</?(?:code|codeph)\s*>", re.IGNORECASE), "`"),
    (re.compile(r"</?(?:b|strong)\s*>", re.IGNORECASE), "**"),
    (re.compile(r"</?(?:i|em)\s*>", re.IGNORECASE), "_"),
]


def render(text: str, use_markdown: bool) -> str:
    """
    Renders a comment body written in the ASDoc HTML dialect.

    Paragraphs (blank lines or `<p>`) are separated by a blank line and their
    whitespace is collapsed. `<listing>` and `<pre>` blocks keep their layout and
    become fenced code blocks when `use_markdown` is set.

    Args:
        text: The comment body with comment markers already removed.
        use_markdown: Render to markdown instead of plain text.

    Returns:
        The rendered text, or an empty string if nothing remains.
    """
    blocks: List[str] = []

    def stash(match: "re.Match[str]") -> str:
        blocks.append(textwrap.dedent(html.unescape(match.group(2))).strip("\n"))
        return f"\n\n\x00{len(blocks) - 1}\x00\n\n"

    # NUL delimits the code block placeholders.
    text = _CODE_BLOCK.sub(stash, text.replace("\x00", ""))

    paragraphs = []
    for chunk in _PARAGRAPH_BREAK.split(text):
        paragraph = render_inline(_WHITESPACE.sub(" ", chunk), use_markdown)
        if paragraph:
            paragraphs.append(paragraph)

    def restore(match: "re.Match[str]") -> str:
        code = blocks[int(match.group(1))]
        return f"```\n{code}\n```" if use_markdown else code

    return _PLACEHOLDER.sub(restore, "\n\n".join(paragraphs))


def render_inline(text: str, use_markdown: bool) -> str:
    """Renders a single run of text. Whitespace inside a line is left as written."""
    if use_markdown:
        text = _INLINE_LINK.sub(lambda m: f"`{m.group(1).strip()}`", text)
        text = _ANCHOR.sub(lambda m: f"[{m.group(2).strip()}]({m.group(1)})", text)
        for pattern, replacement in _MARKDOWN_INLINE:
            text = pattern.sub(replacement, text)
    else:
        text = _INLINE_LINK.sub(lambda m: m.group(1).strip(), text)

    text = _LIST_ITEM.sub("\n- ", text)
    text = _LINE_BREAK.sub("\n", text)
    text = _ANY_TAG.sub("", text)
    text = html.unescape(text)
    return "\n".join(line.strip() for line in text.split("\n")).strip()
