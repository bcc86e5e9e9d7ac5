import re
from typing import Dict, List, Optional, Tuple

from hoverdoc.spec import TagEntry
from . import markup

PARAM_TAG = "param"
RETURN_TAGS = ("return", "returns")

_TAG_LINE = re.compile(r"^@([A-Za-z][\w.-]*)(?:\s+(.*))?$")
_BLOCK_OPEN = re.compile(r"<(?:listing|pre)\b", re.IGNORECASE)
_BLOCK_CLOSE = re.compile(r"</(?:listing|pre)\s*>", re.IGNORECASE)

RawTag = Tuple[str, str]


def _strip_comment_markers(raw_text: str) -> List[str]:
    text = raw_text.strip()
    # Text without comment markers, such as archive metadata, has no gutter.
    has_markers = text.startswith("/*")
    if text.startswith("/**"):
        text = text[3:]
    elif has_markers:
        text = text[2:]
    if has_markers and text.endswith("*/"):
        text = text[:-2]

    lines = []
    for line in text.splitlines():
        stripped = line.lstrip()
        if has_markers and stripped.startswith("*"):
            # Drop the gutter and one space, keep the indentation of listings.
            stripped = stripped[1:]
            line = stripped[1:] if stripped.startswith(" ") else stripped
        lines.append(line.rstrip())
    return lines


def _split_blocks(lines: List[str]) -> Tuple[str, List[RawTag]]:
    description: List[str] = []
    tags: List[Tuple[str, List[str]]] = []
    code_depth = 0

    for line in lines:
        match = _TAG_LINE.match(line.strip()) if code_depth == 0 else None
        if match:
            tags.append((match.group(1), [match.group(2) or ""]))
        elif tags:
            tags[-1][1].append(line)
        else:
            description.append(line)

        code_depth += len(_BLOCK_OPEN.findall(line)) - len(_BLOCK_CLOSE.findall(line))
        code_depth = max(code_depth, 0)

    raw_tags = [
        (name, " ".join(part.strip() for part in parts if part.strip()))
        for name, parts in tags
    ]
    return "\n".join(description), raw_tags


class StructuredComment:
    """
    A documentation comment split into a free-text description and `@tag` entries.

    The derived fields are only available after `compile()`, which renders them
    either as plain text or as markdown. Compiling twice with the same flag is a
    no-op; changing the flag re-renders from the already parsed blocks.
    """

    def __init__(self, raw_text: str):
        self.raw_text = raw_text
        self.compiled = False
        self._use_markdown: Optional[bool] = None
        self._blocks: Optional[Tuple[str, List[RawTag]]] = None
        self._description = ""
        self._tags: Dict[str, List[TagEntry]] = {}

    def compile(self, use_markdown: bool = False) -> None:
        if self.compiled and self._use_markdown == use_markdown:
            return

        if self._blocks is None:
            self._blocks = _split_blocks(_strip_comment_markers(self.raw_text))
        body, raw_tags = self._blocks

        tags: Dict[str, List[TagEntry]] = {}
        for name, text in raw_tags:
            entry = TagEntry(name=name, description=markup.render_inline(text, use_markdown))
            tags.setdefault(name, []).append(entry)

        self._description = markup.render(body, use_markdown)
        self._tags = tags
        self._use_markdown = use_markdown
        self.compiled = True

    def _require_compiled(self) -> None:
        if not self.compiled:
            raise RuntimeError("StructuredComment must be compiled before it is read")

    @property
    def use_markdown(self) -> Optional[bool]:
        return self._use_markdown

    @property
    def description(self) -> Optional[str]:
        self._require_compiled()
        return self._description or None

    @property
    def tag_names(self) -> List[str]:
        self._require_compiled()
        return list(self._tags)

    def get_tags_by_name(self, name: str) -> Optional[List[TagEntry]]:
        self._require_compiled()
        entries = self._tags.get(name)
        return list(entries) if entries else None

    def get_parameter_description(
        self, parameter_name: str, tag_name: str = PARAM_TAG
    ) -> Optional[str]:
        """
        Finds the first `@param` entry written as `<name> <text>` and returns `<text>`.

        The match is an exact prefix followed by a single space, so `coun` does
        not match an entry for `count`.
        """
        entries = self.get_tags_by_name(tag_name)
        if entries is None:
            return None

        prefix = f"{parameter_name} "
        for entry in entries:
            if entry.description.startswith(prefix):
                return entry.description[len(prefix):]
        return None

    def get_return_description(self) -> Optional[str]:
        for tag_name in RETURN_TAGS:
            entries = self.get_tags_by_name(tag_name)
            if entries:
                return entries[0].description or None
        return None

    def __repr__(self) -> str:
        return f"StructuredComment(compiled={self.compiled}, raw_text={self.raw_text!r})"
