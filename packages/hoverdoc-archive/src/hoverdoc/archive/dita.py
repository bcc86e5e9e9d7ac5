"""
Reader for ASDoc DITA metadata, the documentation format embedded in SWC
archives (`docs/packages.dita`) and shipped as the bundled platform reference.

Each documented element is flattened into a raw comment in the same dialect
as inline source comments, so a single `StructuredComment` model handles both.
"""

import html
import logging
import re
import xml.etree.ElementTree as ET
from typing import Callable, Dict, Iterator, List, Optional, Set

from .exceptions import MetadataParseError

log = logging.getLogger(__name__)

RefReader = Callable[[str], Optional[bytes]]

GLOBAL_PACKAGE_NAMES = {"__Global__", "Top Level", "toplevel"}

_MAP_REF_TAGS = {"apiItemRef", "topicref"}
_MEMBER_TAGS = {"apiOperation", "apiConstructor", "apiValue"}
# Description lines must not read as `@tag` lines of the flattened comment.
_TAG_LIKE_LINE = re.compile(r"^([ \t]*)@", re.MULTILINE)
_MARKUP_TAGS = {
    "codeph": "code",
    "codeblock": "listing",
    "pre": "pre",
    "p": "p",
    "ul": "ul",
    "ol": "ol",
    "li": "li",
    "b": "b",
    "strong": "b",
    "i": "i",
    "em": "i",
}


class MetadataList:
    """An immutable index from qualified name to raw comment text."""

    def __init__(self, entries: Dict[str, str]):
        self._entries = dict(entries)

    def get_comment_text(self, qualified_name: str) -> Optional[str]:
        return self._entries.get(qualified_name)

    def names(self) -> List[str]:
        return sorted(self._entries)

    def __contains__(self, qualified_name: object) -> bool:
        return qualified_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def parse_dita_document(
    data: bytes, read_ref: Optional[RefReader] = None, source: str = "<dita>"
) -> MetadataList:
    """
    Parses a DITA document (or DITA map) into a MetadataList.

    Args:
        data: The raw XML bytes.
        read_ref: Resolves an `href` found in a DITA map to the bytes of the
                  referenced document, or None if it does not exist. Without
                  it, map references are ignored.
        source: A label for error messages.

    Raises:
        MetadataParseError: If the document or a referenced document is not
                            well-formed XML.
    """
    entries: Dict[str, str] = {}
    try:
        _collect(_parse_xml(data, source), read_ref, entries, visited=set())
    except RecursionError as e:
        raise MetadataParseError(f"Markup nested too deeply in {source}") from e
    return MetadataList(entries)


def _parse_xml(data: bytes, source: str) -> ET.Element:
    try:
        return ET.fromstring(data)
    except ET.ParseError as e:
        raise MetadataParseError(f"Invalid DITA in {source}: {e}") from e


def _collect(
    root: ET.Element,
    read_ref: Optional[RefReader],
    entries: Dict[str, str],
    visited: Set[str],
) -> None:
    for element in root.iter():
        tag = _local_name(element.tag)
        if tag == "apiPackage":
            _collect_package(element, entries)
        elif tag in _MAP_REF_TAGS and read_ref is not None:
            href = element.get("href")
            if not href or href in visited:
                continue
            visited.add(href)
            data = read_ref(href)
            if data is None:
                log.debug("DITA map references missing document '%s'", href)
                continue
            _collect(_parse_xml(data, href), read_ref, entries, visited)


def _collect_package(package: ET.Element, entries: Dict[str, str]) -> None:
    package_name = _child_text(package, "apiName")
    if package_name in GLOBAL_PACKAGE_NAMES or package.get("id", "").startswith(
        "global"
    ):
        package_name = ""

    for child in package:
        tag = _local_name(child.tag)
        if tag == "apiClassifier":
            class_name = _child_text(child, "apiName")
            if not class_name:
                continue
            qualified_name = _join(package_name, class_name)
            entries[qualified_name] = _comment_text(child, "apiClassifier")
            for member in child:
                if _local_name(member.tag) in _MEMBER_TAGS:
                    _collect_member(member, qualified_name, entries)
        elif tag in _MEMBER_TAGS:
            _collect_member(child, package_name, entries)


def _collect_member(member: ET.Element, owner: str, entries: Dict[str, str]) -> None:
    name = _child_text(member, "apiName")
    if name:
        entries[_join(owner, name)] = _comment_text(member, _local_name(member.tag))


def _comment_text(element: ET.Element, kind: str) -> str:
    detail = _child(element, f"{kind}Detail")

    body = _inner_markup(_child(detail, "apiDesc")).strip()
    if not body:
        body = _inner_markup(_child(element, "shortdesc")).strip()
    body = _TAG_LIKE_LINE.sub(r"\1&#64;", body)
    lines = [body] if body else []

    definition = _child(detail, f"{kind}Def")
    if definition is not None:
        for param in _children(definition, "apiParam"):
            param_name = _child_text(param, "apiItemName")
            if param_name:
                param_desc = _flatten(_child(param, "apiDesc"))
                lines.append(f"@param {param_name} {param_desc}".rstrip())
        return_desc = _flatten(_child(_child(definition, "apiReturn"), "apiDesc"))
        if return_desc:
            lines.append(f"@return {return_desc}")

    return "\n".join(lines)


def _inner_markup(element: Optional[ET.Element]) -> str:
    if element is None:
        return ""
    parts = [html.escape(element.text or "", quote=False)]
    for child in element:
        parts.append(_element_markup(child))
        parts.append(html.escape(child.tail or "", quote=False))
    return "".join(parts)


def _element_markup(element: ET.Element) -> str:
    tag = _local_name(element.tag)
    inner = _inner_markup(element)
    if tag == "xref":
        href = element.get("href")
        return f'<a href="{html.escape(href)}">{inner}</a>' if href else inner
    mapped = _MARKUP_TAGS.get(tag)
    return f"<{mapped}>{inner}</{mapped}>" if mapped else inner


def _flatten(element: Optional[ET.Element]) -> str:
    return " ".join(_inner_markup(element).split())


def _local_name(tag: object) -> str:
    # Comments and processing instructions have a callable tag.
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _children(element: Optional[ET.Element], name: str) -> Iterator[ET.Element]:
    if element is None:
        return
    for child in element:
        if _local_name(child.tag) == name:
            yield child


def _child(element: Optional[ET.Element], name: str) -> Optional[ET.Element]:
    return next(_children(element, name), None)


def _child_text(element: ET.Element, name: str) -> str:
    child = _child(element, name)
    return (child.text or "").strip() if child is not None else ""


def _join(*parts: str) -> str:
    return ".".join(part for part in parts if part)
