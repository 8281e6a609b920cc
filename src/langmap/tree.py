"""Language tree document: parsing and path matching.

The mapping document is a wiki list. The first line holds the default page of
every language::

    * en:start,cs:uvod

Every following line describes one path segment. Its depth comes from the
position of the list marker (two spaces per level, top level at offset 2),
and it lists one or more groups of translations separated by ``;``::

      * en:games,cs:hry;en:people,cs:lide
        * en:chess,cs:sachy
        * en:article-*,cs:clanek-*

A ``*`` inside a pattern is a wildcard; the text it captures is shared by
every language of the group.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Sequence

log = logging.getLogger("langmap.tree")

PATH_SEPARATOR = ":"
WILDCARD = "*"
GROUP_SEPARATOR = ";"
TOKEN_SEPARATOR = ","


class MalformedDocumentError(ValueError):
    def __init__(self, line_number: int, message: str):
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number


@dataclass(frozen=True)
class Alternative:
    lang: str
    pattern: str

    def compile(self) -> re.Pattern[str]:
        if WILDCARD not in self.pattern:
            return re.compile(re.escape(self.pattern))
        head, _, tail = self.pattern.partition(WILDCARD)
        return re.compile(f"{re.escape(head)}(.*){re.escape(tail)}")

    def substitute(self, captured: str) -> str:
        return self.pattern.replace(WILDCARD, captured)


@dataclass(frozen=True)
class TreeNode:
    level: int
    groups: tuple[tuple[Alternative, ...], ...]
    line_number: int = 0
    children: tuple["TreeNode", ...] = ()


@dataclass(frozen=True)
class LanguageTree:
    defaults: dict[str, str] = field(default_factory=dict)
    roots: tuple[TreeNode, ...] = ()

    def is_empty(self) -> bool:
        return not self.defaults and not self.roots

    def languages(self) -> list[str]:
        seen: dict[str, None] = dict.fromkeys(self.defaults)
        for node in iter_nodes(self.roots):
            for group in node.groups:
                for alt in group:
                    seen.setdefault(alt.lang, None)
        return list(seen)


EMPTY_TREE = LanguageTree()


@dataclass
class PathMatch:
    page_lang: str | None
    lang_paths: dict[str, list[str]]
    defaults: dict[str, str]


def split_page_id(page_id: str) -> tuple[str, ...]:
    return tuple(page_id.split(PATH_SEPARATOR))


def join_path(segments: Iterable[str]) -> str:
    return PATH_SEPARATOR.join(segments)


def iter_nodes(nodes: Iterable[TreeNode]) -> Iterable[TreeNode]:
    for node in nodes:
        yield node
        yield from iter_nodes(node.children)


def _parse_token(token: str, line_number: int) -> tuple[str, str]:
    lang, sep, value = token.partition(":")
    lang = lang.strip()
    value = value.strip()
    if not sep or not lang or not value:
        raise MalformedDocumentError(line_number, f"expected lang:value, got {token!r}")
    return lang, value


def _parse_defaults(content: str, line_number: int) -> dict[str, str]:
    defaults: dict[str, str] = {}
    for token in content.split(TOKEN_SEPARATOR):
        if not token.strip():
            continue
        lang, page = _parse_token(token, line_number)
        defaults[lang] = page
    return defaults


def _parse_groups(content: str, line_number: int) -> tuple[tuple[Alternative, ...], ...]:
    groups: list[tuple[Alternative, ...]] = []
    for raw_group in content.split(GROUP_SEPARATOR):
        alternatives: list[Alternative] = []
        for token in raw_group.split(TOKEN_SEPARATOR):
            if not token.strip():
                continue
            lang, pattern = _parse_token(token, line_number)
            if pattern.count(WILDCARD) > 1:
                raise MalformedDocumentError(
                    line_number, f"pattern {pattern!r} has more than one wildcard"
                )
            alternatives.append(Alternative(lang, pattern))
        if alternatives:
            groups.append(tuple(alternatives))
    if not groups:
        raise MalformedDocumentError(line_number, "no translations listed")
    return tuple(groups)


def _marker_offset(line: str, line_number: int) -> int:
    offset = line.find(WILDCARD)
    if offset < 0:
        raise MalformedDocumentError(line_number, "missing '*' list marker")
    return offset


def _freeze(node: dict) -> TreeNode:
    return TreeNode(
        level=node["level"],
        groups=node["groups"],
        line_number=node["line_number"],
        children=tuple(_freeze(child) for child in node["children"]),
    )


def parse_language_tree(text: str) -> LanguageTree:
    """Parse the mapping document into a :class:`LanguageTree`.

    Raises :class:`MalformedDocumentError` for any line that cannot be placed
    in the tree; a document is accepted whole or not at all.
    """
    lines = text.replace("\r\n", "\n").split("\n")
    defaults: dict[str, str] = {}
    roots: list[dict] = []
    # open ancestors of the next line, one per level
    stack: list[dict] = []

    for index, line in enumerate(lines):
        line_number = index + 1
        if not line.strip():
            continue
        offset = _marker_offset(line, line_number)
        content = line[offset + 1 :]
        if index == 0:
            defaults = _parse_defaults(content, line_number)
            continue

        if offset < 2 or offset % 2:
            raise MalformedDocumentError(
                line_number, f"list marker at offset {offset} does not encode a level"
            )
        level = offset // 2 - 1
        if level > len(stack):
            raise MalformedDocumentError(
                line_number, f"level {level} has no parent at level {level - 1}"
            )
        node = {
            "level": level,
            "groups": _parse_groups(content, line_number),
            "line_number": line_number,
            "children": [],
        }
        del stack[level:]
        if stack:
            stack[-1]["children"].append(node)
        else:
            roots.append(node)
        stack.append(node)

    tree = LanguageTree(defaults=defaults, roots=tuple(_freeze(node) for node in roots))
    log.debug("parsed language tree: %s roots, defaults=%s", len(tree.roots), tree.defaults)
    return tree


def _match_node(
    node: TreeNode, segment: str, page_lang: str | None
) -> tuple[tuple[Alternative, ...], Alternative, str] | None:
    for group in node.groups:
        for alt in group:
            if page_lang is not None and alt.lang != page_lang:
                continue
            found = alt.compile().fullmatch(segment)
            if found:
                captured = found.group(1) if found.groups() else ""
                return group, alt, captured
    return None


def match_path(path: Sequence[str], tree: LanguageTree) -> PathMatch:
    """Find the language of ``path`` and its equivalent in every other language.

    Descends one level per path segment. The first alternative that matches
    fixes the page language; deeper levels only accept that language.
    """
    page_lang: str | None = None
    lang_paths: dict[str, list[str]] = {}
    candidates: Sequence[TreeNode] = tree.roots

    for segment in path:
        matched: TreeNode | None = None
        for node in candidates:
            hit = _match_node(node, segment, page_lang)
            if hit is None:
                continue
            group, alt, captured = hit
            if page_lang is None:
                page_lang = alt.lang
            for sibling in group:
                lang_paths.setdefault(sibling.lang, []).append(sibling.substitute(captured))
            matched = node
            break
        if matched is None:
            break
        candidates = matched.children

    return PathMatch(page_lang=page_lang, lang_paths=lang_paths, defaults=dict(tree.defaults))
