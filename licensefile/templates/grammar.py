"""Template grammar compiler used to invert rendering.

Compilation runs in two passes. The tokenizer splits the template into
literal runs and placeholders; this module turns those segments into a
sequence of literal and capture nodes. Matching walks the node sequence
with backtracking: captures are lazy (shortest span first) and the match
must consume the whole document.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import cast

from licensefile.templates.models import (
    CaptureNode,
    GrammarNode,
    LiteralNode,
    LiteralSegment,
)
from licensefile.templates.tokenizer import scan_template
from licensefile.utils.errors import TemplateError


@dataclass(frozen=True)
class Grammar:
    """Ordered token names plus the node sequence matching a document."""

    token_names: tuple[str, ...]
    nodes: tuple[GrammarNode, ...]

    def match(self, document: str) -> list[str] | None:
        """Return one captured substring per capture node, or None."""

        spans: list[tuple[int, int]] = []
        failed: set[tuple[int, int]] = set()
        if not self._match_from(document, 0, 0, spans, failed):
            return None
        return [document[start:end] for start, end in spans]

    def _match_from(
        self,
        document: str,
        node_index: int,
        position: int,
        spans: list[tuple[int, int]],
        failed: set[tuple[int, int]],
    ) -> bool:
        if node_index == len(self.nodes):
            return position == len(document)
        if (node_index, position) in failed:
            return False

        node = self.nodes[node_index]
        if isinstance(node, LiteralNode):
            if document.startswith(node.text, position) and self._match_from(
                document, node_index + 1, position + len(node.text), spans, failed
            ):
                return True
        else:
            for end in self._capture_ends(document, node_index, position):
                spans.append((position, end))
                if self._match_from(document, node_index + 1, end, spans, failed):
                    return True
                spans.pop()

        failed.add((node_index, position))
        return False

    def _capture_ends(self, document: str, node_index: int, position: int) -> Iterator[int]:
        node = cast(CaptureNode, self.nodes[node_index])
        next_node = self.nodes[node_index + 1] if node_index + 1 < len(self.nodes) else None

        if next_node is None:
            # Anchored at the end: the only candidate is the rest of the document.
            yield len(document)
            return

        if isinstance(next_node, LiteralNode):
            candidates = _find_all(document, next_node.text, position)
        else:
            candidates = list(range(position, len(document) + 1))

        yield from (candidates if node.lazy else reversed(candidates))


def compile_grammar(template: str) -> Grammar:
    """Compile ``template`` into a grammar with lazy captures.

    Raises:
        TemplateError: when a token name occurs more than once.
    """

    scan = scan_template(template)
    duplicates = scan.duplicate_fields()
    if duplicates:
        raise TemplateError(
            f"Duplicate placeholders are not extractable: {', '.join(duplicates)}",
            scan=scan,
        )

    nodes: list[GrammarNode] = []
    for segment in scan.segments:
        if isinstance(segment, LiteralSegment):
            nodes.append(LiteralNode(text=segment.text))
        else:
            nodes.append(CaptureNode(name=segment.name))

    return Grammar(token_names=tuple(scan.fields), nodes=tuple(nodes))


def _find_all(document: str, text: str, start: int) -> list[int]:
    positions: list[int] = []
    index = document.find(text, start)
    while index != -1:
        positions.append(index)
        index = document.find(text, index + 1)
    return positions
