"""
UI source extraction: parses React/TypeScript components with tree-sitter and
collects markup text, user-facing attribute and property values, and template
fragments.
"""

import html
import re
from bisect import bisect_right
from typing import Iterable, List, Optional, Tuple

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from ..candidate import CandidateKind, FileMetadata, SourceKind
from ..classifier import TEMPLATE_HOLE, is_localized_key
from ..errors import ParseFailure
from ..extractor_base import BaseExtractor
from ..utils import detect_grammar

LANGUAGES = {
    "typescript": Language(tree_sitter_typescript.language_typescript()),
    "tsx": Language(tree_sitter_typescript.language_tsx()),
}

USER_FACING_ATTRIBUTES = frozenset((
    "placeholder", "title", "alt", "aria-label", "aria-describedby",
    "label", "tooltip", "description",
))

USER_FACING_OBJECT_KEYS = frozenset((
    "label", "title", "text", "content", "message", "description",
    "placeholder", "tooltip", "name", "displayName", "header",
    "subtitle", "caption", "hint", "help",
))

TRANSLATION_FUNCTIONS = ("t", "translate")
TRANSLATION_HOOKS = ("useTranslation", "useAppTranslation")

# Markup children that together make up one visible string.
TEXT_RUN_NODES = frozenset(("jsx_text", "html_character_reference"))

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_ESCAPE_PATTERN = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|.)", re.DOTALL)


def _code_point(digits: str) -> str:
    value = int(digits, 16)
    return chr(value) if value <= 0x10FFFF else "\ufffd"


def _unescape(body: str) -> str:
    def replace(m: "re.Match[str]") -> str:
        seq = m.group(1)
        if seq.startswith("u{"):
            return _code_point(seq[2:-1])
        if seq[0] in "ux" and len(seq) > 1:
            return _code_point(seq[1:])
        return _ESCAPES.get(seq, seq)
    text = _ESCAPE_PATTERN.sub(replace, body)
    # \uD83D\uDE00 pairs become one character; lone surrogates become U+FFFD
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def _text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def string_value(node: Node) -> str:
    """Value of a JS string literal node (quotes removed, escapes resolved)."""
    raw = _text(node)
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in "'\"":
        raw = raw[1:-1]
    if node.parent is not None and node.parent.type == "jsx_attribute":
        # JSX attribute strings are not escape-processed
        return raw
    return _unescape(raw)


class MarkupExtractor(BaseExtractor):
    """Syntax-tree extraction for UI components."""

    source_kind = SourceKind.UI

    def __init__(
        self,
        classifier=None,
        translation_functions: Iterable[str] = TRANSLATION_FUNCTIONS,
        translation_hooks: Iterable[str] = TRANSLATION_HOOKS,
    ):
        super().__init__(classifier)
        self.translation_functions = frozenset(translation_functions)
        self.translation_hooks = frozenset(translation_hooks)
        self.source: bytes = b""
        self._line_starts: List[int] = []
        self._uses_translation = False

    def _run_extraction(self):
        """Parse the file and walk its syntax tree."""
        self._uses_translation = False
        grammar = detect_grammar(self.file_path)
        if grammar is None:
            raise ParseFailure(self.file_path, f"no grammar for '{self.file_path.suffix}' files")

        self.source = self.content.encode("utf-8")
        self._line_starts = [0]
        for i, byte in enumerate(self.source):
            if byte == 0x0A:
                self._line_starts.append(i + 1)

        tree = Parser(LANGUAGES[grammar]).parse(self.source)
        root = tree.root_node
        if root.has_error:
            line, col = self._first_error_position(root)
            raise ParseFailure(self.file_path, f"syntax error near line {line}, column {col}")

        self._walk(root)

    def _metadata(self) -> FileMetadata:
        return FileMetadata(
            has_existing_localization=bool(self.existing_keys) or self._uses_translation,
            total_considered=self.total_considered,
            existing_keys=tuple(self.existing_keys),
        )

    # --- traversal ---

    def _walk(self, root: Node):
        stack = [root]
        while stack:
            node = stack.pop()
            children = self._visit(node)
            if children is None:
                children = node.children
            stack.extend(reversed(children))

    def _visit(self, node: Node) -> Optional[List[Node]]:
        """Handle one node; returns the children to descend into (None means all)."""
        node_type = node.type
        if node_type == "comment":
            return []
        if node_type == "jsx_element":
            return self._handle_element(node)
        if node_type in TEXT_RUN_NODES:
            self._handle_text_run([node])
            return []
        if node_type == "jsx_attribute":
            return self._handle_attribute(node)
        if node_type == "pair":
            return self._handle_pair(node)
        if node_type == "call_expression":
            return self._handle_call(node)
        if node_type == "template_string":
            self._handle_template(node)
            return [c for c in node.named_children if c.type == "template_substitution"]
        if node_type == "binary_expression":
            return self._handle_concatenation(node)
        return None

    def _handle_element(self, node: Node) -> List[Node]:
        """Report each run of text and entities once; descend into everything else."""
        descend: List[Node] = []
        run: List[Node] = []
        for child in node.children:
            if child.type in TEXT_RUN_NODES:
                run.append(child)
                continue
            self._handle_text_run(run)
            run = []
            descend.append(child)
        self._handle_text_run(run)
        return descend

    def _handle_text_run(self, run: List[Node]):
        if not run:
            return
        raw = self.source[run[0].start_byte:run[-1].end_byte].decode("utf-8", errors="replace")
        text = html.unescape(raw.strip()).strip()
        if not text:
            return
        leading = raw[: len(raw) - len(raw.lstrip())]
        line, col = self._position(run[0].start_byte + len(leading.encode("utf-8")))
        self._add_candidate(text, CandidateKind.MARKUP_TEXT, self._markup_context(run[0]), line, col)

    def _handle_attribute(self, node: Node) -> Optional[List[Node]]:
        named = node.named_children
        if len(named) < 2:
            return []
        name = _text(named[0])
        value = named[1]
        if value.type == "jsx_expression" and len(value.named_children) == 1:
            inner = value.named_children[0]
            if inner.type == "string":
                value = inner
        if value.type != "string":
            return None
        text = string_value(value)
        if name in USER_FACING_ATTRIBUTES and text.strip():
            self._emit_literal(text, CandidateKind.ATTRIBUTE_VALUE, f"attribute:{name}", value)
        return []

    def _handle_pair(self, node: Node) -> Optional[List[Node]]:
        key_node = node.child_by_field_name("key")
        value = node.child_by_field_name("value")
        if key_node is None or value is None or value.type != "string":
            return None
        key = string_value(key_node) if key_node.type == "string" else _text(key_node)
        text = string_value(value)
        if key in USER_FACING_OBJECT_KEYS and text.strip():
            self._emit_literal(text, CandidateKind.OBJECT_PROPERTY, f"property:{key}", value)
        return []

    def _handle_call(self, node: Node) -> Optional[List[Node]]:
        function = node.child_by_field_name("function")
        arguments = node.child_by_field_name("arguments")
        name = self._callee_name(function)
        if name in self.translation_hooks:
            self._uses_translation = True
            return None
        if name not in self.translation_functions or arguments is None:
            if arguments is not None and arguments.type == "template_string":
                # Tagged templates (css``, gql``) hold code, not prose
                return [function] if function is not None else []
            return None

        self._uses_translation = True
        args = arguments.named_children
        if args and args[0].type == "string":
            line, col = self._position(node.start_byte)
            self._add_existing_key(string_value(args[0]), line, col)
        return [function] if function is not None else []

    def _handle_template(self, node: Node):
        parent = node.parent
        if parent is not None and parent.type == "binary_expression":
            operator = parent.child_by_field_name("operator")
            if operator is not None and operator.type == "+":
                # Reported as part of the enclosing concatenation
                return
        text = self._template_text(node)
        if text.replace(TEMPLATE_HOLE, "").strip():
            line, col = self._position(node.start_byte + 1)
            self._add_candidate(text.strip(), CandidateKind.TEMPLATE_FRAGMENT, "template", line, col)

    def _handle_concatenation(self, node: Node) -> Optional[List[Node]]:
        if not self._is_plus(node):
            return None
        parent = node.parent
        if parent is not None and parent.type == "binary_expression" and self._is_plus(parent):
            # Only the outermost '+' of a chain is reported
            return None

        operands = self._flatten_plus(node)
        if not any(op.type in ("string", "template_string") for op in operands):
            return None

        parts: List[str] = []
        descend: List[Node] = []
        for op in operands:
            if op.type == "string":
                parts.append(string_value(op))
            elif op.type == "template_string":
                parts.append(self._template_text(op))
                descend.extend(c for c in op.named_children if c.type == "template_substitution")
            else:
                parts.append(TEMPLATE_HOLE)
                descend.append(op)
        text = "".join(parts).strip()
        if text.replace(TEMPLATE_HOLE, "").strip():
            line, col = self._position(node.start_byte)
            self._add_candidate(text, CandidateKind.TEMPLATE_FRAGMENT, "template", line, col)
        return descend

    # --- helpers ---

    def _emit_literal(self, text: str, kind: CandidateKind, context: str, value: Node):
        if is_localized_key(text):
            line, col = self._position(value.start_byte)
            self._add_existing_key(text.strip(), line, col)
            return
        raw = _text(value)
        quote_offset = 1 if raw[:1] in ("'", '"') else 0
        leading = text[: len(text) - len(text.lstrip())]
        line, col = self._position(value.start_byte + quote_offset + len(leading.encode("utf-8")))
        self._add_candidate(text, kind, context, line, col)

    def _template_text(self, node: Node) -> str:
        """Static text of a template literal with each ${} hole replaced."""
        pieces: List[str] = []
        cursor = node.start_byte + 1
        end = node.end_byte - 1
        for child in node.named_children:
            if child.type != "template_substitution":
                continue
            pieces.append(self.source[cursor:child.start_byte].decode("utf-8", errors="replace"))
            pieces.append(TEMPLATE_HOLE)
            cursor = child.end_byte
        pieces.append(self.source[cursor:end].decode("utf-8", errors="replace"))
        return _unescape("".join(pieces))

    def _flatten_plus(self, node: Node) -> List[Node]:
        operands: List[Node] = []
        stack = [node]
        while stack:
            current = stack.pop()
            if current.type == "parenthesized_expression" and len(current.named_children) == 1:
                inner = current.named_children[0]
                if inner.type == "binary_expression" and self._is_plus(inner):
                    current = inner
            if current.type == "binary_expression" and self._is_plus(current):
                stack.append(current.child_by_field_name("right"))
                stack.append(current.child_by_field_name("left"))
            else:
                operands.append(current)
        return operands

    @staticmethod
    def _is_plus(node: Node) -> bool:
        operator = node.child_by_field_name("operator")
        return operator is not None and operator.type == "+"

    @staticmethod
    def _callee_name(function: Optional[Node]) -> str:
        if function is None:
            return ""
        if function.type == "identifier":
            return _text(function)
        if function.type == "member_expression":
            return _text(function.child_by_field_name("property"))
        return ""

    @staticmethod
    def _markup_context(node: Node) -> str:
        parent = node.parent
        while parent is not None:
            if parent.type == "jsx_element":
                open_tag = parent.child_by_field_name("open_tag")
                name = open_tag.child_by_field_name("name") if open_tag is not None else None
                if name is not None:
                    return f"markup:{_text(name).lower()}"
                return "markup"
            parent = parent.parent
        return "markup"

    def _position(self, byte_offset: int) -> Tuple[int, int]:
        """1-based line and 0-based character column of a byte offset."""
        row = bisect_right(self._line_starts, byte_offset) - 1
        line_start = self._line_starts[row]
        column = len(self.source[line_start:byte_offset].decode("utf-8", errors="replace"))
        return row + 1, column

    def _first_error_position(self, root: Node) -> Tuple[int, int]:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return self._position(node.start_byte)
            stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
        return self._position(root.start_byte)
