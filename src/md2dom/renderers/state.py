#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/renderers/state.py
"""Per-conversion state of the script renderer.

A :class:`RenderState` is created for every call to
:meth:`md2dom.renderers.script.ScriptRenderer.render_to_string` and owns:

- the :class:`IdentifierAllocator` naming every created element and text node
- the :class:`ScriptSink` collecting the emitted statements
- the binding table from node identity to the identifier of the statement
  that created it
- the flags of the conversion (``unsafe``, ``debug``) and the style object

The statement-writing methods of :class:`RenderState` are the only place that
knows the syntax of the generated script.

"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Union

from md2dom.ast.nodes import Node, NodeKind
from md2dom.constants import IDENTIFIER_PREFIX, IDENTIFIER_SEED
from md2dom.exceptions import MissingParentBindingError, MissingSelfBindingError, RenderingError
from md2dom.options.script import ScriptRendererOptions
from md2dom.utils.escape import js_string, js_template

logger = logging.getLogger(__name__)


class IdentifierAllocator:
    """Strictly increasing generator of symbolic identifiers.

    The counter is incremented before each use, so with the default seed the
    first identifier is ``el2``.

    Examples
    --------
    >>> ids = IdentifierAllocator()
    >>> ids.next(), ids.next()
    ('el2', 'el3')
    >>> ids.allocated
    2

    """

    def __init__(self, seed: int = IDENTIFIER_SEED, prefix: str = IDENTIFIER_PREFIX):
        self._seed = seed
        self._counter = seed
        self._prefix = prefix

    def next(self) -> str:
        """Return a new identifier."""
        self._counter += 1
        return f"{self._prefix}{self._counter}"

    @property
    def allocated(self) -> int:
        """Number of identifiers handed out so far."""
        return self._counter - self._seed


class ScriptSink:
    """Append-only accumulator of emitted statements."""

    def __init__(self) -> None:
        self._statements: list[str] = []

    def write(self, statement: str) -> None:
        self._statements.append(statement)

    @property
    def statements(self) -> list[str]:
        return list(self._statements)

    def getvalue(self) -> str:
        """Return the statements as script text, one per line."""
        return "".join(f"{statement}\n" for statement in self._statements)

    def __len__(self) -> int:
        return len(self._statements)


KindLike = Union[NodeKind, str, None]


class RenderState:
    """Single-owner mutable state of one conversion.

    Parameters
    ----------
    options : ScriptRendererOptions or None
        Renderer configuration; defaults are used when None

    """

    def __init__(self, options: Optional[ScriptRendererOptions] = None):
        options = options or ScriptRendererOptions()
        self.unsafe = options.unsafe
        self.debug = options.debug
        self.root_id = options.root_id
        self.style_object = options.style_object
        self.container_style = options.container_style
        self.identifiers = IdentifierAllocator()
        self.sink = ScriptSink()
        # id(node) -> (node, identifier); the node reference keeps ids stable
        self._bindings: dict[int, tuple[Node, str]] = {}

    # ------------------------------------------------------------------
    # Bindings
    # ------------------------------------------------------------------

    def bind(self, node: Node, identifier: str) -> None:
        """Record ``identifier`` as the element created for ``node``.

        Raises
        ------
        RenderingError
            If the node already has an identifier.

        """
        existing = self._bindings.get(id(node))
        if existing is not None:
            raise RenderingError(
                f"{node.kind}: already bound to {existing[1]}, cannot rebind to {identifier}",
                node_kind=str(node.kind),
                parent_kind=_kind_name(node.parent),
            )
        self._bindings[id(node)] = (node, identifier)

    def lookup(self, node: Optional[Node]) -> Optional[str]:
        """Return the identifier bound to ``node``, or None."""
        if node is None:
            return None
        binding = self._bindings.get(id(node))
        return binding[1] if binding is not None else None

    def self_identifier(self, node: Node) -> str:
        """Return the identifier of ``node``, raising MissingSelfBindingError if absent."""
        identifier = self.lookup(node)
        if identifier is None:
            raise MissingSelfBindingError(str(node.kind), _kind_name(node.parent))
        return identifier

    def parent_identifier(self, node: Node, identifier: Optional[str] = None) -> str:
        """Return the identifier of the parent of ``node``.

        Raises
        ------
        MissingParentBindingError
            If ``node`` has no parent or the parent has not been rendered.

        """
        parent_identifier = self.lookup(node.parent)
        if parent_identifier is None:
            raise MissingParentBindingError(str(node.kind), _kind_name(node.parent), identifier)
        return parent_identifier

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def create_element(self, tag: str) -> str:
        """Emit the creation of a ``tag`` element and return its identifier."""
        identifier = self.identifiers.next()
        self.sink.write(f"let {identifier} = document.createElement('{js_string(tag)}');")
        return identifier

    def create_text_node(self, text: str) -> str:
        """Emit the creation of a text node and return its identifier."""
        identifier = self.identifiers.next()
        self.sink.write(f"const {identifier} = document.createTextNode(`{js_template(text)}`);")
        return identifier

    def set_text_content(self, identifier: str, text: str) -> None:
        self.sink.write(f"{identifier}.textContent = `{js_template(text)}`;")

    def set_inner_html(self, identifier: str, markup: str) -> None:
        self.sink.write(f"{identifier}.innerHTML = `{js_template(markup)}`;")

    def set_property(self, identifier: str, name: str, value: Union[str, int]) -> None:
        """Emit a property assignment; strings are quoted, integers written as digits."""
        if isinstance(value, int) and not isinstance(value, bool):
            literal = "%d" % value
        else:
            literal = f"'{js_string(str(value))}'"
        self.sink.write(f"{identifier}.{name} = {literal};")

    def set_attribute(self, identifier: str, name: str, value: str) -> None:
        self.sink.write(f"{identifier}.setAttribute('{js_string(name)}', '{js_string(value)}');")

    def assign_style(self, identifier: str, key: str) -> None:
        """Apply ``<style_object>.<key>`` to the element; no-op without a style object."""
        if self.style_object:
            self.sink.write(f"Object.assign({identifier}.style, {self.style_object}.{key});")

    def assign_inline_style(self, identifier: str, style: Mapping[str, str]) -> None:
        properties = ", ".join(f"{key}: '{js_string(str(value))}'" for key, value in style.items())
        self.sink.write(f"Object.assign({identifier}.style, {{{properties}}});")

    def append_child(self, parent_identifier: str, child_identifier: str, parent_kind: KindLike = None) -> None:
        """Emit the attachment of ``child_identifier`` to ``parent_identifier``."""
        if self.debug:
            self.sink.write(f"// dbg -- el: {child_identifier} parent: {parent_identifier} kind: {parent_kind}")
        self.sink.write(f"{parent_identifier}.appendChild({child_identifier});")

    def comment(self, text: str) -> None:
        self.sink.write(text if text.startswith("//") else f"// {text}")

    def raw(self, statement: str) -> None:
        self.sink.write(statement)


def _kind_name(node: Optional[Node]) -> Optional[str]:
    return str(node.kind) if node is not None else None
