#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/renderers/script.py
"""DOM-building script rendering from AST.

This module provides the ScriptRenderer class which converts a node tree into
a sequence of script statements that rebuild the document as live elements:

    let el2 = document.createElement('h2');
    el2.textContent = `Title`;
    mdDiv.appendChild(el2);

The tree is walked with :func:`md2dom.ast.walk.walk`. Every node kind has one
handler in a static dispatch table; a handler receives the per-call
:class:`~md2dom.renderers.state.RenderState`, the node and the walk phase.

Block containers create their element on entry and attach it to their parent
on exit. Paragraphs, headings and tight list item text hand their inline
children to the inline run aggregator, which writes the whole run in one pass
and skips the separate visit of those children.

The generated body is the body of a function: the document entry creates the
root container, the document exit returns it and closes the function opened
by :func:`script_prologue`.

"""

from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional, Type, TypeVar

from md2dom.ast.nodes import (
    BLOCK_KINDS,
    AutoLink,
    CodeBlock,
    CodeSpan,
    Document,
    Emphasis,
    FencedCodeBlock,
    Heading,
    HTMLBlock,
    Image,
    Link,
    List,
    Node,
    NodeKind,
    RawHTML,
    String,
    Text,
    plain_text,
)
from md2dom.ast.walk import WalkStatus, walk
from md2dom.constants import (
    DEFAULT_SITE_NAME,
    RAW_HTML_OMITTED_COMMENT,
    STYLE_KEY_BLOCKQUOTE,
    STYLE_KEY_CODE,
    STYLE_KEY_LINK,
    STYLE_KEY_LIST_ITEM,
    STYLE_KEY_PARAGRAPH,
)
from md2dom.exceptions import UnexpectedNodeShapeError
from md2dom.options.script import ScriptRendererOptions
from md2dom.renderers.base import BaseRenderer
from md2dom.renderers.state import RenderState
from md2dom.utils.attributes import filter_for_kind, filtered
from md2dom.utils.decorators import debug_timer
from md2dom.utils.escape import escape_url, js_string
from md2dom.utils.security import is_url_allowed

logger = logging.getLogger(__name__)

Handler = Callable[[RenderState, Node, bool], WalkStatus]
InlineCreator = Callable[[RenderState, Node], str]
NodeT = TypeVar("NodeT", bound=Node)


# ============================================================================
# Script wrapping
# ============================================================================


def script_prologue(site_name: str = DEFAULT_SITE_NAME) -> str:
    """Return the site object and the opening of its ``render`` function.

    Examples
    --------
    >>> print(script_prologue("docs"), end="")
    let site = {
        name: 'docs',
    };
    site.render = function () {

    """
    return f"let site = {{\n    name: '{js_string(site_name)}',\n}};\nsite.render = function () {{\n"


def wrap_script(
    body: str,
    site_name: str = DEFAULT_SITE_NAME,
    style_sheet: Optional[str] = None,
    site_script: Optional[str] = None,
) -> str:
    """Wrap a rendered body into a complete script.

    The parts are concatenated in order: prologue, style sheet, body, site
    script. The style sheet sits inside the render function so the style
    object is in scope for the body.

    Parameters
    ----------
    body : str
        Output of :meth:`ScriptRenderer.render_to_string` without wrapping
    site_name : str, default "mdtest"
        Name stored in the site object
    style_sheet : str or None
        Script defining the style object
    site_script : str or None
        Script appended after the render function

    Returns
    -------
    str
        Complete script text

    """
    parts = [script_prologue(site_name)]
    for part in (style_sheet, body, site_script):
        if part:
            parts.append(part if part.endswith("\n") else part + "\n")
    return "".join(parts)


# ============================================================================
# Shared helpers
# ============================================================================


def _text_value(node: Text) -> str:
    if node.soft_line_break or node.hard_line_break:
        return node.content + "\n"
    return node.content


def _expect(node: Node, node_type: Type[NodeT]) -> NodeT:
    if not isinstance(node, node_type):
        raise UnexpectedNodeShapeError(
            f"{node.kind}: expected {node_type.__name__} payload, got {type(node).__name__}",
            node_kind=str(node.kind),
            parent_kind=str(node.parent.kind) if node.parent else None,
        )
    return node


def _emit_attributes(state: RenderState, identifier: str, node: Node) -> None:
    for name, value in filtered(node):
        state.set_attribute(identifier, name, value)


def _annotated(node: Node, name: str) -> bool:
    # an emitted attribute overrides the payload property of the same name
    return name in node.attributes and filter_for_kind(node.kind).allows(name)


def _attach(state: RenderState, node: Node) -> None:
    identifier = state.self_identifier(node)
    parent_identifier = state.parent_identifier(node, identifier)
    state.append_child(parent_identifier, identifier, node.parent.kind if node.parent else None)


def _set_destination(state: RenderState, identifier: str, name: str, url: str) -> None:
    if is_url_allowed(url, state.unsafe):
        state.set_property(identifier, name, escape_url(url))


def _set_raw_markup(state: RenderState, identifier: str, markup: str, kind: NodeKind) -> None:
    if state.unsafe:
        state.set_inner_html(identifier, markup)
    else:
        logger.debug("Omitted raw HTML in %s (%d chars)", kind, len(markup))
        state.comment(RAW_HTML_OMITTED_COMMENT)


# ============================================================================
# Inline run aggregation
# ============================================================================


def aggregate_inline_run(state: RenderState, parent: Node, parent_identifier: str) -> None:
    """Write the inline children of ``parent`` under ``parent_identifier``.

    A single Text child becomes a ``textContent`` assignment. Otherwise the
    children are written left to right: adjacent Text nodes are merged into
    one text node, every other inline node is created by its creation step
    and appended to the parent.

    Parameters
    ----------
    state : RenderState
        State of the current conversion
    parent : Node
        Node whose children form the run
    parent_identifier : str
        Identifier of the element the run is appended to

    Raises
    ------
    UnexpectedNodeShapeError
        If the run contains a block-level node

    """
    children = parent.children
    if len(children) == 1 and isinstance(children[0], Text):
        state.set_text_content(parent_identifier, _text_value(children[0]))
        return

    # non-empty buffer == accumulating
    buffer: list[str] = []

    def flush() -> None:
        text_identifier = state.create_text_node("".join(buffer))
        state.append_child(parent_identifier, text_identifier, parent.kind)
        buffer.clear()

    for child in children:
        if isinstance(child, Text):
            buffer.append(_text_value(child))
            continue

        creator = _INLINE_CREATORS.get(child.kind)
        if creator is None or child.kind in BLOCK_KINDS:
            raise UnexpectedNodeShapeError(
                f"{parent.kind}: block node {child.kind} inside an inline run",
                node_kind=str(child.kind),
                parent_kind=str(parent.kind),
            )

        if buffer:
            flush()
        child_identifier = creator(state, child)
        state.append_child(parent_identifier, child_identifier, parent.kind)

    if buffer:
        flush()


# ============================================================================
# Inline creation steps
# ============================================================================
#
# Each step creates the element for one inline node, fills it in, binds it
# and returns its identifier. Attaching it is up to the caller.


def _create_text(state: RenderState, node: Node) -> str:
    text = _expect(node, Text)
    identifier = state.create_text_node(_text_value(text))
    state.bind(node, identifier)
    return identifier


def _create_string(state: RenderState, node: Node) -> str:
    string = _expect(node, String)
    identifier = state.create_text_node(string.value)
    state.bind(node, identifier)
    return identifier


def _create_emphasis(state: RenderState, node: Node) -> str:
    emphasis = _expect(node, Emphasis)
    identifier = state.create_element(emphasis.tag)
    state.bind(node, identifier)
    _emit_attributes(state, identifier, node)
    aggregate_inline_run(state, node, identifier)
    return identifier


def _code_span_text(node: CodeSpan) -> str:
    parts: list[str] = []
    for child in node.children:
        if isinstance(child, Text):
            parts.append(child.content.replace("\n", " "))
            if child.soft_line_break or child.hard_line_break:
                parts.append(" ")
        elif isinstance(child, String):
            parts.append(child.value.replace("\n", " "))
        else:
            raise UnexpectedNodeShapeError(
                f"{node.kind}: expected Text or String children, found {child.kind}",
                node_kind=str(node.kind),
                parent_kind=str(node.parent.kind) if node.parent else None,
            )
    return "".join(parts)


def _create_code_span(state: RenderState, node: Node) -> str:
    text = _code_span_text(_expect(node, CodeSpan))
    identifier = state.create_element("code")
    state.bind(node, identifier)
    state.assign_style(identifier, STYLE_KEY_CODE)
    _emit_attributes(state, identifier, node)
    state.set_text_content(identifier, text)
    return identifier


def _create_link(state: RenderState, node: Node) -> str:
    link = _expect(node, Link)
    identifier = state.create_element("a")
    state.bind(node, identifier)
    state.assign_style(identifier, STYLE_KEY_LINK)
    _set_destination(state, identifier, "href", link.destination)
    if link.title and not _annotated(node, "title"):
        state.set_property(identifier, "title", link.title)
    _emit_attributes(state, identifier, node)
    aggregate_inline_run(state, node, identifier)
    return identifier


def _create_auto_link(state: RenderState, node: Node) -> str:
    auto_link = _expect(node, AutoLink)
    url = auto_link.url
    if auto_link.link_type == "email" and not url.lower().startswith("mailto:"):
        url = "mailto:" + url
    identifier = state.create_element("a")
    state.bind(node, identifier)
    state.assign_style(identifier, STYLE_KEY_LINK)
    _set_destination(state, identifier, "href", url)
    _emit_attributes(state, identifier, node)
    state.set_text_content(identifier, auto_link.text)
    return identifier


def _create_image(state: RenderState, node: Node) -> str:
    image = _expect(node, Image)
    identifier = state.create_element("img")
    state.bind(node, identifier)
    _set_destination(state, identifier, "src", image.destination)
    state.set_property(identifier, "alt", plain_text(node))
    if image.title and not _annotated(node, "title"):
        state.set_property(identifier, "title", image.title)
    _emit_attributes(state, identifier, node)
    return identifier


def _create_raw_html(state: RenderState, node: Node) -> str:
    raw_html = _expect(node, RawHTML)
    identifier = state.create_element("span")
    state.bind(node, identifier)
    _emit_attributes(state, identifier, node)
    _set_raw_markup(state, identifier, raw_html.content, node.kind)
    return identifier


_INLINE_CREATORS: Mapping[NodeKind, InlineCreator] = {
    NodeKind.AUTO_LINK: _create_auto_link,
    NodeKind.CODE_SPAN: _create_code_span,
    NodeKind.EMPHASIS: _create_emphasis,
    NodeKind.IMAGE: _create_image,
    NodeKind.LINK: _create_link,
    NodeKind.RAW_HTML: _create_raw_html,
    NodeKind.TEXT: _create_text,
    NodeKind.STRING: _create_string,
}


def _render_inline(state: RenderState, node: Node, entering: bool) -> WalkStatus:
    # inline node visited by the walk itself, outside an aggregated run
    if entering:
        _INLINE_CREATORS[node.kind](state, node)
        return WalkStatus.SKIP_CHILDREN
    _attach(state, node)
    return WalkStatus.CONTINUE


# ============================================================================
# Block handlers
# ============================================================================


def _render_document(state: RenderState, node: Node, entering: bool) -> WalkStatus:
    root = state.root_id
    if entering:
        state.bind(node, root)
        state.raw(f"let {root} = document.createElement('div');")
        state.set_property(root, "id", root)
        if state.container_style:
            state.assign_inline_style(root, state.container_style)
    else:
        state.raw(f"return {root};")
        state.raw("};")
    return WalkStatus.CONTINUE


def _render_heading(state: RenderState, node: Node, entering: bool) -> WalkStatus:
    if not entering:
        _attach(state, node)
        return WalkStatus.CONTINUE

    tag = f"h{_expect(node, Heading).level}"
    identifier = state.create_element(tag)
    state.bind(node, identifier)
    state.assign_style(identifier, tag)
    _emit_attributes(state, identifier, node)
    aggregate_inline_run(state, node, identifier)
    return WalkStatus.SKIP_CHILDREN


def _container_handler(tag: str, style_key: Optional[str] = None) -> Handler:
    """Build the handler of a block container rendered as a plain ``tag`` element."""

    def handler(state: RenderState, node: Node, entering: bool) -> WalkStatus:
        if entering:
            identifier = state.create_element(tag)
            state.bind(node, identifier)
            if style_key:
                state.assign_style(identifier, style_key)
            _emit_attributes(state, identifier, node)
        else:
            _attach(state, node)
        return WalkStatus.CONTINUE

    return handler


_render_blockquote = _container_handler("blockquote", STYLE_KEY_BLOCKQUOTE)
_render_list_item = _container_handler("li", STYLE_KEY_LIST_ITEM)
_render_thematic_break = _container_handler("hr")


def _render_list(state: RenderState, node: Node, entering: bool) -> WalkStatus:
    if not entering:
        _attach(state, node)
        return WalkStatus.CONTINUE

    list_node = _expect(node, List)
    tag = "ol" if list_node.ordered else "ul"
    identifier = state.create_element(tag)
    state.bind(node, identifier)
    state.assign_style(identifier, tag)
    if list_node.ordered and list_node.start != 1 and not _annotated(node, "start"):
        state.set_property(identifier, "start", list_node.start)
    _emit_attributes(state, identifier, node)
    return WalkStatus.CONTINUE


def _render_paragraph(state: RenderState, node: Node, entering: bool) -> WalkStatus:
    if not entering:
        return WalkStatus.CONTINUE

    identifier = state.create_element("p")
    state.bind(node, identifier)
    state.assign_style(identifier, STYLE_KEY_PARAGRAPH)
    _emit_attributes(state, identifier, node)
    aggregate_inline_run(state, node, identifier)
    _attach(state, node)
    return WalkStatus.SKIP_CHILDREN


def _render_text_block(state: RenderState, node: Node, entering: bool) -> WalkStatus:
    # a text block has no element: its run goes straight into the parent
    if not entering:
        return WalkStatus.CONTINUE

    parent_identifier = state.parent_identifier(node)
    state.bind(node, parent_identifier)
    aggregate_inline_run(state, node, parent_identifier)
    return WalkStatus.SKIP_CHILDREN


def _render_code_block(state: RenderState, node: Node, entering: bool) -> WalkStatus:
    if not entering:
        _attach(state, node)
        return WalkStatus.CONTINUE

    pre = state.create_element("pre")
    state.bind(node, pre)
    _emit_attributes(state, pre, node)

    code = state.create_element("code")
    state.assign_style(code, STYLE_KEY_CODE)
    code_block = _expect(node, CodeBlock)
    if isinstance(code_block, FencedCodeBlock) and code_block.language:
        state.set_attribute(code, "class", f"language-{code_block.language}")

    text = state.create_text_node(code_block.code)
    state.append_child(code, text, node.kind)
    state.append_child(pre, code, node.kind)
    return WalkStatus.SKIP_CHILDREN


def _render_html_block(state: RenderState, node: Node, entering: bool) -> WalkStatus:
    if not entering:
        _attach(state, node)
        return WalkStatus.CONTINUE

    identifier = state.create_element("div")
    state.bind(node, identifier)
    _emit_attributes(state, identifier, node)
    _set_raw_markup(state, identifier, _expect(node, HTMLBlock).content, node.kind)
    return WalkStatus.SKIP_CHILDREN


HANDLERS: Mapping[NodeKind, Handler] = {
    NodeKind.DOCUMENT: _render_document,
    NodeKind.HEADING: _render_heading,
    NodeKind.BLOCKQUOTE: _render_blockquote,
    NodeKind.CODE_BLOCK: _render_code_block,
    NodeKind.FENCED_CODE_BLOCK: _render_code_block,
    NodeKind.HTML_BLOCK: _render_html_block,
    NodeKind.LIST: _render_list,
    NodeKind.LIST_ITEM: _render_list_item,
    NodeKind.PARAGRAPH: _render_paragraph,
    NodeKind.TEXT_BLOCK: _render_text_block,
    NodeKind.THEMATIC_BREAK: _render_thematic_break,
    NodeKind.AUTO_LINK: _render_inline,
    NodeKind.CODE_SPAN: _render_inline,
    NodeKind.EMPHASIS: _render_inline,
    NodeKind.IMAGE: _render_inline,
    NodeKind.LINK: _render_inline,
    NodeKind.RAW_HTML: _render_inline,
    NodeKind.TEXT: _render_inline,
    NodeKind.STRING: _render_inline,
}


# ============================================================================
# Renderer
# ============================================================================


class ScriptRenderer(BaseRenderer):
    """Render AST nodes to a DOM-building script.

    Parameters
    ----------
    options : ScriptRendererOptions or None, default = None
        Script rendering options

    Examples
    --------
    Basic usage:

        >>> from md2dom.ast import Document, Heading, Text
        >>> doc = Document(children=[Heading(level=2, children=[Text(content="Title")])])
        >>> print(ScriptRenderer().render_to_string(doc), end="")
        let mdDiv = document.createElement('div');
        mdDiv.id = 'mdDiv';
        let el2 = document.createElement('h2');
        el2.textContent = `Title`;
        mdDiv.appendChild(el2);
        return mdDiv;
        };

    """

    def __init__(self, options: ScriptRendererOptions | None = None):
        """Initialize the script renderer with options."""
        BaseRenderer._validate_options_type(options, ScriptRendererOptions, "script")
        options = options or ScriptRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: ScriptRendererOptions = options
        if options.unsafe:
            logger.warning("Unsafe mode enabled: dangerous URLs and raw HTML will be emitted")

    def render_to_string(self, document: Document) -> str:
        """Render a document AST to script text.

        Every call starts from a fresh :class:`RenderState`, so rendering the
        same tree twice yields identical output.

        Parameters
        ----------
        document : Document
            The document node to render

        Returns
        -------
        str
            Script text; wrapped by :func:`wrap_script` when the
            ``standalone`` option is set

        Raises
        ------
        RenderingError
            If the tree is malformed; no partial output is returned

        """
        state = RenderState(self.options)

        def dispatch(node: Node, entering: bool) -> WalkStatus:
            handler = HANDLERS.get(node.kind)
            if handler is None:
                raise UnexpectedNodeShapeError(f"No handler for node kind {node.kind}", node_kind=str(node.kind))
            return handler(state, node, entering)

        logger.debug("Rendering %s to script", document.kind)
        with debug_timer(logger, "Rendering (script)"):
            walk(document, dispatch)
        logger.debug(
            "Rendered %d statements, %d identifiers allocated", len(state.sink), state.identifiers.allocated
        )

        body = state.sink.getvalue()
        if not self.options.standalone:
            return body
        return wrap_script(
            body,
            site_name=self.options.site_name,
            style_sheet=self.options.style_sheet,
            site_script=self.options.site_script,
        )
