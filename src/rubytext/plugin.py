from __future__ import annotations

import re
import types
from typing import TYPE_CHECKING, Any, Mapping, MutableMapping

from .autoruby import scan_text
from .context import ConversionContext, RubyTextOptions
from .definitions import Definition
from .elements import Annotation, ElementBuilder, RubyElement, render_ruby_element
from .logging_utils import _debug_log
from .syntax import match_definition, match_inline_ruby

if TYPE_CHECKING:
    from mistune.block_parser import BlockParser
    from mistune.core import BaseRenderer, BlockState, InlineState
    from mistune.inline_parser import InlineParser
    from mistune.markdown import Markdown

__all__ = [
    "CONTEXT_ENV_KEY",
    "RUBY_TEXT_DEFINITION_PATTERN",
    "RUBY_TEXT_PATTERN",
    "RubyTextPlugin",
    "get_context",
    "ruby_text",
]

CONTEXT_ENV_KEY = "ruby_text_context"
RUBY_TEXT_RULE = "ruby_text"
RUBY_TEXT_DEFINITION_RULE = "ruby_text_definition"

RUBY_TEXT_PATTERN = r"\["
RUBY_TEXT_DEFINITION_PATTERN = r"^ {0,3}\*\*\[[^\n]*(?:\n|$)"


def get_context(env: MutableMapping[str, Any]) -> ConversionContext | None:
    return env.get(CONTEXT_ENV_KEY)


def parse_ruby_text_definition(block: BlockParser, m: re.Match[str], state: BlockState) -> int | None:
    ctx = get_context(state.env)
    if ctx is None or not ctx.options.definition_enabled:
        return None
    found = match_definition(m.group(0))
    if found is None:
        _debug_log(f"not a ruby definition: {m.group(0).strip()!r}")
        return None
    if found.base in ctx.registry:
        _debug_log(f"redefined {found.base!r} as {found.reading!r}")
    else:
        _debug_log(f"defined {found.base!r} as {found.reading!r}")
    ctx.registry.define(found.base, found.reading, found.attributes)
    # definitions produce no output but still split paragraphs
    state.append_token({"type": "blank_line"})
    return m.end()


def _fall_through(inline: InlineParser, m: re.Match[str], state: InlineState) -> int | None:
    """Hand the ``[`` back to whichever rule comes after ruby text (usually links)."""
    try:
        index = inline.rules.index(RUBY_TEXT_RULE)
    except ValueError:
        return None
    rest = [name for name in inline.rules[index + 1 :] if name in inline.specification]
    if not rest:
        return None
    m2 = inline.compile_sc(rest).match(state.src, m.start())
    if not m2 or not m2.lastgroup:
        return None
    return inline.parse_method(m2, state)


def parse_ruby_text(inline: InlineParser, m: re.Match[str], state: InlineState) -> int | None:
    ctx = get_context(state.env)
    if ctx is None or not ctx.options.ruby_text_enabled:
        return _fall_through(inline, m, state)
    found = match_inline_ruby(state.src, m.start())
    if found is None:
        return _fall_through(inline, m, state)
    annotation = ctx.complete(found.annotation)
    state.append_token({"type": RUBY_TEXT_RULE, "attrs": {"element": ctx.build(annotation)}})
    return m.start() + found.extent


def _render_element(
    md: Markdown,
    renderer: BaseRenderer,
    ctx: ConversionContext,
    element: RubyElement,
    state: BlockState,
) -> str:
    def render_inline(text: str) -> str:
        return renderer.render_tokens(md.inline(text, state.env), state)

    with ctx.nested():
        return render_ruby_element(
            element,
            render_inline,
            opening=ctx.options.opening_bracket,
            closing=ctx.options.closing_bracket,
        )


def _install_render_hook(md: Markdown) -> None:
    renderer = md.renderer
    assert renderer is not None
    original = renderer.render_token

    def render_token(self: BaseRenderer, token: dict[str, Any], state: BlockState) -> str:
        ctx = get_context(state.env)
        if ctx is None:
            return original(token, state)
        if token["type"] == RUBY_TEXT_RULE:
            return _render_element(md, self, ctx, token["attrs"]["element"], state)
        if token["type"] != "text" or not ctx.auto_annotation_active:
            return original(token, state)

        def render_definition(definition: Definition) -> str:
            annotation = Annotation(definition.base, definition.reading, definition.attributes)
            return _render_element(md, self, ctx, ctx.build(annotation), state)

        return scan_text(ctx, token["raw"], render_definition, self._get_method("text"))

    renderer.render_token = types.MethodType(render_token, renderer)  # type: ignore[method-assign]


class RubyTextPlugin:
    """
    mistune plugin for ruby annotations.

    Usage::

        md = mistune.create_markdown(plugins=[RubyTextPlugin()])
        md("**[漢字]: かん じ\\n\\n漢字を[読]^(よ)む")

    Options are shared by reference: changing them affects documents
    converted afterwards, never one already in progress.
    """

    def __init__(
        self,
        options: RubyTextOptions | None = None,
        *,
        glossary: Mapping[str, str] | None = None,
        builder: ElementBuilder | None = None,
    ) -> None:
        self.options = options if options is not None else RubyTextOptions()
        self.glossary: dict[str, str] = dict(glossary or {})
        self.builder = builder

    def new_context(self) -> ConversionContext:
        ctx = ConversionContext(options=self.options.copy(), builder=self.builder)
        if self.glossary:
            ctx.registry.update(self.glossary)
        return ctx

    def _before_parse(self, md: Markdown, state: BlockState) -> None:
        state.env[CONTEXT_ENV_KEY] = self.new_context()

    def __call__(self, md: Markdown) -> None:
        if getattr(md, "_ruby_text_plugin", None) is not None:
            return
        md._ruby_text_plugin = self  # type: ignore[attr-defined]

        md.block.register(
            RUBY_TEXT_DEFINITION_RULE,
            RUBY_TEXT_DEFINITION_PATTERN,
            parse_ruby_text_definition,
            before="paragraph",
        )
        md.block.insert_rule(md.block.block_quote_rules, RUBY_TEXT_DEFINITION_RULE, before="paragraph")
        md.block.insert_rule(md.block.list_rules, RUBY_TEXT_DEFINITION_RULE, before="paragraph")
        md.inline.register(RUBY_TEXT_RULE, RUBY_TEXT_PATTERN, parse_ruby_text, before="link")
        md.before_parse_hooks.append(self._before_parse)
        if md.renderer and md.renderer.NAME == "html":
            _install_render_hook(md)


def ruby_text(md: Markdown) -> None:
    """
    Plugin entry point for ``mistune.create_markdown(plugins=["rubytext.plugin.ruby_text"])``.

    .. code-block:: text

        **[漢字]: かん じ

        漢字には[振]^(ふ)り仮名が付きます。
    """
    RubyTextPlugin()(md)
