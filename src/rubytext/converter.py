from __future__ import annotations

from typing import Iterable, Mapping, cast

import mistune
from mistune.plugins import PluginRef

from .context import ConversionContext, RubyTextOptions
from .definitions import DefinitionRegistry
from .elements import ElementBuilder
from .plugin import CONTEXT_ENV_KEY, RubyTextPlugin, get_context

__all__ = ["RubyTextMarkdown", "convert"]


class RubyTextMarkdown:
    """
    Markdown to HTML converter with ruby annotations.

    Usage::

        md = RubyTextMarkdown()
        md.convert("Markdownはとても[便利]^(べんり)")
        # <p>Markdownはとても<ruby>便利<rp>（</rp><rt>べんり</rt><rp>）</rp></ruby></p>

    Every conversion gets a fresh set of definitions; configuration changes
    apply to the conversions that follow them.
    """

    def __init__(
        self,
        options: RubyTextOptions | None = None,
        *,
        escape: bool = True,
        hard_wrap: bool = False,
        plugins: Iterable[PluginRef] | None = None,
        builder: ElementBuilder | None = None,
        glossary: Mapping[str, str] | None = None,
    ) -> None:
        self.options = options if options is not None else RubyTextOptions()
        self.plugin = RubyTextPlugin(self.options, glossary=glossary, builder=builder)
        extra_plugins: list[PluginRef] = list(plugins or [])
        extra_plugins.append(self.plugin)
        self._md = mistune.create_markdown(escape=escape, hard_wrap=hard_wrap, plugins=extra_plugins)

    @property
    def markdown(self) -> mistune.Markdown:
        return self._md

    def convert(self, text: str) -> str:
        return cast(str, self._md(text))

    __call__ = convert

    def parse(self, text: str) -> tuple[str, ConversionContext]:
        html, state = self._md.parse(text)
        ctx = get_context(state.env)
        assert ctx is not None
        return cast(str, html), ctx

    def line(self, text: str) -> str:
        """Render inline markup only, without a surrounding paragraph."""
        state = self._md.block.state_cls()
        state.env[CONTEXT_ENV_KEY] = self.plugin.new_context()
        tokens = self._md.inline(text, state.env)
        renderer = self._md.renderer
        assert renderer is not None
        return renderer.render_tokens(tokens, state)

    def collect_definitions(self, text: str) -> DefinitionRegistry:
        _, ctx = self.parse(text)
        return ctx.registry

    # configuration

    @property
    def brackets(self) -> tuple[str, str]:
        return self.options.opening_bracket, self.options.closing_bracket

    def set_brackets(self, opening: str, closing: str) -> RubyTextMarkdown:
        self.options.opening_bracket = opening
        self.options.closing_bracket = closing
        return self

    def set_opening_bracket(self, bracket: str) -> RubyTextMarkdown:
        self.options.opening_bracket = bracket
        return self

    def set_closing_bracket(self, bracket: str) -> RubyTextMarkdown:
        self.options.closing_bracket = bracket
        return self

    @property
    def separator(self) -> str:
        return self.options.separator

    def set_separator(self, separator: str) -> RubyTextMarkdown:
        self.options.separator = separator
        return self

    @property
    def ruby_text_enabled(self) -> bool:
        return self.options.ruby_text_enabled

    def set_ruby_text_enabled(self, enabled: bool) -> RubyTextMarkdown:
        self.options.ruby_text_enabled = enabled
        return self

    @property
    def definition_enabled(self) -> bool:
        return self.options.definition_enabled

    def set_definition_enabled(self, enabled: bool) -> RubyTextMarkdown:
        self.options.definition_enabled = enabled
        return self


def convert(text: str, options: RubyTextOptions | None = None, **kwargs: object) -> str:
    return RubyTextMarkdown(options, **kwargs).convert(text)  # type: ignore[arg-type]
