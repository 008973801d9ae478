from .attributes import Attributes, parse_attributes
from .context import ConversionContext, RubyTextOptions
from .converter import RubyTextMarkdown, convert
from .definitions import Definition, DefinitionRegistry, InvalidBase
from .elements import Annotation, RubyElement, RubyPair, build_ruby_element, split_ruby
from .plugin import RubyTextPlugin, ruby_text
from .syntax import match_definition, match_inline_ruby

__all__ = [
    "Annotation",
    "Attributes",
    "ConversionContext",
    "Definition",
    "DefinitionRegistry",
    "InvalidBase",
    "RubyElement",
    "RubyPair",
    "RubyTextMarkdown",
    "RubyTextOptions",
    "RubyTextPlugin",
    "build_ruby_element",
    "convert",
    "match_definition",
    "match_inline_ruby",
    "parse_attributes",
    "ruby_text",
    "split_ruby",
]
