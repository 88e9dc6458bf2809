"""svgtidy - Shrink SVG documents by rewriting their tree."""
from .document.node import Comment, Element, ProcessingInstruction, Text
from .errors import (
    ConfigError,
    MismatchedEndTag,
    MissingDocumentRoot,
    MissingEndTag,
    ParseError,
    SVGTidyError,
    UnderlyingStreamError,
    WriteError,
)
from .optimization.pipeline import PASSES, Pipeline, PipelineConfig
from .optimizer import SVGOptimizer
from .output.serializer import to_string, write
from .parsing.svg_parser import parse, parse_svg

__version__ = "0.1.0"
