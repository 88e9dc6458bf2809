"""Catalogue of recognized SVG element kinds and well-known names."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XML_NS = "http://www.w3.org/XML/1998/namespace"
XMLNS_NS = "http://www.w3.org/2000/xmlns/"

ID_NAME = "id"
HREF_NAME = "href"
PATH_DATA_NAME = "d"
PATH_LENGTH_NAME = "pathLength"
XMLNS_NAME = "xmlns"


class ElementType(Enum):
    """Known element kinds; anything else is UNKNOWN."""

    A = "a"
    ANIMATE = "animate"
    ANIMATE_MOTION = "animateMotion"
    ANIMATE_TRANSFORM = "animateTransform"
    CIRCLE = "circle"
    CLIP_PATH = "clipPath"
    DEFS = "defs"
    DESC = "desc"
    ELLIPSE = "ellipse"
    FE_BLEND = "feBlend"
    FE_COLOR_MATRIX = "feColorMatrix"
    FE_COMPOSITE = "feComposite"
    FE_FLOOD = "feFlood"
    FE_GAUSSIAN_BLUR = "feGaussianBlur"
    FE_IMAGE = "feImage"
    FE_MERGE = "feMerge"
    FE_MERGE_NODE = "feMergeNode"
    FE_MORPHOLOGY = "feMorphology"
    FE_OFFSET = "feOffset"
    FE_TURBULENCE = "feTurbulence"
    FILTER = "filter"
    FOREIGN_OBJECT = "foreignObject"
    GROUP = "g"
    IMAGE = "image"
    LINE = "line"
    LINEAR_GRADIENT = "linearGradient"
    MARKER = "marker"
    MASK = "mask"
    METADATA = "metadata"
    MPATH = "mpath"
    PATH = "path"
    PATTERN = "pattern"
    POLYGON = "polygon"
    POLYLINE = "polyline"
    RADIAL_GRADIENT = "radialGradient"
    RECT = "rect"
    SCRIPT = "script"
    SET = "set"
    STOP = "stop"
    STYLE = "style"
    SVG = "svg"
    SWITCH = "switch"
    SYMBOL = "symbol"
    TEXT = "text"
    TEXT_PATH = "textPath"
    TITLE = "title"
    TSPAN = "tspan"
    USE = "use"
    VIEW = "view"
    UNKNOWN = ""

    @classmethod
    def from_name(cls, local_name: str) -> "ElementType":
        if not local_name:
            return cls.UNKNOWN
        return cls._value2member_map_.get(local_name, cls.UNKNOWN)


@dataclass(frozen=True)
class Tag:
    """Identity of a container: a catalogue kind, or the literal unknown name."""

    kind: ElementType
    literal: Optional[str] = None

    def __post_init__(self):
        if self.kind is ElementType.UNKNOWN and not self.literal:
            raise ValueError("Unknown tags must carry their literal name")

    @classmethod
    def from_name(cls, local_name: str) -> "Tag":
        kind = ElementType.from_name(local_name)
        return cls(kind, local_name if kind is ElementType.UNKNOWN else None)

    @property
    def name(self) -> str:
        if self.kind is ElementType.UNKNOWN:
            return self.literal
        return self.kind.value

    def __str__(self) -> str:
        return self.name
