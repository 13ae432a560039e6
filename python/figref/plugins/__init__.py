from figref.plugins.captions import CaptionPlugin
from figref.plugins.primitives import PrimitivesPlugin

__all__ = ["CaptionPlugin", "PrimitivesPlugin"]
