from typing import Any, Dict, Optional, Union

from typing_extensions import override

from figref.env_plugins import EnvPlugin
from figref.registry import CaptionMarkup, CaptionRegistry
from figref.render import FigureBlock


class CaptionPlugin(EnvPlugin):
    """Plugin exposing the caption registry to document code.

    `fig_cap()` generates a numbered caption, either inline or for passing to `figure()`.
    `fig_ref()` refers back to a caption by label, and works even if the caption comes later in the document
    as long as the pre-scan could see it.
    """

    _registry: CaptionRegistry

    def __init__(self, registry: CaptionRegistry) -> None:
        super().__init__()
        self._registry = registry

    def fig_cap(
        self,
        label: str,
        text: str,
        center: bool = False,
        color: str = "black",
        inline: bool = False,
    ) -> Union[CaptionMarkup, str]:
        return self._registry.register_caption(
            label, text, center=center, color=color, inline=inline
        )

    def fig_ref(
        self, label: str, hyperlink: bool = False, check_exists: bool = True
    ) -> str:
        return self._registry.lookup_reference(
            label, hyperlink=hyperlink, check_exists=check_exists
        )

    def fig_dump(self) -> Dict[str, int]:
        return self._registry.dump_all()

    def figure(
        self,
        src: Optional[str] = None,
        caption: Union[CaptionMarkup, str, None] = None,
        align: str = "default",
        alt: str = "",
        content: Optional[str] = None,
    ) -> FigureBlock:
        """
        Wrap an image (or some raw HTML content) in a <figure>.

        If the caption came from `fig_cap()`, the figure gets an anchor that `fig_ref(hyperlink=True)` links to.
        A plain string caption is used as-is, without a number.
        """
        return FigureBlock(
            src=src, content=content, caption=caption, align=align, alt=alt
        )

    @override
    def _interface(self) -> Dict[str, Any]:
        interface = super()._interface()
        # The long names match the registry, so document code reads the same either way
        interface["register_caption"] = self.fig_cap
        interface["lookup_reference"] = self.fig_ref
        interface["dump_all"] = self.fig_dump
        return interface
