from figref.env_plugins import EnvPlugin
from figref.plugins import CaptionPlugin, PrimitivesPlugin
from figref.registry import CaptionRegistry
from figref.render import FigureBlock


class ExamplePlugin(EnvPlugin):
    value = 5

    def public(self) -> str:
        return "public"

    def _private(self) -> str:
        return "private"

    @property
    def prop(self) -> int:
        return 1


def test_interface_hides_private_and_properties(capsys):
    interface = ExamplePlugin()._interface()
    assert interface["value"] == 5
    assert interface["public"]() == "public"
    assert "_private" not in interface
    assert "prop" not in interface
    assert "prop" in capsys.readouterr().out


def test_make_env_skips_reserved_names(capsys):
    class ReservedPlugin(EnvPlugin):
        registry = "not allowed"

    env = EnvPlugin._make_env([ReservedPlugin()])
    assert "registry" not in env
    assert "reserved" in capsys.readouterr().out


def test_make_env_later_plugins_win(capsys):
    class First(EnvPlugin):
        thing = 1

    class Second(EnvPlugin):
        thing = 2

    env = EnvPlugin._make_env([First(), Second()])
    assert env["thing"] == 2
    assert "overrides" in capsys.readouterr().out


def test_caption_plugin_interface():
    plugin = CaptionPlugin(CaptionRegistry({"a": 1}))
    env = EnvPlugin._make_env([PrimitivesPlugin(), plugin])
    for name in [
        "fig_cap",
        "fig_ref",
        "fig_dump",
        "figure",
        "register_caption",
        "lookup_reference",
        "dump_all",
        "nbsp",
        "endash",
        "emdash",
    ]:
        assert name in env

    assert env["fig_ref"]("a") == "Figure 1"
    assert env["lookup_reference"]("a", hyperlink=True) == '<a href="#a">Figure 1</a>'
    caption = env["register_caption"]("a", "A")
    assert caption.number == 1
    fig = env["figure"]("a.png", caption)
    assert isinstance(fig, FigureBlock)
    assert env["dump_all"]() == env["fig_dump"]() == {"a": 1}
