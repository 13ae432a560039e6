import pytest

from figref.config import FigrefConfig, parse_bool, read_directives
from figref.errors import ConfigError, FigrefError
from figref.numbering import CounterStyle


def test_defaults():
    config = FigrefConfig()
    assert config.caption_functions == ("fig_cap", "register_caption")
    assert config.prescan
    fmt = config.number_format()
    assert fmt.name == "Figure"
    assert fmt.style is CounterStyle.Arabic
    assert fmt.separator == ": "


def test_with_overrides():
    config = FigrefConfig().with_overrides(
        {
            "caption-functions": "caption, fig_cap",
            "prescan": "no",
            "figure_name": "Fig.",
            "numbering": "Alph",
        }
    )
    assert config.caption_functions == ("caption", "fig_cap")
    assert config.prescan is False
    assert config.number_format().ref_text(2) == "Fig. B"
    # The original is untouched
    assert FigrefConfig().prescan


def test_unknown_override():
    with pytest.raises(ValueError):
        FigrefConfig().with_overrides({"colour": "red"})


def test_unknown_numbering():
    config = FigrefConfig(numbering="greek")
    with pytest.raises(ValueError):
        config.number_format()


def test_parse_bool():
    assert parse_bool("True")
    assert parse_bool(" yes ")
    assert not parse_bool("0")
    assert not parse_bool("off")
    with pytest.raises(ValueError):
        parse_bool("maybe")


def test_read_directives():
    lines = [
        "<!-- figref-cli figure_name=Fig. -->\n",
        "<!-- unrelated -->\n",
        '<!-- figref-cli separator=" - " prescan=false -->\n',
        "# Heading\n",
        "<!-- figref-cli numbering=roman -->\n",
    ]
    assert read_directives(lines) == {
        "figure_name": "Fig.",
        "separator": " - ",
        "prescan": "false",
    }


def test_read_directives_none():
    assert read_directives([]) == {}
    assert read_directives(["text\n", "<!-- figref-cli figure_name=Fig. -->\n"]) == {}


def test_directives_cant_set_encoding():
    with pytest.raises(ValueError):
        read_directives(["<!-- figref-cli encoding=latin-1 -->"])


def test_directives_must_be_key_value():
    with pytest.raises(ValueError):
        read_directives(["<!-- figref-cli prescan -->"])


@pytest.mark.parametrize(
    "overrides",
    [
        {"colour": "red"},
        {"numbering": "bogus"},
        {"prescan": "maybe"},
        {"caption_functions": " , "},
        {"encoding": "not-a-real-encoding"},
    ],
)
def test_bad_overrides_are_config_errors(overrides):
    with pytest.raises(ConfigError) as err_info:
        FigrefConfig().with_overrides(overrides)
    assert isinstance(err_info.value, FigrefError)


def test_unbalanced_directive_quotes():
    with pytest.raises(ConfigError):
        read_directives(['<!-- figref-cli separator="oops -->'])
