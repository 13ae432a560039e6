import codecs
import dataclasses
import re
import shlex
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from figref.errors import ConfigError
from figref.numbering import CaptionNumberFormat, CounterStyle
from figref.prescan import DEFAULT_CAPTION_FUNCTIONS

# Documents can override the configuration with directive comments at the start of the file.
# The lines of the file are checked until they stop being HTML comments, and of those all that fit
# the `<!-- figref-cli key=value ... -->` pattern are applied.
# These override the command-line arguments passed in.
FIGREF_DIRECTIVE = re.compile(r"^\s*<!--\s*figref-cli\s+(.*?)\s*-->\s*$")
HTML_COMMENT_LINE = re.compile(r"^\s*<!--.*-->\s*$")

# encoding is needed before the document can be read, so the document can't set it
DIRECTIVE_KEYS = ("caption_functions", "prescan", "figure_name", "numbering", "separator")

_TRUE_STRINGS = ("1", "true", "yes", "on")
_FALSE_STRINGS = ("0", "false", "no", "off")


@dataclass(frozen=True)
class FigrefConfig:
    caption_functions: Tuple[str, ...] = DEFAULT_CAPTION_FUNCTIONS
    """The names of the functions that create captions, which the pre-scan looks for"""

    prescan: bool = True
    """If False, skip the pre-scan. Figures are numbered as they're rendered and forward references fail."""

    figure_name: str = "Figure"
    numbering: str = CounterStyle.Arabic.value
    """One of the CounterStyle values: arabic, roman, Roman, alph, Alph"""
    separator: str = ": "
    encoding: str = "utf-8"

    def number_format(self) -> CaptionNumberFormat:
        try:
            style = CounterStyle(self.numbering)
        except ValueError:
            raise ConfigError(
                f"Unknown numbering style '{self.numbering}', expected one of {[s.value for s in CounterStyle]}"
            ) from None
        return CaptionNumberFormat(
            name=self.figure_name, style=style, separator=self.separator
        )

    def with_overrides(self, overrides: Dict[str, str]) -> "FigrefConfig":
        """Return a copy with the given string-valued settings applied."""
        changes: Dict[str, object] = {}
        fields = {f.name for f in dataclasses.fields(self)}
        for key, value in overrides.items():
            key = key.replace("-", "_")
            if key not in fields:
                raise ConfigError(f"Unknown figref setting '{key}'")
            if key == "prescan":
                changes[key] = parse_bool(value)
            elif key == "caption_functions":
                functions = tuple(f.strip() for f in value.split(",") if f.strip())
                if not functions:
                    raise ConfigError("caption_functions needs at least one function name")
                changes[key] = functions
            elif key == "encoding":
                try:
                    codecs.lookup(value)
                except LookupError:
                    raise ConfigError(f"Unknown encoding '{value}'") from None
                changes[key] = value
            elif key == "numbering":
                changes[key] = value
                # Checked now, so a bad directive is reported before anything is rendered
                dataclasses.replace(self, numbering=value).number_format()
            else:
                changes[key] = value
        return dataclasses.replace(self, **changes)


def parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    raise ConfigError(f"Expected a true/false value, got '{value}'")


def read_directives(lines: Iterable[str]) -> Dict[str, str]:
    """Collect `<!-- figref-cli key=value -->` settings from the leading comment lines of a document."""
    directives: Dict[str, str] = {}
    for line in lines:
        if not HTML_COMMENT_LINE.match(line):
            break
        match = FIGREF_DIRECTIVE.match(line)
        if not match:
            continue
        try:
            tokens = shlex.split(match.group(1))
        except ValueError as e:
            raise ConfigError(f"Can't parse figref-cli directive '{line.strip()}': {e}") from None
        for token in tokens:
            if "=" not in token:
                raise ConfigError(
                    f"figref-cli directives must be key=value, got '{token}'"
                )
            key, value = token.split("=", maxsplit=1)
            key = key.replace("-", "_")
            if key not in DIRECTIVE_KEYS:
                raise ConfigError(
                    f"Can't set '{key}' from a figref-cli directive, expected one of {DIRECTIVE_KEYS}"
                )
            directives[key] = value
    return directives
