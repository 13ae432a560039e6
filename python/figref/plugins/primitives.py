from figref.env_plugins import EnvPlugin


class PrimitivesPlugin(EnvPlugin):
    """Provides a set of helpful baseline features for document code."""

    # Helpers for inserting common but unwieldy unicode characters
    nbsp = "\u00A0"
    endash = "\u2013"
    emdash = "\u2014"
