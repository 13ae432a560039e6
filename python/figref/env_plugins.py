import inspect
from typing import Any, Dict, Sequence


class EnvPlugin:
    """
    The base class for all plugins that provide functions for
    the namespace that embedded document code is evaluated in, hence the name.
    """

    @property
    def _plugin_name(self) -> str:
        return type(self).__name__

    def _interface(self) -> Dict[str, Any]:
        """
        Define the interface available to the document environment,
        and thus all inline expressions and code chunks in evaluated documents.

        By default, finds all public variables, member functions, and static functions.
        Ignores any fields that begin with _.
        Ignores properties.
        Based on https://github.com/python/cpython/blob/a0773b89dfe5cd2190d539905dd89e7f6455668e/Lib/inspect.py#L562C5-L562C5.

        May be overridden."""

        interface = {}
        names = dir(self)
        for key in names:
            if key.startswith("_"):
                continue
            value = inspect.getattr_static(self, key)
            if (
                isinstance(value, property)
                or inspect.ismethoddescriptor(value)
                or inspect.isdatadescriptor(value)
            ):
                # We can't pass properties through - these are used via a Dict which is used as globals() and __get__ wouldn't be called.
                print(
                    f"Property {key} on {self._plugin_name} is not going to be used in the plugin interface, because we can't enforce calling __get__(). Expose getter and setter functions instead."
                )
            else:
                # Use getattr to do everything else as normal e.g. bind methods to the object etc.
                interface[key] = getattr(self, key)

        return interface

    @staticmethod
    def _make_env(plugins: Sequence["EnvPlugin"]) -> Dict[str, Any]:
        """Given a set of EnvPlugins, build the globals() dict that document code is evaluated in.

        Later plugins override earlier ones if they export the same name."""
        env: Dict[str, Any] = {}

        for plugin in plugins:
            for key, value in plugin._interface().items():
                if key in RESERVED_ENV_PLUGIN_EXPORTS:
                    print(
                        f"Warning: ignoring reserved field {key} of plugin {plugin._plugin_name}"
                    )
                    continue
                if key in env:
                    print(
                        f"Warning: plugin {plugin._plugin_name} overrides existing field {key}"
                    )
                env[key] = value

        return env


RESERVED_ENV_PLUGIN_EXPORTS = [
    "registry",
]
