# flake8: noqa

import importlib
import importlib.metadata


_SUBMODULES = [
    "coordinates",
    "exceptions",
    "kinematics",
    "model",
    "models",
]
__all__ = _SUBMODULES
_version = None


def determine_version(module_name):
    return importlib.metadata.version(module_name)


class LazyModule(object):
    def __init__(self, name):
        self.__name__ = "skchain." + name
        self._name = name
        self._module = None

    def __getattr__(self, attr):
        if self._module is None:
            self._module = importlib.import_module("skchain." + self._name)
        return getattr(self._module, attr)

    def __dir__(self):
        if self._module is None:
            return ["__all__"]
        return dir(self._module)


_module_cache = {}
for submodule in _SUBMODULES:
    _module_cache[submodule] = LazyModule(submodule)


def __getattr__(name):
    global _version
    if name == "__version__":
        if _version is None:
            _version = determine_version('scikit-chain')
        return _version
    if name in _SUBMODULES:
        return _module_cache[name]
    raise AttributeError(
        "module {} has no attribute {}".format(__name__, name))


def __dir__():
    return __all__ + ['__version__']
