"""pyfacet - nested key/value settings for any Python object."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyfacet")
except PackageNotFoundError:
    __version__ = "0+local"
from pyfacet.config import FacetOptions
from pyfacet.exceptions import FacetError, InvalidArgumentError, MergeConflictError
from pyfacet.mixin import SettingsMixin, attach, store_of
from pyfacet.store import SettingsStore

__all__ = [
    "__version__",
    "FacetError",
    "FacetOptions",
    "InvalidArgumentError",
    "MergeConflictError",
    "SettingsMixin",
    "SettingsStore",
    "attach",
    "store_of",
]
