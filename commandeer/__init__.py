__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'commandeer'
__author__ = 'Commandeer Developers'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .commands import *
from .dispatcher import *
from .faults import *
from .invocation import *
from .parsing import *
from .registry import *
from .shell import *
from .specs import *
from .suggestions import *
from .utils import Unset

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info",
    "Unset",
)

# Load the exposed API of the commands
__all__ += commands.__all__  # type: ignore[attr-defined]
# Load the exposed API of the dispatcher
__all__ += dispatcher.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the invocation
__all__ += invocation.__all__  # type: ignore[attr-defined]
# Load the exposed API of the parser
__all__ += parsing.__all__  # type: ignore[attr-defined]
# Load the exposed API of the registry
__all__ += registry.__all__  # type: ignore[attr-defined]
# Load the exposed API of the shell
__all__ += shell.__all__  # type: ignore[attr-defined]
# Load the exposed API of the specs
__all__ += specs.__all__  # type: ignore[attr-defined]
# Load the exposed API of the suggestions
__all__ += suggestions.__all__  # type: ignore[attr-defined]
