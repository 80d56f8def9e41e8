__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'acclimate'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .params import *
from .commands import *
from .runner import *
from .faults import *
from .terminal import *
from .helptext import *

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
    "__version__",
    "version_info"
)

# Load the exposed API of the parameters
__all__ += params.__all__  # type: ignore[attr-defined]
# Load the exposed API of the commands
__all__ += commands.__all__  # type: ignore[attr-defined]
# Load the exposed API of the runner
__all__ += runner.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the terminal helpers
__all__ += terminal.__all__  # type: ignore[attr-defined]
# Load the exposed API of the help text
__all__ += helptext.__all__  # type: ignore[attr-defined]
