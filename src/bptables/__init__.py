"""
*bptables*

Breakpoint-indexed 1-D and 2-D lookup tables with configurable interpolation and extrapolation.
"""

from ._precision import *  # noqa
from .errors import *  # noqa
from .types import *  # noqa
from .config import *  # noqa
from .search import *  # noqa
from .one_d import *  # noqa
from .two_d import *  # noqa
from .factories import *  # noqa
