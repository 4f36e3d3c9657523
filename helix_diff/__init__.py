"""Compare two genomic samples chromosome by chromosome and report where their DNA differs."""

from .config import Config
from . import helix
from . import comparison
from . import alignment
from . import utils

__version__ = '0.1.0'
