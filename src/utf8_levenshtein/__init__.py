"""utf8-levenshtein package."""
from importlib.metadata import version, PackageNotFoundError

from .distance import AllocationFailure, levenshtein
from .utils.codepoints import CodePointDecoder, count_code_points, iter_code_points

try:
    __version__ = version("utf8-levenshtein")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = [
    "AllocationFailure",
    "CodePointDecoder",
    "__version__",
    "count_code_points",
    "iter_code_points",
    "levenshtein",
]
