"""Portfolio Site App"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("portfolio-site")
except PackageNotFoundError:
    __version__ = "dev"
