import importlib.metadata

try:
    __version__ = importlib.metadata.version("optmodel")
except importlib.metadata.PackageNotFoundError:
    # not installed, e.g. when running from a source checkout
    __version__ = "1.0.0"
