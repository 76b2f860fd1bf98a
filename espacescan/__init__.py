"""espacescan: typed client and CLI for the Conflux eSpace explorer API."""

from espacescan.api import ESpaceApi
from espacescan.scanner import ESpaceScanner
from espacescan.wrapper import ESpaceScannerWrapper

__version__ = "0.1.0"

__all__ = ["ESpaceApi", "ESpaceScanner", "ESpaceScannerWrapper", "__version__"]
