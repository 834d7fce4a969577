"""PremiumPool command line harness."""
from premiumpool import __version__

__all__ = ["__version__"]
