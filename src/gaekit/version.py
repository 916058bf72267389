"""Version information for GAEKit"""

__version__ = "0.2.0"
