"""Version information for the Satsbox Python SDK"""

__version__ = "0.1.0"
