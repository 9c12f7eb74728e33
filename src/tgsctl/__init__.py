"""tgsctl - command line client for tgstation-server"""

__version__ = "0.1.0"
