# Overwritten by the release build
__version__ = "0.1.0"
__commit__ = "?"
__date__ = ""
