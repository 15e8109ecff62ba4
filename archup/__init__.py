"""archup — upgrade an Arch Linux system through whichever package tool is installed."""

__version__ = "0.1.0"
