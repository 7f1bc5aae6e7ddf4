"""gocross - locate a Go toolchain and cross-compile a program with it."""

__version__ = "0.1.0"
