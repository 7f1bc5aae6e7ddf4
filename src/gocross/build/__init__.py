"""Build target description and go build invocation."""

from gocross.build.invoker import BuildInvoker, BuildResult, InvocationDescriptor
from gocross.build.target import BuildTarget

__all__ = ["BuildInvoker", "BuildResult", "BuildTarget", "InvocationDescriptor"]
