"""CDK stacks for the single-host application."""

from .application_stack import ApplicationStack
from .composition import compose
from .network_stack import NetworkStack

__all__ = [
    "ApplicationStack",
    "NetworkStack",
    "compose",
]
