from .model import GradleInstallation, GradleBuilder, Build, Invocation
from .installations import InstallationStore
from .descriptor import GradleBuilderDescriptor, GradleInstallationDescriptor, get_descriptor, set_descriptor
from .builder import perform

__all__ = [
    "GradleInstallation",
    "GradleBuilder",
    "Build",
    "Invocation",
    "InstallationStore",
    "GradleBuilderDescriptor",
    "GradleInstallationDescriptor",
    "get_descriptor",
    "set_descriptor",
    "perform",
]
