"""Apply declarative Kubernetes manifests to a running cluster."""

__version__ = "0.1.0"
