"""pushgate: HTTP and gRPC gateway in front of Firebase Cloud Messaging."""

__version__ = "0.1.0"
