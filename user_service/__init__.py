"""user-service - account registration, activation and token issuance."""

__version__ = "0.1.0"
