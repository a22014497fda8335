"""Gateway error taxonomy, rendered on the wire as ``{"error": message}``."""


class GatewayError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedBody(GatewayError):
    """Request payload could not be parsed into the expected shape."""

    status_code = 400


class UnknownModel(GatewayError):
    """Requested alias is not in the model registry."""

    status_code = 404

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = list(available)
        super().__init__(f"Unknown model: {name}. Available: {', '.join(self.available)}")


class BackendInvocationError(GatewayError):
    """The underlying provider capability failed (auth, transport or runtime)."""

    status_code = 500

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(message)
