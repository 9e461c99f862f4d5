class PrDescribeError(Exception):
    """Base class for every fatal error raised by prdescribe."""


class ConfigError(PrDescribeError):
    pass


class InvalidModelError(ConfigError):
    pass


class NetworkError(PrDescribeError):
    pass


class ApiError(PrDescribeError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthError(ApiError):
    pass
