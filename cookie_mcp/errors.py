"""Request-level failures. None of these ever stop the server."""


class CookieJarError(Exception):
    kind = "CookieJarError"


class EmptyJar(CookieJarError):
    kind = "EmptyJar"

    def __init__(self, message: str = "Cookie jar is empty! No cookies available to award."):
        super().__init__(message)


class InvalidAmount(CookieJarError):
    kind = "InvalidAmount"


class Unauthorized(CookieJarError):
    kind = "Unauthorized"


class UnknownOperation(CookieJarError):
    kind = "UnknownOperation"


class InvalidArgument(CookieJarError):
    kind = "InvalidArgument"
