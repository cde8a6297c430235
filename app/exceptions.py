class ServiceError(Exception):
    """Base for errors that terminate a request with a JSON error body."""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    status_code = 404

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found")


class InvalidRequestError(ServiceError):
    status_code = 400


class PermissionDeniedError(ServiceError):
    status_code = 403

    def __init__(self, message: str = "Not authorized to perform this action"):
        super().__init__(message)


class MediaStorageError(ServiceError):
    status_code = 503

    def __init__(self, message: str = "Media storage is unavailable"):
        super().__init__(message)


class AuthenticationError(ServiceError):
    status_code = 401

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)
