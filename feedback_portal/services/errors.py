class ServiceError(RuntimeError):
    """Recoverable service error (validation/lookup/precondition)."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"success": False, "error": self.message}


class ValidationError(ServiceError):
    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        return {"success": False, "error": self.message, "field": self.field}


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    # Precondition failures are reported as 400, same as validation
    status_code = 400
