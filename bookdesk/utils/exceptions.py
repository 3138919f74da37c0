from fastapi import HTTPException, status


class PermissionDeniedError(HTTPException):
    def __init__(self, detail: str = "Permission denied"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class ValidationError(HTTPException):
    def __init__(self, detail: str = "Validation failed"):
        super().__init__(
            status_code=422,
            detail=detail,
        )


class InvalidTransitionError(ValidationError):
    """A booking status change outside the lifecycle table."""

    def __init__(self, current_status: str, proposed_status: str, allowed=()):
        self.current_status = current_status
        self.proposed_status = proposed_status
        self.allowed = tuple(sorted(allowed))
        workflow = ", ".join(self.allowed) or "none (terminal status)"
        super().__init__(
            detail=(
                f'Cannot change from "{current_status}" to "{proposed_status}". '
                f"Allowed: {workflow}"
            )
        )
