from fastapi import status


class DomainError(Exception):
    """Base class for rule violations raised below the router layer."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationFailed(DomainError):
    pass


class InvalidTransition(DomainError):
    def __init__(self, entity: str, current: str, target: str):
        super().__init__(f"Cannot move {entity} from '{current}' to '{target}'")
        self.current = current
        self.target = target
