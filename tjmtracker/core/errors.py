"""Error taxonomy shared by the business logic and the API layer."""


class TrackerError(Exception):
    """Base exception for tracker errors"""
    status_code = 500


class ValidationError(TrackerError, ValueError):
    """Raised when input is malformed or references something that does not exist"""
    status_code = 400


class NotFoundError(TrackerError, LookupError):
    """Raised when an operation targets an unknown id"""
    status_code = 404

    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")
