"""Domain layer errors.

Services raise these for expected failure conditions; the API layer
translates each family to an HTTP status.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Input failed a domain rule (bad value, out-of-range text, ...)."""

    pass


class InvalidVoteValueError(ValidationError):
    """Raised when a vote value is anything other than +1 or -1."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Vote value must be 1 or -1, got {value!r}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a write collides with existing state."""

    pass


class AlreadyFlaggedError(ConflictError):
    """Raised when a user flags a comment they have already flagged."""

    def __init__(self, comment_id: str, user_id: str):
        self.comment_id = comment_id
        self.user_id = user_id
        super().__init__(f"User {user_id} has already flagged comment {comment_id}")


class DuplicateVoteError(ConflictError):
    """Raised when a concurrent request inserted the same vote first."""

    def __init__(self, meme_id: str, user_id: str):
        super().__init__(f"User {user_id} already has a vote on meme {meme_id}")


class EmailTakenError(ConflictError):
    """Raised when registering an email that belongs to another account."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"An account with email {email} already exists")


class NotAuthorizedError(DomainError):
    """Raised when a user attempts an action on content they may not touch."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        self.action = action
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"User {user_id} is not authorized to {action} {resource} {resource_id}"
        )
