"""Typed GraphQL errors raised by the catalog resolvers.

Each error carries an ``extensions.code`` so clients can branch on the kind
of failure without parsing messages.
"""

from typing import Any

from graphql import GraphQLError


class CatalogError(GraphQLError):
    """Base class for catalog errors."""

    code = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: str,
        invalid_args: Any = None,
        cause: Exception | None = None,
    ):
        extensions: dict[str, Any] = {"code": self.code}
        if invalid_args is not None:
            extensions["invalidArgs"] = invalid_args
        if cause is not None:
            extensions["error"] = str(cause)
        super().__init__(message, original_error=cause, extensions=extensions)


class AuthenticationRequired(CatalogError):
    """A protected mutation was called without a current user."""

    code = "UNAUTHENTICATED"

    def __init__(self, message: str = "not authenticated"):
        super().__init__(message)


class UserInputError(CatalogError):
    """Invalid input, including uniqueness violations and store write failures."""

    code = "BAD_USER_INPUT"


class InvalidCredentials(CatalogError):
    """Login with an unknown username or a wrong password."""

    code = "BAD_USER_INPUT"

    def __init__(self, message: str = "wrong credentials"):
        super().__init__(message)
