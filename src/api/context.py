"""Per-request GraphQL context."""

from strawberry.fastapi import BaseContext

from store import DocumentStore, Row

from .auth import AuthConfig, resolve_current_user
from .events import EventBus


class CatalogContext(BaseContext):
    """State shared by the resolvers of one GraphQL operation.

    Attributes:
        store: Document store
        bus: Event bus for subscriptions
        auth: Token configuration
        book_counts: Author name to book count map, filled by allAuthors so
            Author.bookCount can skip a count query per author
    """

    def __init__(
        self,
        store: DocumentStore,
        bus: EventBus,
        auth: AuthConfig,
        authorization: str | None = None,
    ):
        super().__init__()
        self.store = store
        self.bus = bus
        self.auth = auth
        self.book_counts: dict[str, int] | None = None
        self._authorization = authorization
        self._current_user: Row | None = None
        self._user_resolved = False

    @property
    def authorization(self) -> str | None:
        """Authorization header of the HTTP request or WebSocket handshake."""
        if self._authorization is not None:
            return self._authorization
        if self.request is None:
            return None
        return self.request.headers.get("Authorization")

    async def get_current_user(self) -> Row | None:
        if not self._user_resolved:
            self._current_user = await resolve_current_user(
                self.store, self.authorization, self.auth
            )
            self._user_resolved = True
        return self._current_user
