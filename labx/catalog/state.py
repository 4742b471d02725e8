"""Catalog screen state as a pure transition function plus a small observable store."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Optional, Union

from .repository import CatalogUnavailableError, ProductCatalogService
from .services import FilterQuery, Product, filter_products, list_categories, toggle_category


@dataclass(frozen=True)
class CatalogState:
    """Everything the catalog screen renders, derived from a few inputs."""

    products: tuple[Product, ...] = ()
    is_loading: bool = False
    error: Optional[str] = None
    query: FilterQuery = field(default_factory=FilterQuery)
    load_token: int = 0

    @property
    def visible_products(self) -> list[Product]:
        return filter_products(self.products, self.query)

    @property
    def categories(self) -> list[str]:
        return list_categories(self.products)

    @property
    def status(self) -> str:
        """Return which of the screen's states should be shown."""

        if self.is_loading:
            return "loading"
        if self.error is not None:
            return "error"
        if not self.products:
            return "empty"
        return "ready"

    @property
    def result_count(self) -> int:
        return len(self.visible_products)

    @property
    def result_label(self) -> str:
        return f"{self.result_count} result(s)"

    def to_dict(self) -> dict[str, object]:
        return {
            "status": self.status,
            "error": self.error,
            "query": self.query.to_dict(),
            "filtering": self.query.is_active,
            "categories": self.categories,
            "count": self.result_count,
            "products": [product.to_dict() for product in self.visible_products],
        }


@dataclass(frozen=True)
class LoadStarted:
    pass


@dataclass(frozen=True)
class LoadSucceeded:
    token: int
    products: tuple[Product, ...]


@dataclass(frozen=True)
class LoadFailed:
    token: int
    message: str


@dataclass(frozen=True)
class SearchChanged:
    text: str


@dataclass(frozen=True)
class SearchCleared:
    pass


@dataclass(frozen=True)
class CategoryToggled:
    label: str


@dataclass(frozen=True)
class CategoryCleared:
    pass


CatalogEvent = Union[
    LoadStarted,
    LoadSucceeded,
    LoadFailed,
    SearchChanged,
    SearchCleared,
    CategoryToggled,
    CategoryCleared,
]


def reduce(state: CatalogState, event: CatalogEvent) -> CatalogState:
    """Return the state that results from applying ``event`` to ``state``.

    Load outcomes carry the token handed out by ``LoadStarted``; an outcome for
    a superseded load is ignored so each load assigns the product list at most
    once. A failed load keeps the products from the previous successful load.
    """

    if isinstance(event, LoadStarted):
        return replace(state, is_loading=True, error=None, load_token=state.load_token + 1)
    if isinstance(event, LoadSucceeded):
        if event.token != state.load_token or not state.is_loading:
            return state
        return replace(state, products=tuple(event.products), is_loading=False, error=None)
    if isinstance(event, LoadFailed):
        if event.token != state.load_token or not state.is_loading:
            return state
        return replace(state, is_loading=False, error=event.message)
    if isinstance(event, SearchChanged):
        return replace(state, query=replace(state.query, text=event.text))
    if isinstance(event, SearchCleared):
        return replace(state, query=replace(state.query, text=""))
    if isinstance(event, CategoryToggled):
        selection = toggle_category(state.query.category, event.label)
        return replace(state, query=replace(state.query, category=selection))
    if isinstance(event, CategoryCleared):
        return replace(state, query=replace(state.query, category=None))
    raise TypeError(f"Unknown catalog event {event!r}")


Listener = Callable[[CatalogState], None]


class CatalogStore:
    """Hold the current catalog state and notify subscribers when it changes."""

    def __init__(self, initial: CatalogState | None = None) -> None:
        self._state = initial or CatalogState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> CatalogState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, event: CatalogEvent) -> CatalogState:
        new_state = reduce(self._state, event)
        if new_state != self._state:
            self._state = new_state
            for listener in list(self._listeners):
                listener(new_state)
        return self._state

    def load(self, service: ProductCatalogService) -> CatalogState:
        """Fetch the full catalog through ``service`` and record the outcome."""

        token = self.dispatch(LoadStarted()).load_token
        try:
            products = service.fetch_all()
        except CatalogUnavailableError as exc:
            return self.dispatch(LoadFailed(token=token, message=str(exc)))
        return self.dispatch(LoadSucceeded(token=token, products=tuple(products)))

    def apply_query(self, query: FilterQuery) -> CatalogState:
        """Move the store to ``query`` through the usual search and category events."""

        if query.text:
            self.dispatch(SearchChanged(query.text))
        else:
            self.dispatch(SearchCleared())
        if query.category is None:
            self.dispatch(CategoryCleared())
        elif query.category != self._state.query.category:
            self.dispatch(CategoryToggled(query.category))
        return self._state
