"""Presentation state for the product detail screen."""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Optional

from ..cart.services import CartResult, CartService
from .repository import ProductCatalogService
from .services import Product

CONFIRMATION_MESSAGE = "Product added to cart"

TimerFactory = Callable[[float, Callable[[], None]], threading.Timer]


class ConfirmationTimer:
    """A delayed callback that can be cancelled before it fires."""

    def __init__(
        self,
        delay: float,
        callback: Callable[[], None],
        *,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        self.delay = delay
        self._callback = callback
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self._fired = threading.Event()

    def _fire(self) -> None:
        self._fired.set()
        self._callback()

    def start(self) -> None:
        if self._timer is not None:
            raise RuntimeError("Confirmation timer already started.")
        self._timer = self._timer_factory(self.delay, self._fire)
        self._timer.daemon = True
        self._timer.start()

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()

    @property
    def is_pending(self) -> bool:
        return (
            self._timer is not None
            and not self._fired.is_set()
            and not self._timer.finished.is_set()
        )


@dataclass(frozen=True)
class DetailState:
    """Snapshot of what the detail screen shows."""

    product: Optional[Product] = None
    is_loading: bool = True
    message: Optional[str] = None
    message_type: Optional[str] = None

    @property
    def status(self) -> str:
        if self.is_loading:
            return "loading"
        if self.product is None:
            return "not-found"
        return "ready"

    @property
    def can_add_to_cart(self) -> bool:
        return self.product is not None and self.product.has_stock


class ProductDetailScreen:
    """Load one product, add it to the cart and briefly confirm the addition.

    The confirmation disappears after ``confirmation_seconds``. ``close``
    cancels any pending dismissal; nothing mutates the screen afterwards.
    """

    def __init__(
        self,
        catalog: ProductCatalogService,
        cart: CartService,
        *,
        confirmation_seconds: float = 2.0,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        self._catalog = catalog
        self._cart = cart
        self._confirmation_seconds = confirmation_seconds
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._state = DetailState()
        self._timer: Optional[ConfirmationTimer] = None
        self._closed = False

    @property
    def state(self) -> DetailState:
        with self._lock:
            return self._state

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def has_pending_dismissal(self) -> bool:
        return self._timer is not None and self._timer.is_pending

    def load(self, product_id: int) -> DetailState:
        self._ensure_open()
        with self._lock:
            self._state = DetailState(is_loading=True)
        product = self._catalog.fetch_by_id(product_id)
        with self._lock:
            self._state = DetailState(product=product, is_loading=False)
            return self._state

    def add_to_cart(self) -> CartResult:
        self._ensure_open()
        product = self.state.product
        if product is None:
            raise LookupError("No product is loaded.")
        if not product.has_stock:
            result = self._cart.reject(product, f"{product.name} is out of stock.")
        else:
            result = self._cart.add(product)

        with self._lock:
            if result.success:
                self._state = DetailState(
                    product=product,
                    is_loading=False,
                    message=CONFIRMATION_MESSAGE,
                    message_type="success",
                )
            else:
                self._state = DetailState(
                    product=product,
                    is_loading=False,
                    message=result.message,
                    message_type="error",
                )
            self._replace_timer(schedule=result.success)
        return result

    def dismiss_confirmation(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._state = DetailState(product=self._state.product, is_loading=False)

    def close(self) -> None:
        with self._lock:
            self._closed = True
            self._replace_timer(schedule=False)

    def _replace_timer(self, *, schedule: bool) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if schedule:
            self._timer = ConfirmationTimer(
                self._confirmation_seconds,
                self.dismiss_confirmation,
                timer_factory=self._timer_factory,
            )
            self._timer.start()

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("The detail screen has been closed.")
