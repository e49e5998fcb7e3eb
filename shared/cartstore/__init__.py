# Cart Store

from .models import (
    EMPTY_CART,
    UNLIMITED,
    AddItem,
    Bounded,
    CartCommand,
    CartLine,
    CartOutcome,
    CartState,
    ClearCart,
    Notification,
    NotificationKind,
    OutcomeStatus,
    Product,
    RemoveItem,
    SetQuantity,
    StockLimit,
    Unlimited,
    stock_limit,
)
from .notifications import (
    CallbackSink,
    FanOutSink,
    LoggingSink,
    NotificationSink,
    Toast,
    ToastQueue,
)
from .pricing import OrderSummary, format_money, quantize_money, summarize
from .reducer import apply, decide, replay
from .store import CartStore

__all__ = [
    "EMPTY_CART",
    "UNLIMITED",
    "AddItem",
    "Bounded",
    "CartCommand",
    "CartLine",
    "CartOutcome",
    "CartState",
    "ClearCart",
    "Notification",
    "NotificationKind",
    "OutcomeStatus",
    "Product",
    "RemoveItem",
    "SetQuantity",
    "StockLimit",
    "Unlimited",
    "stock_limit",
    "CallbackSink",
    "FanOutSink",
    "LoggingSink",
    "NotificationSink",
    "Toast",
    "ToastQueue",
    "OrderSummary",
    "format_money",
    "quantize_money",
    "summarize",
    "apply",
    "decide",
    "replay",
    "CartStore",
]
