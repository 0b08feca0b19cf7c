from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

import structlog

# ───────────────────────────────────────────────
# Minimal CQRS: typed messages, one handler per type
# ───────────────────────────────────────────────

C = TypeVar('C')  # command type
Q = TypeVar('Q')  # query filters type
R = TypeVar('R')  # query result type

logger = structlog.get_logger(__name__)

# ───────────────────────────────────────────────
# Messages
# ───────────────────────────────────────────────
@dataclass(frozen=True)
class CommandDTO:
    """Base for write commands (changes state)."""

@dataclass(frozen=True)
class QueryDTO(Generic[Q]):
    """Base for read queries; `filters` carries optional query parameters."""
    filters: Q

# ───────────────────────────────────────────────
# Handler protocols
# ───────────────────────────────────────────────
class CommandHandler(Protocol, Generic[C]):
    def handle(self, command: C) -> Any: ...

class QueryHandler(Protocol, Generic[Q, R]):
    def handle(self, query: Q) -> R: ...

# ───────────────────────────────────────────────
# Buses (timed dispatch)
# ───────────────────────────────────────────────
class _Bus:
    kind = "message"

    def __init__(self) -> None:
        self._handlers: dict[type, Any] = {}

    def register(self, message_type: type, handler: Any) -> None:
        self._handlers[message_type] = handler
        logger.debug(f"{self.kind}.handler_registered", message=message_type.__name__,
                     handler=type(handler).__name__)

    def dispatch(self, message: Any) -> Any:
        name = type(message).__name__
        handler = self._handlers.get(type(message))
        if handler is None:
            raise ValueError(f"No handler for {self.kind}: {name}")

        start = time.perf_counter()
        try:
            result = handler.handle(message)
        except Exception as exc:
            logger.warning(f"{self.kind}.failed", message=name, error=type(exc).__name__,
                           duration=f"{time.perf_counter() - start:.3f}s")
            raise
        logger.info(f"{self.kind}.executed", message=name, duration=f"{time.perf_counter() - start:.3f}s")
        return result

class CommandBus(_Bus):
    """Dispatches each command to its single registered handler."""
    kind = "command"

class QueryBus(_Bus):
    """Dispatches each query to its single registered handler."""
    kind = "query"
