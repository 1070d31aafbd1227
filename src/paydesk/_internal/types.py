"""Type aliases shared by the routing, serving and testing layers."""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any

type Message = MutableMapping[str, Any]
type Scope = MutableMapping[str, Any]
type Receive = Callable[[], Awaitable[Message]]
type Send = Callable[[Message], Awaitable[None]]

# Routing never calls handlers; the pipeline inspects their signatures
type Handler = Callable[..., Any]
type ErrorHandler = Callable[..., Any]
