"""Uniform asynchronous forwarding of storage operations.

Every storage operation is declared as an ``OperationSpec``: a name, the
shape of the underlying client call, and a plain function taking the client
handle followed by the operation's own arguments. ``OperationForwarder``
turns each spec into a coroutine function with one calling convention:

    result = await forwarder.bind(spec)(*args)

Call Shapes:
    BLOCKING: a request/response call on the boto3 client. It is run in a
        worker thread so the event loop is never blocked.
    STREAM: returns a lazy iterator or listener without issuing a request.
        The handle is returned as-is; the consumer drains it.
    DIRECT: a local computation such as presigning. Returned as-is.

Whatever the shape, a failure raised by the underlying call surfaces as an
``OperationError`` whose ``cause`` is the original exception.
"""

import asyncio
import enum
import functools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from objectstore_connector.core import (
    OperationError,
    get_logger,
    get_tracer,
    operation_context,
)

logger = get_logger(__name__)
tracer = get_tracer(__name__)


class CallShape(str, enum.Enum):
    """How the underlying client call completes."""

    BLOCKING = "blocking"
    STREAM = "stream"
    DIRECT = "direct"


@dataclass(frozen=True)
class OperationSpec:
    """Static description of one forwarded operation."""

    name: str
    shape: CallShape
    func: Callable[..., Any]


class OperationForwarder:
    """Forwards operations to the shared client handle."""

    def __init__(self, handle: Any, endpoint: str | None = None, debug: bool = False):
        self.handle = handle
        self.endpoint = endpoint
        self.debug = debug

    async def forward(self, spec: OperationSpec, *args: Any, **kwargs: Any) -> Any:
        """Invoke ``spec`` against the client handle and normalize the outcome.

        Args:
            spec: Operation to run
            *args: Positional arguments passed through unchanged
            **kwargs: Keyword arguments passed through unchanged

        Returns:
            Whatever the underlying call produced

        Raises:
            OperationError: If the underlying call raised
        """
        if self.debug:
            logger.info(
                "Forwarding operation",
                operation=spec.name,
                args=args,
                kwargs=kwargs,
            )

        with operation_context(operation=spec.name), tracer.start_as_current_span(
            f"objectstore.{spec.name}"
        ) as span:
            span.set_attribute("objectstore.operation", spec.name)
            span.set_attribute("objectstore.shape", spec.shape.value)
            try:
                if spec.shape is CallShape.BLOCKING:
                    return await asyncio.to_thread(
                        spec.func, self.handle, *args, **kwargs
                    )
                return spec.func(self.handle, *args, **kwargs)
            except Exception as e:
                if self.debug:
                    logger.error(
                        "Operation failed",
                        operation=spec.name,
                        endpoint=self.endpoint,
                        error=str(e),
                    )
                raise OperationError(spec.name, e) from e

    def bind(self, spec: OperationSpec) -> Callable[..., Awaitable[Any]]:
        """Return a coroutine function that forwards ``spec``."""

        @functools.wraps(spec.func)
        async def call(*args: Any, **kwargs: Any) -> Any:
            return await self.forward(spec, *args, **kwargs)

        call.__name__ = spec.name
        call.__qualname__ = spec.name
        # The bound call does not take the handle, so drop the wrapped signature.
        del call.__wrapped__
        return call
