"""Chrome DevTools Protocol (CDP) client."""

import asyncio
import json
from collections.abc import Callable
from typing import Any

import httpx
import websockets
from websockets import ClientConnection

from htmlpdf.utils.logging import get_logger

logger = get_logger(__name__)

EventListener = Callable[[dict[str, Any]], None]


class CDPError(Exception):
    """CDP protocol error."""

    pass


class CDPClient:
    """Client for Chrome DevTools Protocol communication with one page target."""

    def __init__(self, devtools_port: int, command_timeout: float = 30.0) -> None:
        self.devtools_port = devtools_port
        self.command_timeout = command_timeout
        self._ws: ClientConnection | None = None
        self._message_id = 0
        self._pending_responses: dict[int, asyncio.Future[Any]] = {}
        self._listeners: dict[str, list[EventListener]] = {}
        self._receive_task: asyncio.Task[None] | None = None

    @property
    def base_url(self) -> str:
        """Base URL for DevTools HTTP endpoints."""
        return f"http://127.0.0.1:{self.devtools_port}"

    async def connect(self, timeout: float = 10.0) -> None:
        """
        Connect to the first Chrome DevTools page target.

        Args:
            timeout: Connection timeout in seconds
        """
        ws_url = None

        async with httpx.AsyncClient() as client:
            for _attempt in range(max(int(timeout / 0.25), 1)):
                try:
                    response = await client.get(f"{self.base_url}/json/list")
                    if response.status_code == 200:
                        for target in response.json():
                            if target.get("type") == "page":
                                ws_url = target.get("webSocketDebuggerUrl")
                                if ws_url:
                                    break
                        if ws_url:
                            break
                        logger.debug("Browser connected but no page target yet, waiting...")

                except httpx.TransportError:
                    pass
                await asyncio.sleep(0.25)
            else:
                raise CDPError(f"Failed to connect to DevTools page after {timeout}s")

        logger.debug("Connecting to page WebSocket", url=ws_url)

        self._ws = await websockets.connect(ws_url, max_size=256 * 1024 * 1024)
        self._receive_task = asyncio.create_task(self._receive_messages())

        logger.info("CDP connected", port=self.devtools_port)

    async def disconnect(self) -> None:
        """Disconnect from Chrome DevTools."""
        if self._receive_task:
            self._receive_task.cancel()
            try:
                await self._receive_task
            except asyncio.CancelledError:
                pass
            self._receive_task = None

        if self._ws:
            await self._ws.close()
            self._ws = None

        self._listeners.clear()
        logger.debug("CDP disconnected")

    def on(self, method: str, listener: EventListener) -> None:
        """Register a callback for a CDP event such as ``Page.lifecycleEvent``."""
        self._listeners.setdefault(method, []).append(listener)

    def off(self, method: str, listener: EventListener) -> None:
        """Remove a previously registered event callback."""
        listeners = self._listeners.get(method, [])
        if listener in listeners:
            listeners.remove(listener)

    def _handle_message(self, data: dict[str, Any]) -> None:
        """Resolve a command response or dispatch an event."""
        if "id" in data:
            future = self._pending_responses.pop(data["id"], None)
            if future is None or future.done():
                return
            if "error" in data:
                error_msg = data["error"].get("message", "Unknown error")
                future.set_exception(CDPError(error_msg))
            else:
                future.set_result(data.get("result", {}))

        elif "method" in data:
            params = data.get("params", {})
            for listener in list(self._listeners.get(data["method"], [])):
                listener(params)

    async def _receive_messages(self) -> None:
        """Background task to receive WebSocket messages."""
        if not self._ws:
            return

        try:
            async for message in self._ws:
                self._handle_message(json.loads(message))

        except websockets.ConnectionClosed:
            logger.debug("WebSocket connection closed")
        except Exception as e:
            logger.error("Error receiving CDP messages", error=str(e))
        finally:
            self._fail_pending(CDPError("DevTools connection closed"))

    def _fail_pending(self, error: CDPError) -> None:
        for future in self._pending_responses.values():
            if not future.done():
                future.set_exception(error)
        self._pending_responses.clear()

    async def send(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
        bounded: bool = True,
    ) -> Any:
        """
        Send a CDP command and wait for response.

        Args:
            method: CDP method name (e.g., "Page.navigate")
            params: Method parameters
            timeout: Seconds to wait for the response, defaults to command_timeout
            bounded: When False, wait without a command timeout and leave the
                bound to the caller

        Returns:
            Command result
        """
        if not self._ws:
            raise CDPError("Not connected to DevTools")

        self._message_id += 1
        msg_id = self._message_id

        message = {
            "id": msg_id,
            "method": method,
            "params": params or {},
        }

        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._pending_responses[msg_id] = future

        await self._ws.send(json.dumps(message))
        logger.debug("CDP command sent", method=method, id=msg_id)

        try:
            if not bounded:
                return await future
            return await asyncio.wait_for(future, timeout=timeout or self.command_timeout)
        except TimeoutError as e:
            raise CDPError(f"Timeout waiting for response to {method}") from e
        finally:
            self._pending_responses.pop(msg_id, None)
