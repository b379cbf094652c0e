# src/tasks/send_raw_tx.py - v1
"""sendRawTx: broadcast a signed transaction and reply with its receipt.

The blockchain client is injected as a BaseTransactionSender, so this module
only owns the request validation and the 200/500 reply shape.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

from swarmcache.logging.context import set_request_context
from swarmcache.tasks.scheduler import ScheduledTask, TaskScheduler

logger = logging.getLogger(__name__)


class BaseTransactionSender(ABC):
    """Blockchain RPC client able to broadcast a signed transaction."""

    @abstractmethod
    async def send_signed_transaction(self, tx: str) -> Any:
        """Broadcast tx and return its receipt. Raises on rejection."""


def name() -> str:
    """Verb this function answers to."""
    return "sendRawTx"


def add_hex_prefix(value: str) -> str:
    if value.startswith(("0x", "0X")):
        return value
    return f"0x{value}"


def create_task(
    socket: Any,
    data: dict[str, Any],
    callback: Callable[[dict[str, Any]], Any],
    sender: BaseTransactionSender,
    scheduler: TaskScheduler,
):
    """Schedule the broadcast of data["tx"]; callback receives the reply dict."""

    async def send(task: ScheduledTask) -> Any:
        set_request_context(f"{name()}-{task.id}")
        logger.info("sendRawTx start")
        if not data.get("tx"):
            raise ValueError("No tx present. Can't send.")
        tx = add_hex_prefix(data["tx"])
        logger.debug("Sending signed transaction: %s", tx)
        receipt = await sender.send_signed_transaction(tx)
        logger.debug("Received receipt %s", receipt)
        return receipt

    def respond(result: Any, task: ScheduledTask) -> Any:
        if task.success:
            return callback({"response": 200, "data": result})
        return callback({"response": 500, "data": result, "error": task.error})

    return scheduler.add_task(send, respond, data={"socket": socket}, name=name())
