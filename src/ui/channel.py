"""ModalResultChannel backed by Textual modal screens."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from controller.modal import ModalOutcome, ModalRequest
from ui.modals import ConfirmModal, build_entry_modal

if TYPE_CHECKING:
    from textual.app import App
    from textual.screen import Screen

log = logging.getLogger(__name__)


class ScreenModalChannel:
    """Push a modal screen and resolve once with its dismiss result.

    Callers must run in a worker: awaiting the result from a message
    handler would block the loop that delivers the dismiss callback.
    """

    def __init__(self, app: App) -> None:
        self.app = app

    async def _push(self, screen: Screen) -> Any:
        future: asyncio.Future = asyncio.get_running_loop().create_future()

        def resolve(result: Any) -> None:
            if not future.done():
                future.set_result(result)

        self.app.push_screen(screen, resolve)
        return await future

    async def open(self, request: ModalRequest) -> ModalOutcome:
        log.debug(f"Opening {request.kind} dialog (new={request.is_new})")
        result = await self._push(build_entry_modal(request))
        if not isinstance(result, ModalOutcome):
            return ModalOutcome.cancelled()
        return result

    async def confirm(self, message: str) -> bool:
        return bool(await self._push(ConfirmModal(message)))
