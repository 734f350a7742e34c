import asyncio

from ._logging import logger


class ActivityGate:
    """
    Active/inactive switch injected into a Paginator.

    While the gate is paused the paginator defers reacting to page changes.
    On resume the most recent page is processed. A fetch that is already
    running is left alone.
    """

    def __init__(self, active: bool = True) -> None:
        self._active = asyncio.Event()
        if active:
            self._active.set()

    @property
    def is_active(self) -> bool:
        return self._active.is_set()

    def pause(self) -> None:
        if self._active.is_set():
            logger.debug("Activity gate paused", extra={"operation": "pause"})
        self._active.clear()

    def resume(self) -> None:
        if not self._active.is_set():
            logger.debug("Activity gate resumed", extra={"operation": "resume"})
        self._active.set()

    async def wait_active(self) -> None:
        """Returns immediately when active, otherwise waits for resume()."""
        await self._active.wait()
