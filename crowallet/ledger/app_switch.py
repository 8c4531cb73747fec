import asyncio
import logging

log = logging.getLogger(__name__)


class AppSwitchSignal:
    """
    Set by the UI once the user has opened the requested app on the device.

    The sequencer re-arms the signal before every wait, so one advance only ever
    releases one step.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def advance(self) -> None:
        self._event.set()

    def reset(self) -> None:
        self._event.clear()

    @property
    def is_set(self) -> bool:
        return self._event.is_set()

    async def wait(self, timeout: float) -> bool:
        """
        Returns True when advanced within timeout, False when the window elapsed
        """
        if timeout <= 0:
            return self._event.is_set()
        try:
            await asyncio.wait_for(self._event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            return False
        return True
