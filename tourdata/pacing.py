"""Pausas entre requests hacia la Tour API."""

import asyncio
from typing import Awaitable, Callable

from api.config import Settings


class RequestPacer:
    """Política de espera entre páginas y entre sub-regiones."""

    def __init__(
        self,
        page_delay: float = 0.5,
        batch_delay: float = 2.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ):
        """
        Args:
            page_delay: Segundos entre páginas de una misma consulta
            batch_delay: Segundos entre sub-regiones de un batch
            sleep: Función de espera (inyectable en tests)
        """
        self.page_delay = page_delay
        self.batch_delay = batch_delay
        self._sleep = sleep

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ) -> "RequestPacer":
        return cls(
            page_delay=settings.page_delay_seconds,
            batch_delay=settings.batch_delay_seconds,
            sleep=sleep
        )

    async def wait_between_pages(self) -> None:
        if self.page_delay > 0:
            await self._sleep(self.page_delay)

    async def wait_between_regions(self) -> None:
        if self.batch_delay > 0:
            await self._sleep(self.batch_delay)
