"""Request Guard - Impede requisicoes duplicadas em andamento por acao."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from ..errors import DuplicateRequest

logger = logging.getLogger(__name__)


class InFlightGuard:
    """Registro das acoes com requisicao em andamento.

    Um segundo pedido para a mesma acao (ex: duplo clique em "gerar quiz")
    e rejeitado com ``DuplicateRequest`` em vez de gerar outra chamada ao
    modelo. A acao e liberada ao sair do bloco, com ou sem erro.

    Example:
        >>> guard = InFlightGuard()
        >>> async with guard.claim("generate-quiz"):
        ...     await client.generate(...)
    """

    def __init__(self):
        self._in_flight: set[str] = set()

    def is_busy(self, action: str) -> bool:
        return action in self._in_flight

    @asynccontextmanager
    async def claim(self, action: str) -> AsyncIterator[None]:
        # Checagem e registro sem await entre eles: atomicos no event loop
        if action in self._in_flight:
            logger.warning(f"Requisicao duplicada rejeitada: {action}")
            raise DuplicateRequest(action)
        self._in_flight.add(action)
        try:
            yield
        finally:
            self._in_flight.discard(action)
