"""Retry Policy - Timeout e retentativas explicitas ao redor do Generation Client."""

from __future__ import annotations

import asyncio
import logging

from ..errors import ServiceUnavailable
from ..models.enums import PayloadShape
from ..models.schemas import AnalysisReport, QuestionSet
from .client import GenerationClient, GenerationContext

logger = logging.getLogger(__name__)


class RetryPolicy:
    """Politica de resiliencia opcional para o Generation Client.

    Repete apenas ``ServiceUnavailable`` (rede, timeout, 5xx). Saida
    malformada e erro de configuracao sao terminais: repetir so custaria
    mais chamadas ao modelo.

    Attributes:
        max_retries: Retentativas apos a primeira tentativa (0 = chamada unica)
        timeout: Limite (s) de cada tentativa, None = sem limite
        backoff: Espera (s) antes da primeira retentativa, dobra a cada nova
    """

    def __init__(
        self,
        client: GenerationClient,
        max_retries: int = 0,
        timeout: float | None = None,
        backoff: float = 1.0,
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.client = client
        self.max_retries = max_retries
        self.timeout = timeout
        self.backoff = backoff

    @classmethod
    def from_config(cls, client: GenerationClient) -> RetryPolicy:
        return cls(
            client,
            max_retries=client.config.max_retries,
            timeout=client.config.request_timeout,
        )

    async def generate(
        self, kind: PayloadShape, context: GenerationContext
    ) -> QuestionSet | AnalysisReport:
        """Mesmo contrato de ``GenerationClient.generate``."""
        attempt = 0
        while True:
            try:
                return await self._attempt(kind, context)
            except ServiceUnavailable as exc:
                if attempt >= self.max_retries:
                    raise
                delay = self.backoff * (2**attempt)
                attempt += 1
                logger.warning(
                    f"Geracao falhou ({exc}); tentativa {attempt}/{self.max_retries} em {delay:.1f}s"
                )
                await asyncio.sleep(delay)

    async def _attempt(
        self, kind: PayloadShape, context: GenerationContext
    ) -> QuestionSet | AnalysisReport:
        if self.timeout is None:
            return await self.client.generate(kind, context)
        try:
            return await asyncio.wait_for(self.client.generate(kind, context), self.timeout)
        except asyncio.TimeoutError as exc:
            raise ServiceUnavailable(
                f"Model service did not answer within {self.timeout:.0f}s"
            ) from exc
