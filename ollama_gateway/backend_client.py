import logging

import httpx
from openai import AsyncOpenAI

logger = logging.getLogger(__name__)


class BackendClient:
    """Owns the pooled HTTP transport used by the OpenAI SDK.

    Backend calls are neither retried nor timed out: a failure surfaces once,
    and a hung call only hangs its own request.
    """

    def __init__(self) -> None:
        self._http: httpx.AsyncClient | None = None
        self._openai: AsyncOpenAI | None = None

    async def start(self) -> None:
        self._http = httpx.AsyncClient(
            follow_redirects=True,
            timeout=httpx.Timeout(None),
            limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
        )
        logger.debug("Backend HTTP pool started")

    async def stop(self) -> None:
        if self._openai is not None:
            await self._openai.close()
            self._openai = None
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    def _require_http(self) -> httpx.AsyncClient:
        """Return initialized transport or raise a clear runtime error."""
        if self._http is None:
            raise RuntimeError("Backend client is not started")
        return self._http

    def openai(self) -> AsyncOpenAI:
        # Built on first use so the gateway starts without OpenAI credentials.
        if self._openai is None:
            self._openai = AsyncOpenAI(
                http_client=self._require_http(),
                max_retries=0,
                timeout=None,
            )
        return self._openai


# Singleton
client = BackendClient()
