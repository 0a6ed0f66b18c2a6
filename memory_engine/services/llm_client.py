import logging
import threading
from typing import Optional
from openai import OpenAI
from ..core.config import get_settings

logger = logging.getLogger("memory_engine.llm")

UNSET_API_KEY = "unset"

class LLMClient:
    """Process-wide handle to the OpenRouter (OpenAI-compatible) API.

    The client is built on first access and cached until ``close()``.
    """

    def __init__(self, base_url: Optional[str] = None, api_key: Optional[str] = None):
        self._base_url = base_url
        self._api_key = api_key
        self._client: Optional[OpenAI] = None
        self._lock = threading.Lock()

    def get_client(self) -> OpenAI:
        client = self._client
        if client is not None:
            return client
        with self._lock:
            if self._client is None:
                settings = get_settings()
                base_url = self._base_url or settings.openrouter_base_url
                api_key = settings.openrouter_api_key if self._api_key is None else self._api_key
                if not api_key:
                    logger.warning("OPENROUTER_API_KEY is empty; requests to the LLM API will be rejected")
                # the SDK refuses to build a client without a key
                self._client = OpenAI(base_url=base_url, api_key=api_key or UNSET_API_KEY)
                logger.info(f"LLM client initialised for {base_url}")
            return self._client

    @property
    def initialized(self) -> bool:
        return self._client is not None

    def close(self) -> None:
        with self._lock:
            client, self._client = self._client, None
        if client is not None:
            client.close()
            logger.info("LLM client closed")

llm_client = LLMClient()

def get_llm_client() -> OpenAI:
    return llm_client.get_client()
