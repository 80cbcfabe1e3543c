# coverie/ai/llm_client.py
from typing import Dict, List, Optional, Any

import httpx

from coverie.core.config import Settings, get_settings


class LLMConfigError(RuntimeError):
    pass


class LLMServiceError(RuntimeError):
    pass


class LLMClient:
    """Async client for an OpenAI compatible chat completions endpoint (Groq by default)."""

    provider = "Groq"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = settings or get_settings()
        if not settings.groq_api_key:
            raise LLMConfigError("GROQ_API_KEY missing in env")
        self.api_key = settings.groq_api_key
        self.model = settings.groq_model
        self.url = settings.llm_base_url.rstrip("/") + "/chat/completions"
        self.timeout = timeout if timeout is not None else settings.llm_timeout_seconds
        self.transport = transport

    async def complete(
        self,
        system_prompt: str,
        messages: List[Dict[str, str]],
        json_mode: bool,
        temperature: float = 0.2,
        model: Optional[str] = None,
        max_tokens: Optional[int] = 800,
    ) -> str:
        chat_messages = [{"role": "system", "content": system_prompt}]
        for m in messages:
            role = m.get("role", "user")
            content = m.get("content", "")
            if role not in ("user", "assistant", "system"):
                role = "user"
            chat_messages.append({"role": role, "content": str(content)})

        payload: Dict[str, Any] = {
            "model": model or self.model,
            "messages": chat_messages,
            "temperature": temperature,
        }
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            r = await client.post(self.url, headers=headers, json=payload)
            if r.status_code >= 400:
                raise LLMServiceError(f"{self.provider} {r.status_code}: {r.text}")
            data = r.json()

        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise LLMServiceError(f"{self.provider} returned an unexpected response shape")
