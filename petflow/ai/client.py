import asyncio
import logging
import random
from typing import Any, Dict, List, Optional

import httpx

from petflow.core.config import settings
from petflow.core.exceptions import (
    RemoteJobFailedError,
    RemoteServiceError,
    RemoteTimeoutError,
)

logger = logging.getLogger(__name__)

CHAT_ATTEMPTS = 3
POLL_BACKOFF = 1.5
FAILED_RUN_STATUSES = {"failed", "cancelled", "cancelling", "expired", "incomplete", "requires_action"}


def _error_message(response: httpx.Response) -> str:
    try:
        error = response.json().get("error", {})
        if isinstance(error, dict):
            return error.get("message") or str(error)
        return str(error)
    except Exception:
        return response.text[:200]


class OpenAIClient:
    """Async client for the OpenAI chat and assistants endpoints.

    ``chat`` is a single completion call with retries on 429/5xx.
    ``run_assistant`` drives the assistants job flow (thread, message, run,
    poll, fetch) under an explicit deadline. Cancelling the awaiting task
    stops the polling and closes the HTTP client.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        assistant_id: Optional[str] = None,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
        poll_max_interval: Optional[float] = None,
        poll_max_attempts: Optional[int] = None,
        run_deadline: Optional[float] = None,
        retry_backoff: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        self.base_url = (base_url or settings.OPENAI_BASE_URL).rstrip("/")
        self.model = model or settings.OPENAI_MODEL
        self.assistant_id = assistant_id if assistant_id is not None else settings.OPENAI_ASSISTANT_ID
        self.timeout = timeout if timeout is not None else settings.AI_HTTP_TIMEOUT
        self.poll_interval = poll_interval if poll_interval is not None else settings.AI_POLL_INTERVAL
        self.poll_max_interval = (
            poll_max_interval if poll_max_interval is not None else settings.AI_POLL_MAX_INTERVAL
        )
        self.poll_max_attempts = (
            poll_max_attempts if poll_max_attempts is not None else settings.AI_POLL_MAX_ATTEMPTS
        )
        self.run_deadline = run_deadline if run_deadline is not None else settings.AI_RUN_DEADLINE
        self.retry_backoff = retry_backoff
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @property
    def assistant_configured(self) -> bool:
        return self.configured and bool(self.assistant_id)

    def _client(self, assistants: bool = False) -> httpx.AsyncClient:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if assistants:
            headers["OpenAI-Beta"] = "assistants=v2"

        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=self.timeout,
            transport=self.transport,
        )

    async def _request(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        try:
            response = await client.request(method, path, json=json, params=params)
        except httpx.HTTPError as exc:
            raise RemoteServiceError(f"AI backend unreachable: {exc}") from exc

        if response.status_code >= 400:
            raise RemoteServiceError(
                f"AI backend error {response.status_code}: {_error_message(response)}",
                upstream_status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise RemoteServiceError("AI backend returned a non-JSON body") from exc

        if not isinstance(data, dict):
            raise RemoteServiceError("AI backend returned an unexpected payload")
        return data

    # =====================================================
    # CHAT COMPLETIONS
    # =====================================================

    async def chat(
        self,
        messages: List[Dict[str, str]],
        system: Optional[str] = None,
        response_format: Optional[Dict[str, Any]] = None,
        max_tokens: int = 512,
        temperature: float = 0.4,
    ) -> str:
        if not self.configured:
            raise RemoteServiceError("AI backend is not configured")

        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": ([{"role": "system", "content": system}] if system else []) + messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if response_format:
            payload["response_format"] = response_format

        backoff_seconds = self.retry_backoff
        async with self._client() as client:
            for attempt in range(CHAT_ATTEMPTS):
                try:
                    data = await self._request(client, "POST", "/chat/completions", json=payload)
                    break
                except RemoteServiceError as exc:
                    if not exc.retryable or attempt == CHAT_ATTEMPTS - 1:
                        raise
                    logger.warning("Chat completion attempt %s failed: %s", attempt + 1, exc.detail)
                    await asyncio.sleep(backoff_seconds * random.uniform(1, 1.5))
                    backoff_seconds *= 2

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise RemoteServiceError("Unexpected chat completion payload") from exc

        if not isinstance(content, str):
            raise RemoteServiceError("Chat completion returned no text")
        return content.strip()

    # =====================================================
    # ASSISTANTS (long-running job)
    # =====================================================

    async def run_assistant(self, prompt: str) -> str:
        if not self.assistant_configured:
            raise RemoteServiceError("AI assistant is not configured")

        async with self._client(assistants=True) as client:
            thread = await self._request(client, "POST", "/threads", json={})
            thread_id = self._require_id(thread, "thread")

            await self._request(
                client,
                "POST",
                f"/threads/{thread_id}/messages",
                json={"role": "user", "content": prompt},
            )

            run = await self._request(
                client,
                "POST",
                f"/threads/{thread_id}/runs",
                json={"assistant_id": self.assistant_id},
            )
            run_id = self._require_id(run, "run")
            logger.info("Assistant run %s started on thread %s", run_id, thread_id)

            try:
                await self._wait_for_run(client, thread_id, run_id)
            except RemoteTimeoutError:
                await self._cancel_run(client, thread_id, run_id)
                raise

            messages = await self._request(
                client,
                "GET",
                f"/threads/{thread_id}/messages",
                params={"order": "desc", "limit": 10},
            )

        return self._latest_assistant_text(messages)

    async def _wait_for_run(self, client: httpx.AsyncClient, thread_id: str, run_id: str) -> Dict[str, Any]:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.run_deadline
        interval = self.poll_interval

        for attempt in range(1, self.poll_max_attempts + 1):
            run = await self._request(client, "GET", f"/threads/{thread_id}/runs/{run_id}")
            status = run.get("status")

            if status == "completed":
                logger.info("Assistant run %s completed after %s polls", run_id, attempt)
                return run

            if status in FAILED_RUN_STATUSES:
                last_error = run.get("last_error") or {}
                reason = last_error.get("message") if isinstance(last_error, dict) else None
                raise RemoteJobFailedError(
                    f"Assistant run {status}" + (f": {reason}" if reason else "")
                )

            remaining = deadline - loop.time()
            if remaining <= 0 or attempt == self.poll_max_attempts:
                break

            await asyncio.sleep(min(interval, remaining))
            interval = min(interval * POLL_BACKOFF, self.poll_max_interval)

        raise RemoteTimeoutError(
            f"Assistant run {run_id} did not finish within {self.run_deadline}s "
            f"({self.poll_max_attempts} polls max)"
        )

    async def _cancel_run(self, client: httpx.AsyncClient, thread_id: str, run_id: str) -> None:
        try:
            await self._request(client, "POST", f"/threads/{thread_id}/runs/{run_id}/cancel")
            logger.info("Cancelled timed out assistant run %s", run_id)
        except RemoteServiceError as exc:
            logger.warning("Could not cancel assistant run %s: %s", run_id, exc.detail)

    @staticmethod
    def _require_id(payload: Dict[str, Any], kind: str) -> str:
        value = payload.get("id")
        if not isinstance(value, str) or not value:
            raise RemoteServiceError(f"AI backend did not return a {kind} id")
        return value

    @staticmethod
    def _latest_assistant_text(payload: Dict[str, Any]) -> str:
        for message in payload.get("data") or []:
            if not isinstance(message, dict) or message.get("role") != "assistant":
                continue

            chunks = []
            for part in message.get("content") or []:
                if isinstance(part, dict) and part.get("type") == "text":
                    text = (part.get("text") or {}).get("value")
                    if isinstance(text, str) and text.strip():
                        chunks.append(text.strip())

            if chunks:
                return "\n".join(chunks)

        raise RemoteServiceError("No response from assistant")
