"""Completion-backed documentation: prompt building and the service client."""
import asyncio
import concurrent.futures
import threading
from typing import Any, Dict, Optional

import httpx
import sentry_sdk

from docgen_mcp.constants import CompletionDefaults, EnvVars
from docgen_mcp.core.exceptions import (
    CompletionCancelledError,
    CompletionError,
    CompletionTimeoutError,
    MissingCredentialError,
)
from docgen_mcp.core.logging import get_logger
from docgen_mcp.models.config import DocGenConfig
from docgen_mcp.models.documentation import CompletionChoice, CompletionRequest, CompletionResponse
from docgen_mcp.models.syntax import LanguageKind

_DOC_DIALECTS = {
    LanguageKind.JAVA: "JavaDoc",
    LanguageKind.KOTLIN: "KDoc",
    LanguageKind.OTHER: "documentation",
}


def documentation_dialect(language_name: str) -> str:
    """Map a language name to the documentation dialect named in the prompt."""
    return _DOC_DIALECTS[LanguageKind.from_tag(language_name)]


def build_completion_request(
    function_text: str,
    language_name: str,
    model: str = CompletionDefaults.MODEL,
) -> CompletionRequest:
    """Build the completion request for a function's source text.

    Args:
        function_text: Literal source of the function
        language_name: Language tag or display name ("java", "Kotlin", ...)
        model: Completion model identifier

    Returns:
        Request with a prompt embedding the source in a fenced block
    """
    kind = LanguageKind.from_tag(language_name)
    display = kind.display_name if kind is not LanguageKind.OTHER else language_name
    prompt = (
        f"Return only the {documentation_dialect(language_name)} for the function below "
        f"that has been written in {display}\n"
        f"```{display}\n"
        f"{function_text}\n"
        "```"
    )
    return CompletionRequest(prompt=prompt, model=model)


def _parse_response(data: Any) -> CompletionResponse:
    if not isinstance(data, dict) or not isinstance(data.get("choices"), list):
        raise CompletionError("Malformed completion response: missing 'choices' array")
    choices = []
    for choice in data["choices"]:
        if not isinstance(choice, dict) or not isinstance(choice.get("text"), str):
            raise CompletionError("Malformed completion response: choice without 'text'")
        choices.append(CompletionChoice(text=choice["text"]))
    return CompletionResponse(choices=choices)


class CompletionClient:
    """Client for an OpenAI-compatible text completion endpoint.

    The HTTP call is asynchronous; ``complete`` wraps it in a bounded,
    cancellable synchronous wait for the pipeline.
    """

    def __init__(
        self,
        credential: str,
        model: str = CompletionDefaults.MODEL,
        base_url: str = CompletionDefaults.BASE_URL,
        timeout_seconds: float = CompletionDefaults.TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not credential or not credential.strip():
            raise MissingCredentialError(EnvVars.API_KEY)
        self._credential = credential.strip()
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self.logger = get_logger("completion_client")

    @classmethod
    def from_config(
        cls, config: DocGenConfig, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "CompletionClient":
        return cls(
            credential=config.credential,
            model=config.model,
            base_url=config.base_url,
            timeout_seconds=config.timeout_seconds,
            transport=transport,
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._credential}",
            "Content-Type": "application/json",
        }

    async def acomplete(self, request: CompletionRequest) -> CompletionResponse:
        """Send ``request`` and parse the response.

        Raises:
            CompletionTimeoutError: If the transport times out
            CompletionError: On HTTP errors or malformed responses
        """
        url = f"{self.base_url}/completions"
        self.logger.info("completion_request_started", model=request.model, prompt_chars=len(request.prompt))

        with sentry_sdk.start_span(op="http.client", name="Text completion") as span:
            span.set_data("url", url)
            span.set_data("model", request.model)
            try:
                async with httpx.AsyncClient(
                    timeout=self.timeout_seconds,
                    transport=self._transport,
                    headers=self._headers(),
                ) as client:
                    response = await client.post(url, json=request.to_payload())
                    response.raise_for_status()
                    data = response.json()
            except httpx.TimeoutException as e:
                raise CompletionTimeoutError(self.timeout_seconds) from e
            except httpx.HTTPStatusError as e:
                raise CompletionError(
                    f"Completion service returned HTTP {e.response.status_code}"
                ) from e
            except httpx.HTTPError as e:
                raise CompletionError(f"Completion request failed: {e}") from e
            except ValueError as e:
                raise CompletionError(f"Completion response is not valid JSON: {e}") from e
            span.set_data("status_code", response.status_code)

        parsed = _parse_response(data)
        self.logger.info("completion_request_completed", choices=len(parsed.choices))
        return parsed

    async def _bounded(
        self,
        request: CompletionRequest,
        timeout: float,
        cancel_event: Optional[threading.Event],
    ) -> CompletionResponse:
        if cancel_event is not None and cancel_event.is_set():
            raise CompletionCancelledError("Completion request cancelled before it was sent")

        task = asyncio.ensure_future(self.acomplete(request))
        waiters = {task}
        watcher: Optional["asyncio.Future[None]"] = None
        if cancel_event is not None:
            watcher = asyncio.ensure_future(_wait_for_event(cancel_event))
            waiters.add(watcher)

        try:
            done, _ = await asyncio.wait(waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
            if task in done:
                return task.result()
            if watcher is not None and watcher in done:
                raise CompletionCancelledError("Completion request cancelled")
            raise CompletionTimeoutError(timeout)
        finally:
            for pending in waiters:
                if not pending.done():
                    pending.cancel()
            await asyncio.gather(*waiters, return_exceptions=True)

    def complete(
        self,
        request: CompletionRequest,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> CompletionResponse:
        """Send ``request`` and block until it answers, times out or is cancelled.

        Args:
            request: Completion request
            timeout: Upper bound in seconds (client timeout by default)
            cancel_event: Set from another thread to abandon the call

        Raises:
            CompletionTimeoutError: If no answer arrives in time
            CompletionCancelledError: If ``cancel_event`` is set first
            CompletionError: On network or protocol failure
        """
        bound = timeout if timeout is not None else self.timeout_seconds
        coro = self._bounded(request, bound, cancel_event)

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(coro)

        # Already inside an event loop (e.g. an MCP tool call): run on a worker thread
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
            return executor.submit(asyncio.run, coro).result()


async def _wait_for_event(event: threading.Event) -> None:
    while not event.is_set():
        await asyncio.sleep(CompletionDefaults.CANCEL_POLL_SECONDS)
