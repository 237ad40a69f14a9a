# smartadd/ai/clients/base.py
# Template-method base client for generation backends w/ request logging & error mapping

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any

from ..types import GenerationRequest
from ..utils import APICallContext, parse_json
from ...core.debug import debug_payload
from ...core.exceptions import GenerationServiceError, SmartAddError
from ...core.verbose import vlog_ai_request, vlog_ai_response


# * Abstract base class for generation backends using template-method pattern
# Orchestrates: preflight -> make_call -> parse JSON -> log
# Returns the decoded payload; every failure surfaces as a SmartAddError subclass
class BaseGenerationClient(ABC):

    # * Subclasses must set this to their backend ID
    backend_name: str = ""

    # * Template method - run one generation request
    async def generate(self, request: GenerationRequest) -> Any:
        self.preflight()
        target = self.resolve_target(request)

        vlog_ai_request(
            backend=self.backend_name,
            section_type=request.section_type,
            prompt_length=len(request.prompt),
            target=target,
        )

        start_time = time.time()
        try:
            ctx = await self.make_call(request, target)
            payload = self._process_response(ctx)
        except SmartAddError as e:
            vlog_ai_response(
                backend=self.backend_name,
                success=False,
                duration_ms=(time.time() - start_time) * 1000,
                error=str(e),
            )
            raise
        except Exception as e:
            vlog_ai_response(
                backend=self.backend_name, success=False, error=f"Unexpected: {e}"
            )
            raise GenerationServiceError(
                f"Unexpected error in {self.backend_name} backend: {e}"
            ) from e

        operation = payload.get("operation") if isinstance(payload, dict) else None
        vlog_ai_response(
            backend=self.backend_name,
            success=True,
            duration_ms=(time.time() - start_time) * 1000,
            operation=operation if isinstance(operation, str) else None,
        )
        debug_payload("AI response", payload)
        return payload

    # pre-call setup hook (override to validate credentials)
    def preflight(self) -> None:
        pass

    # endpoint path or model name used for this request
    def resolve_target(self, request: GenerationRequest) -> str:
        return request.target_path or ""

    # * Make backend-specific call (subclasses must implement)
    @abstractmethod
    async def make_call(self, request: GenerationRequest, target: str) -> APICallContext:
        pass

    async def aclose(self) -> None:
        pass

    # decode the raw text; unparseable output is a service failure
    def _process_response(self, ctx: APICallContext) -> Any:
        data, _json_text, error = parse_json(ctx.raw_text)
        if data is None:
            raise GenerationServiceError(
                f"{ctx.backend_name} backend returned invalid JSON ({error})"
            )
        return data
