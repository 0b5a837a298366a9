"""Primary code generator backed by the hosted v0 generation API."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict

import requests
from requests import Response

from thisaicodes.domain.models.generation import (
    GeneratedCode,
    GeneratedFile,
    content_type_for,
)
from thisaicodes.domain.providers.interfaces import CodeGenerator, ProviderError

DEFAULT_ENDPOINT = "https://api.v0.dev/generate"
DEFAULT_TIMEOUT = int(os.getenv("PROVIDER_TIMEOUT", "60"))
USER_AGENT = "ThisAICodes/1.0"


@dataclass
class V0CodeGenerator(CodeGenerator):
    """Calls v0 once; any transport error or non-2xx answer is a hard failure."""

    api_key: str
    endpoint: str = DEFAULT_ENDPOINT
    timeout: int = field(default=DEFAULT_TIMEOUT)

    def generate(self, prompt: str, type: str, framework: str) -> GeneratedCode:
        if not self.api_key:
            raise ProviderError("v0 API key not configured")
        body = {
            "prompt": prompt,
            "type": type,
            "framework": framework,
            "options": {
                "typescript": True,
                "styling": "tailwind",
                "responsive": True,
            },
        }
        response = self._post(body)
        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError("v0 API returned a non-JSON response") from exc
        if not isinstance(data, dict):
            raise ProviderError("v0 API returned an unexpected payload")
        return self._normalize(data)

    def _post(self, body: Dict[str, Any]) -> Response:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
            "User-Agent": USER_AGENT,
        }
        try:
            response = requests.post(
                self.endpoint, json=body, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise ProviderError(f"Failed to reach v0 API: {exc}") from exc
        if not response.ok:
            raise ProviderError(
                f"v0 API error: {response.status_code} {response.text[:200]}"
            )
        return response

    @staticmethod
    def _normalize(data: Dict[str, Any]) -> GeneratedCode:
        files = [
            GeneratedFile(
                name=str(item["name"]),
                content=str(item.get("content") or ""),
                type=content_type_for(str(item["name"])),
            )
            for item in data.get("files") or []
            if isinstance(item, dict) and item.get("name")
        ]
        return GeneratedCode(
            files=files,
            description=data.get("description") or "Generated with v0",
            instructions=data.get("instructions") or "Standard React component setup",
        )


def from_env() -> V0CodeGenerator:
    from django.conf import settings

    return V0CodeGenerator(
        api_key=getattr(settings, "V0_API_KEY", ""),
        endpoint=getattr(settings, "V0_API_URL", DEFAULT_ENDPOINT),
        timeout=getattr(settings, "PROVIDER_TIMEOUT", DEFAULT_TIMEOUT),
    )
