"""Fallback code generator backed by a hosted Workers AI chat model."""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from thisaicodes.domain.models.generation import GeneratedCode, GeneratedFile
from thisaicodes.domain.providers.interfaces import CodeGenerator, ProviderError

DEFAULT_BASE_URL = "https://api.cloudflare.com/client/v4"
DEFAULT_MODEL = "@cf/meta/llama-2-7b-chat-fp16"
DEFAULT_TIMEOUT = int(os.getenv("PROVIDER_TIMEOUT", "60"))

_FENCED_JSON = re.compile(r"```json\s*([\s\S]*?)\s*```")
_BARE_OBJECT = re.compile(r"\{[\s\S]*\}")

SYSTEM_PROMPT_TEMPLATE = """You are an expert full-stack developer. Generate production-ready code based on the user's requirements.

Type: {type}
Framework: {framework}

Requirements:
- Write clean, maintainable code
- Include proper error handling
- Add TypeScript types where applicable
- Include basic styling with Tailwind CSS
- Follow best practices and conventions
- Generate complete, working code that can be deployed immediately

Return the response as a JSON object with this structure:
{{
  "files": [
    {{
      "name": "filename.tsx",
      "content": "file content here",
      "type": "text/tsx"
    }}
  ],
  "description": "Brief description of what was generated",
  "instructions": "Setup and deployment instructions"
}}"""

PLACEHOLDER_TEMPLATE = """// Generated component based on: {prompt}
import React from 'react'

interface Props {{
  // Add your props here
}}

export default function GeneratedComponent(props: Props) {{
  return (
    <div className="p-4">
      <h1 className="text-2xl font-bold text-gray-900">
        Generated Component
      </h1>
      <p className="mt-2 text-gray-600">
        This component was generated based on your prompt: "{prompt}"
      </p>
      <div className="mt-4 p-4 bg-blue-50 rounded-lg">
        <p className="text-sm text-blue-600">
          Type: {type} | Framework: {framework}
        </p>
      </div>
    </div>
  )
}}"""

logger = logging.getLogger(__name__)


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Pull the first usable JSON object out of free-form model output.

    A fenced ```json block wins; otherwise the widest bare ``{...}`` span is tried.
    """
    candidates = []
    fenced = _FENCED_JSON.search(text or "")
    if fenced:
        candidates.append(fenced.group(1))
    bare = _BARE_OBJECT.search(text or "")
    if bare:
        candidates.append(bare.group(0))
    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None


def placeholder_code(prompt: str, type: str, framework: str) -> GeneratedCode:
    content = PLACEHOLDER_TEMPLATE.format(prompt=prompt, type=type, framework=framework)
    return GeneratedCode(
        files=[GeneratedFile(name="component.tsx", content=content, type="text/tsx")],
        description="Basic component generated",
        instructions="Install dependencies and run the development server",
    )


@dataclass
class WorkersAICodeGenerator(CodeGenerator):
    account_id: str
    api_token: str
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout: int = field(default=DEFAULT_TIMEOUT)
    max_tokens: int = 4000
    temperature: float = 0.7

    def generate(self, prompt: str, type: str, framework: str) -> GeneratedCode:
        text = self._run(prompt, type, framework)
        parsed = extract_json_object(text)
        if parsed is None:
            logger.info(
                "Workers AI response had no JSON payload; using placeholder component",
                extra={"model": self.model, "response_chars": len(text)},
            )
            return placeholder_code(prompt, type, framework)
        return GeneratedCode.from_dict(parsed)

    @property
    def run_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/accounts/{self.account_id}/ai/run/{self.model}"

    def _run(self, prompt: str, type: str, framework: str) -> str:
        body = {
            "messages": [
                {
                    "role": "system",
                    "content": SYSTEM_PROMPT_TEMPLATE.format(type=type, framework=framework),
                },
                {"role": "user", "content": prompt},
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        headers = {"Authorization": f"Bearer {self.api_token}"}
        try:
            response = requests.post(
                self.run_url, json=body, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise ProviderError("AI code generation failed") from exc
        if not response.ok:
            raise ProviderError(
                f"AI code generation failed: {response.status_code} {response.text[:200]}"
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError("AI code generation failed: non-JSON envelope") from exc
        result = data.get("result") if isinstance(data, dict) else None
        if not isinstance(result, dict):
            raise ProviderError("AI code generation failed: missing result")
        return str(result.get("response") or "")


def from_env() -> WorkersAICodeGenerator:
    from django.conf import settings

    return WorkersAICodeGenerator(
        account_id=getattr(settings, "WORKERS_AI_ACCOUNT_ID", ""),
        api_token=getattr(settings, "WORKERS_AI_API_TOKEN", ""),
        model=getattr(settings, "WORKERS_AI_MODEL", DEFAULT_MODEL),
        base_url=getattr(settings, "WORKERS_AI_BASE_URL", DEFAULT_BASE_URL),
        timeout=getattr(settings, "PROVIDER_TIMEOUT", DEFAULT_TIMEOUT),
    )
