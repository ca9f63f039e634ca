"""Form schema generation from natural-language prompts."""

import json
import logging
import re
from pathlib import Path

import requests
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .config import AIConfig
from .consts import AI_MAX_RETRIES, AI_RETRY_DELAY, TEMPLATE_SCHEMA_PROMPT
from .enums import FieldType
from .errors import GenerationException
from .schema import FieldSchema
from .triggers import OPERATORS
from .utils import retry, sanitize

logger = logging.getLogger(__name__)

_code_fence = re.compile(r"```(?:json)?\n?")


class CompletionClient:
    """Base for generators backed by an OpenAI-compatible chat completions API."""

    def __init__(self, config: AIConfig):
        self.config = config
        template_dir = Path(__file__).parent / "templates"
        self.jinja_env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def render(self, template_name: str, **context) -> str:
        return self.jinja_env.get_template(template_name).render(**context)

    @retry(
        times=AI_MAX_RETRIES,
        initial_delay=AI_RETRY_DELAY,
        exceptions=(requests.ConnectionError, requests.Timeout),
    )
    def _request_completion(self, system_prompt: str, user_message: str) -> str:
        response = requests.post(
            f"{self.config.base_url}/chat/completions",
            headers={"Authorization": f"Bearer {self.config.api_key}"},
            json={
                "model": self.config.model,
                "messages": [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
                "temperature": self.config.temperature,
                "max_tokens": self.config.max_tokens,
            },
            timeout=self.config.timeout,
        )
        response.raise_for_status()

        try:
            return response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise GenerationException(f"Unexpected AI response format: {e}") from e


class SchemaGenerator(CompletionClient):
    """Turns a form description into a FieldSchema.

    Uses the chat completions endpoint when an API key is configured and a
    deterministic mock otherwise.
    """

    def generate(self, prompt: str, title: str | None = None) -> FieldSchema:
        """Generate a schema for ``prompt``.

        Raises:
            GenerationException: If the AI request fails or returns an unusable schema
        """
        if not self.enabled:
            logger.warning("No AI API key configured - using mock schema generation")
            return generate_mock_schema(prompt, title)

        logger.info(f"Generating schema with {self.config.model} (key {sanitize(self.config.api_key)})")
        try:
            content = self._request_completion(
                self.build_system_prompt(title), f"Create a form schema for: {prompt}"
            )
        except requests.RequestException as e:
            logger.error(f"AI generation error: {e}")
            raise GenerationException(f"Failed to generate schema: {e}") from e

        schema = parse_schema_response(content)
        if title:
            schema.title = title
        logger.info(f"Generated schema '{schema.title}' with {len(schema.fields)} fields")
        return schema

    def build_system_prompt(self, title: str | None = None) -> str:
        return self.render(
            TEMPLATE_SCHEMA_PROMPT,
            field_types=[t.value for t in FieldType],
            operators=list(OPERATORS),
            title=title,
        )


def strip_code_fence(content: str | None) -> str:
    return _code_fence.sub("", content or "").strip()


def parse_schema_response(content: str) -> FieldSchema:
    """Parse the model's reply into a FieldSchema.

    Markdown code fences around the JSON are tolerated.
    """
    text = strip_code_fence(content)
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise GenerationException(f"AI response is not valid JSON: {e}") from e

    if not isinstance(raw, dict) or not raw.get("title") or not isinstance(raw.get("fields"), list):
        raise GenerationException("Invalid schema structure returned by AI")

    schema = FieldSchema.coerce(raw)
    if schema is None:
        raise GenerationException("Invalid field definitions returned by AI")

    duplicates = schema.duplicate_names()
    if duplicates:
        raise GenerationException(f"Duplicate field names returned by AI: {', '.join(duplicates)}")
    return schema


def generate_mock_schema(prompt: str, title: str | None = None) -> FieldSchema:
    """Deterministic schema used when no AI backend is configured."""
    lower_prompt = prompt.lower()

    if "pole" in lower_prompt or "electrical" in lower_prompt:
        return FieldSchema.model_validate(
            {
                "title": title or "Electrical Pole Inspection Form",
                "fields": [
                    {
                        "name": "inspector_name",
                        "label": "Inspector Name",
                        "type": "string",
                        "required": True,
                        "placeholder": "Enter your full name",
                    },
                    {
                        "name": "pole_id",
                        "label": "Pole ID",
                        "type": "string",
                        "required": True,
                        "placeholder": "e.g., POLE-2024-001",
                    },
                    {
                        "name": "voltage",
                        "label": "Voltage Reading (V)",
                        "type": "number",
                        "required": True,
                        "min": 0,
                        "max": 1000,
                        "notifyIf": ">400",
                        "placeholder": "Enter voltage in volts",
                    },
                    {
                        "name": "pole_condition",
                        "label": "Pole Condition",
                        "type": "select",
                        "required": True,
                        "options": ["Excellent", "Good", "Fair", "Poor", "Critical"],
                    },
                    {
                        "name": "photos",
                        "label": "Inspection Photos",
                        "type": "file",
                        "required": False,
                    },
                    {
                        "name": "remarks",
                        "label": "Additional Remarks",
                        "type": "textarea",
                        "required": False,
                        "placeholder": "Any additional observations...",
                    },
                ],
            }
        )

    return FieldSchema.model_validate(
        {
            "title": title or "Field Inspection Form",
            "fields": [
                {"name": "inspector_name", "label": "Inspector Name", "type": "string", "required": True},
                {"name": "location", "label": "Location", "type": "string", "required": True},
                {"name": "inspection_date", "label": "Inspection Date", "type": "date", "required": True},
                {
                    "name": "status",
                    "label": "Status",
                    "type": "select",
                    "required": True,
                    "options": ["Pass", "Fail", "Needs Review"],
                },
                {"name": "notes", "label": "Notes", "type": "textarea", "required": False},
            ],
        }
    )
