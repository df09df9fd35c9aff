import json
import re

import anthropic
import openai

from exemplar.config import settings
from exemplar.schemas.search import ExamplePhrase


class LLMResponseError(Exception):
    """The model answered, but not with the structure we asked for."""


async def _call_anthropic(prompt: str, json_schema: dict | None = None) -> str:
    client = anthropic.AsyncAnthropic(
        api_key=settings.anthropic_api_key, timeout=settings.http_timeout
    )
    kwargs: dict = {
        "model": settings.llm_model,
        "max_tokens": 4096,
        "messages": [{"role": "user", "content": prompt}],
    }
    if json_schema:
        kwargs["output_config"] = {
            "format": {"type": "json_schema", "schema": json_schema}
        }
    message = await client.messages.create(**kwargs)
    return message.content[0].text


async def _call_openai(prompt: str, json_schema: dict | None = None) -> str:
    client = openai.AsyncOpenAI(
        api_key=settings.openai_api_key, timeout=settings.http_timeout
    )
    kwargs: dict = {
        "model": settings.llm_model,
        "max_tokens": 4096,
        "messages": [{"role": "user", "content": prompt}],
    }
    if json_schema:
        kwargs["response_format"] = {
            "type": "json_schema",
            "json_schema": {"name": "response", "strict": True, "schema": json_schema},
        }
    response = await client.chat.completions.create(**kwargs)
    return response.choices[0].message.content


async def _call_llm(prompt: str, json_schema: dict | None = None) -> str:
    if settings.llm_provider == "anthropic":
        return await _call_anthropic(prompt, json_schema)
    else:
        return await _call_openai(prompt, json_schema)


_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")


def _parse_json(text: str) -> dict | list:
    try:
        return json.loads(_CODE_FENCE.sub("", text.strip()))
    except json.JSONDecodeError as e:
        raise LLMResponseError(f"Model returned invalid JSON: {e}") from e


_PHRASES_SCHEMA = {
    "type": "object",
    "properties": {
        "phrases": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "text": {"type": "string"},
                    "translation": {"type": "string"},
                    "category": {"type": "string"},
                },
                "required": ["text", "translation", "category"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["phrases"],
    "additionalProperties": False,
}


async def generate_phrases(word: str) -> list[ExamplePhrase]:
    prompt = (
        f'Write {settings.phrase_count} short, natural example phrases that use "{word}".\n'
        f"Cover different everyday situations and registers.\n"
        f'Return a JSON object with a "phrases" array, each item with these keys:\n'
        f'- "text": the phrase, using "{word}" as a native speaker would\n'
        f'- "translation": the phrase translated to {settings.explanation_language}\n'
        f'- "category": one or two words naming the context (e.g. "daily life", '
        f'"travel", "idiom", "formal")\n'
    )
    response = await _call_llm(prompt, json_schema=_PHRASES_SCHEMA)
    result = _parse_json(response)
    items = result if isinstance(result, list) else result.get("phrases", [])
    return [
        ExamplePhrase(
            text=item.get("text", ""),
            translation=item.get("translation", ""),
            category=item.get("category", ""),
        )
        for item in items
        if item.get("text")
    ]


async def generate_explanation(word: str) -> str:
    prompt = (
        f'Explain the word "{word}" to a language learner, in {settings.explanation_language}.\n'
        f"Cover its meaning, part of speech, common usage and any nuance or "
        f"false friends worth knowing. Keep it under 150 words.\n"
        f"Use short Markdown paragraphs. Do not repeat the word as a heading."
    )
    response = await _call_llm(prompt)
    return response.strip()
