# utils/llm.py
"""Claude-backed sermon outline and reflection question generation."""
import json
import logging

import anthropic
from pydantic import TypeAdapter, ValidationError

import config
from schemas.sermon_schemas import GeneratedOutline, ReflectionQuestion

logger = logging.getLogger(__name__)

_client = None

_questions_adapter = TypeAdapter(list[ReflectionQuestion])


def get_client():
    """Shared Anthropic client, or None when ANTHROPIC_API_KEY is not set."""
    global _client
    if _client is None:
        api_key = config.anthropic_api_key()
        if not api_key:
            logger.error("Anthropic API key not found in environment variables.")
            return None
        _client = anthropic.Anthropic(api_key=api_key)
    return _client


def extract_json_text(text):
    """Strip a ```json ... ``` (or bare ```) fence if the model added one."""
    stripped = text.strip()
    if stripped.startswith('```'):
        stripped = stripped.split('\n', 1)[1] if '\n' in stripped else ''
        stripped = stripped.rsplit('```', 1)[0]
    return stripped.strip()


def _complete(prompt, max_tokens=1024):
    """Send a single-turn prompt; returns the response text or None."""
    client = get_client()
    if client is None:
        return None

    try:
        message = client.messages.create(
            model=config.anthropic_model(),
            max_tokens=max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
    except anthropic.APIError as api_err:
        logger.error(f"Anthropic API error: {api_err}", exc_info=True)
        return None

    if not message.content or getattr(message.content[0], 'type', None) != 'text':
        logger.error("Anthropic response did not contain text")
        return None
    return message.content[0].text


def _parse_json(text):
    try:
        return json.loads(extract_json_text(text))
    except (json.JSONDecodeError, TypeError) as parse_err:
        logger.error(f"Failed to parse LLM response: {text!r}. Error: {parse_err}")
        return None


def generate_sermon_outline(passage, title=None):
    """Probable expository outline for a passage.

    Returns {"mainPoints": [...], "keyThemes": [...], "crossReferences": [...]}
    or None.
    """
    title_line = f"Sermon Title: {title}\n" if title else ""
    prompt = f"""You are helping a sermon listener prepare for deeper engagement with God's Word.

Given the following passage{' and sermon title' if title else ''}:
Passage: {passage}
{title_line}
Generate a PROBABLE expository outline that follows the passage's flow. This is a suggested outline - the actual sermon may differ.

Respond ONLY with JSON in this format:
{{
  "mainPoints": [
    {{ "heading": "Point heading", "subPoints": ["Sub-point 1", "Sub-point 2"] }}
  ],
  "keyThemes": ["Theme 1", "Theme 2"],
  "crossReferences": ["Related verse 1", "Related verse 2"]
}}

Keep the outline practical and focused on the text's main message."""

    logger.info(f"Requesting sermon outline for '{passage}'")
    text = _complete(prompt)
    if text is None:
        return None

    data = _parse_json(text)
    if data is None:
        return None

    try:
        outline = GeneratedOutline.model_validate(data)
    except ValidationError as e:
        logger.error(f"Sermon outline failed validation: {e}")
        return None
    return outline.model_dump()


def generate_reflection_questions(passage, count=5):
    """Observation / interpretation / application questions, or None."""
    prompt = f"""Generate {count} reflection questions for the following Bible passage: {passage}

Create open-ended questions that help the reader:
1. Observe what the text says (observation)
2. Understand what it means (interpretation)
3. Apply it to their life (application)

Respond ONLY with JSON in this format:
[
  {{ "question": "Your question here", "category": "observation|interpretation|application" }}
]"""

    logger.info(f"Requesting {count} reflection questions for '{passage}'")
    text = _complete(prompt)
    if text is None:
        return None

    data = _parse_json(text)
    if data is None:
        return None

    try:
        questions = _questions_adapter.validate_python(data)
    except ValidationError as e:
        logger.error(f"Reflection questions failed validation: {e}")
        return None
    return [q.model_dump() for q in questions]
