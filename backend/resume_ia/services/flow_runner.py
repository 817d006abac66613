import json
import logging
from typing import TypeVar
from pydantic import BaseModel, ValidationError
from resume_ia.core.errors import FlowError
from resume_ia.services.llm_providers import get_provider
from resume_ia.services.prompts import with_output_schema

logger = logging.getLogger(__name__)

OutputT = TypeVar("OutputT", bound=BaseModel)


def strip_fences(raw: str) -> str:
    if "```" not in raw:
        return raw
    lines = raw.splitlines()
    out = []
    in_fence = False
    for line in lines:
        if line.strip().startswith("```"):
            in_fence = not in_fence
            continue
        if in_fence:
            out.append(line)
    return "\n".join(out).strip() or raw


def extract_json_object(raw: str) -> dict | None:
    text = strip_fences(raw or "").strip()
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return None
    try:
        data = json.loads(text[start : end + 1])
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def run_structured_prompt(
    system_prompt: str,
    user_prompt: str,
    output_model: type[OutputT],
    error_message: str,
) -> OutputT:
    """Invoke the model in JSON mode and validate its answer against ``output_model``.

    Raises ``FlowError(error_message)`` when the model returns nothing, something
    that is not a JSON object, or an object that fails validation. Provider
    failures propagate as ``ModelClientError``.
    """
    provider = get_provider()
    raw = provider.generate(with_output_schema(system_prompt, output_model), user_prompt, json_output=True)
    data = extract_json_object(raw)
    if data is None:
        logger.warning("Model returned no JSON object", extra={"output_model": output_model.__name__, "raw": raw[:400]})
        raise FlowError(error_message)
    try:
        return output_model.model_validate(data)
    except ValidationError as exc:
        logger.warning(
            "Model output failed validation",
            extra={"output_model": output_model.__name__, "errors": str(exc)[:500]},
        )
        raise FlowError(error_message) from exc
