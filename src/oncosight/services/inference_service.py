"""Service layer – brain-tumor classification through the external inference API.

The model itself lives behind ``{BRAIN_TUMOR_URL}/predict``; this module only
speaks its contract: one multipart upload with the field ``image`` in, a flat
JSON object of *class name → probability* out.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from src.oncosight.schemas.predict import PredictionResult, RankedPrediction

logger = logging.getLogger(__name__)

_prediction_adapter = TypeAdapter(PredictionResult)


class InferenceError(Exception):
    """The inference service could not be reached or returned an unusable answer."""


# ──────────────────────────────────────────────
# Remote call
# ──────────────────────────────────────────────
async def classify_image(
    client: httpx.AsyncClient,
    base_url: str,
    filename: str,
    content: bytes,
    content_type: str = "application/octet-stream",
) -> PredictionResult:
    """POST *content* to ``{base_url}/predict`` and return the class probabilities."""
    url = f"{base_url.rstrip('/')}/predict"
    files = {"image": (filename, content, content_type)}

    try:
        response = await client.post(url, files=files)
    except httpx.HTTPError as exc:
        logger.error("Inference request to %s failed: %s", url, exc)
        raise InferenceError(f"Could not reach inference service: {exc}") from exc

    if response.is_error:
        logger.error("Failed to get predictions (HTTP %s)", response.status_code)
        raise InferenceError(
            f"Inference service returned HTTP {response.status_code}",
        )

    try:
        result = response.json()
    except ValueError as exc:
        raise InferenceError("Inference service returned invalid JSON") from exc

    if not isinstance(result, dict):
        raise InferenceError(
            f"Expected a JSON object of class probabilities, got {type(result).__name__}",
        )

    # numbers only; strings like "0.8" are not coerced
    try:
        result = _prediction_adapter.validate_python(result, strict=True)
    except ValidationError as exc:
        logger.error("Inference service returned non-numeric probabilities: %s", result)
        raise InferenceError(
            f"Inference service returned non-numeric probabilities: {exc.error_count()} invalid value(s)",
        ) from exc

    logger.info("Received %d class probabilities for %s", len(result), filename)
    return result


# ──────────────────────────────────────────────
# Display helpers
# ──────────────────────────────────────────────
def format_percentage(probability: float) -> str:
    """Render a probability in [0, 1] as a percentage with two decimals."""
    return f"{probability * 100:.2f}%"


def rank_predictions(predictions: PredictionResult) -> list[RankedPrediction]:
    """Order *predictions* by descending probability for display.

    Values are taken literally; nothing checks that they sum to 1.
    Ties keep the order in which the service returned them.
    """
    ordered = sorted(predictions.items(), key=lambda item: item[1], reverse=True)
    return [
        RankedPrediction(
            class_name=name,
            label=name[:1].upper() + name[1:],
            probability=probability,
            percentage=format_percentage(probability),
        )
        for name, probability in ordered
    ]
