"""Router – brain-tumor classification proxy."""

from pathlib import Path

import httpx
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from src.oncosight.config import Settings
from src.oncosight.httpclient import get_http_client, get_settings
from src.oncosight.schemas.predict import ClassificationResponse
from src.oncosight.services.inference_service import (
    InferenceError,
    classify_image,
    rank_predictions,
)

router = APIRouter(prefix="/braintumor", tags=["Prediction"])


@router.post("/predict", response_model=ClassificationResponse)
async def predict_image(
    image: UploadFile = File(...),
    client: httpx.AsyncClient = Depends(get_http_client),
    config: Settings = Depends(get_settings),
) -> ClassificationResponse:
    """
    Classify an MRI image with the external brain-tumor model.

    Parameters
    ----------
    image : UploadFile – MRI scan (jpg, jpeg, png, webp).

    Returns the raw class probabilities **plus** the rows sorted by
    descending probability.
    """
    # ── validate file extension ──
    if not image.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    file_ext = Path(image.filename).suffix.lower()
    if file_ext not in config.allowed_extensions_set:
        raise HTTPException(
            status_code=400,
            detail=f"File type '{file_ext}' not allowed. "
                   f"Allowed: {', '.join(sorted(config.allowed_extensions_set))}",
        )

    # ── read file content ──
    content = await image.read()
    file_size = len(content)

    if file_size > config.max_upload_size:
        raise HTTPException(
            status_code=413,
            detail=f"File too large ({file_size} bytes). "
                   f"Maximum size: {config.max_upload_size} bytes.",
        )

    # ── forward to the inference service ──
    try:
        predictions = await classify_image(
            client,
            config.brain_tumor_url,
            image.filename,
            content,
            image.content_type or "application/octet-stream",
        )
    except InferenceError as exc:
        raise HTTPException(status_code=502, detail=str(exc))

    return ClassificationResponse(
        predictions=predictions,
        ranked=rank_predictions(predictions),
    )
