"""Client session for the brain-tumor upload page."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from src.oncosight.schemas.predict import PredictionResult, RankedPrediction
from src.oncosight.services.inference_service import (
    InferenceError,
    classify_image,
    rank_predictions,
)

logger = logging.getLogger(__name__)


@dataclass
class SelectedFile:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class BrainTumorSession:
    """Holds the selected scan and the latest predictions for one user.

    ``base_url`` is either the inference service itself or this app's
    ``/braintumor`` proxy; both answer ``POST {base_url}/predict``.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str) -> None:
        self._client = client
        self._base_url = base_url
        self.selected_file: SelectedFile | None = None
        self.predictions: PredictionResult | None = None
        self.is_loading = False
        self.last_error: str | None = None

    def select_file(
        self,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> None:
        """Pick a new scan; any previous result no longer applies."""
        self.selected_file = SelectedFile(filename, content, content_type)
        self.predictions = None
        self.last_error = None

    @property
    def can_submit(self) -> bool:
        return self.selected_file is not None and not self.is_loading

    @property
    def ranked(self) -> list[RankedPrediction]:
        if not self.predictions:
            return []
        return rank_predictions(self.predictions)

    async def submit(self) -> PredictionResult | None:
        """Upload the selected file once; returns the new predictions or ``None``."""
        selected = self.selected_file
        if selected is None or self.is_loading:
            return None

        self.is_loading = True
        try:
            result = await classify_image(
                self._client,
                self._base_url,
                selected.filename,
                selected.content,
                selected.content_type,
            )
        except InferenceError as exc:
            # keep whatever was shown before
            logger.error("Error: %s", exc)
            self.last_error = str(exc)
            return None
        finally:
            self.is_loading = False

        self.predictions = result
        self.last_error = None
        return result
