from pydantic import BaseModel

# Flat mapping returned by the inference service: class name → probability.
PredictionResult = dict[str, float]


class RankedPrediction(BaseModel):
    """Single class probability, ready for display."""
    class_name: str
    label: str
    probability: float
    percentage: str


class ClassificationResponse(BaseModel):
    """Response schema for POST /braintumor/predict."""
    predictions: PredictionResult
    ranked: list[RankedPrediction]
