from fastapi import FastAPI, Header, HTTPException
from typing import Any, Dict, Optional
import os

app = FastAPI(title="Mock Advisory Server", version="1.0.0")
API_KEY = os.environ.get("MOCK_ADVISORY_API_KEY", "test-key")

CANNED_RECOMMENDATION = (
    "D'après les chiffres fournis, comparez le revenu net final de chaque régime : "
    "le régime qui laisse le revenu net le plus élevé après impôt et cotisations est le plus avantageux."
)


@app.get("/health")
def health(): return {"status": "ok"}


@app.post("/v1beta/models/{model}:generateContent")
def generate_content(model: str, body: Dict[str, Any], x_goog_api_key: Optional[str] = Header(None)):
    if x_goog_api_key != API_KEY:
        raise HTTPException(status_code=403, detail="invalid api key")
    if not body.get("contents"):
        raise HTTPException(status_code=400, detail="contents required")
    return {
        "candidates": [{"content": {"role": "model", "parts": [{"text": CANNED_RECOMMENDATION}]}}],
        "modelVersion": model,
    }
