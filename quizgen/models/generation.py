# Data models exchanged with the external text-generation model
# quizgen/models/generation.py
from pydantic import BaseModel
from typing import Optional

class GenerationRequest(BaseModel):
    prompt: str
    max_output_tokens: int
    temperature: float
    top_p: Optional[float] = None

class GenerationResult(BaseModel):
    text: Optional[str] = None  # Models may return nothing at all
