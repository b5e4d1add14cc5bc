#!/usr/bin/env python3
"""
Mock inference service for running NeuroScope without an OpenAI key.

Speaks the subset of the OpenAI chat completions API the service-backed
classifiers use, and answers "AI, <n>" or "Human, <n>" based on a hash of
the prompt. Send a prompt containing "MALFORMED" to get an unparseable
reply and exercise the normalizer fallback.

Run with: python scripts/mock_inference_service.py
Then:     OPENAI_API_KEY=mock OPENAI_BASE_URL=http://localhost:8099/v1 uvicorn neuroscope.main:app
"""
import hashlib
import time
from typing import Any, Dict, List, Optional, Union
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
import uvicorn

app = FastAPI(
    title="Mock Inference Service",
    description="OpenAI-compatible stub for NeuroScope service-backed classifiers",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============= Request/Response Models =============

class ChatMessage(BaseModel):
    role: str
    content: Union[str, List[Dict[str, Any]]]


class ChatCompletionRequest(BaseModel):
    model: str
    messages: List[ChatMessage]
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None


# ============= Mock Classification Logic =============

def _prompt_text(messages: List[ChatMessage]) -> str:
    """Flatten message content, keeping image payloads in the digest."""
    parts = []
    for message in messages:
        if isinstance(message.content, str):
            parts.append(message.content)
            continue
        for part in message.content:
            if part.get("type") == "text":
                parts.append(part.get("text", ""))
            elif part.get("type") == "image_url":
                parts.append(part.get("image_url", {}).get("url", ""))
    return "\n".join(parts)


def mock_reply(prompt: str) -> str:
    """Deterministic "AI, n" / "Human, n" reply for a prompt."""
    if "MALFORMED" in prompt:
        return "I am not able to tell."
    digest = int(hashlib.md5(prompt.encode("utf-8")).hexdigest()[:8], 16)
    label = "AI" if digest % 2 else "Human"
    return f"{label}, {50 + digest % 50}"


@app.post("/v1/chat/completions")
async def chat_completions(request: ChatCompletionRequest) -> Dict[str, Any]:
    content = mock_reply(_prompt_text(request.messages))
    return {
        "id": f"mock-{int(time.time() * 1000)}",
        "object": "chat.completion",
        "created": int(time.time()),
        "model": request.model,
        "choices": [{
            "index": 0,
            "message": {"role": "assistant", "content": content},
            "finish_reason": "stop",
        }],
        "usage": {"prompt_tokens": 0, "completion_tokens": 0, "total_tokens": 0},
    }


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "mock-inference"}


if __name__ == "__main__":
    print("Starting Mock Inference Service on http://localhost:8099")
    uvicorn.run(app, host="0.0.0.0", port=8099)
