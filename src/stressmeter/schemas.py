from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

StepKind = Literal["response", "audio", "use_item", "interact", "leave", "refill", "advance", "reset"]


class ChatResponse(BaseModel):
    """A reply from the AI agent. Only `action` moves stress beyond the base delta."""
    message: str = ""
    action: Optional[str] = None


class InteractRequest(BaseModel):
    distance: float = Field(ge=0.0, default=0.0)


class Step(BaseModel):
    kind: StepKind
    action: Optional[str] = None
    item: Optional[str] = None
    distance: float = Field(ge=0.0, default=0.0)
    seconds: float = Field(ge=0.0, default=0.0)


class Script(BaseModel):
    """JSON scenario replayed by the CLI."""
    name: str = "script"
    profile: Dict[str, Any] = {}
    steps: List[Step] = []


class UseItemResult(BaseModel):
    item: str
    outcome: str
    stress: float
    remaining_uses: int
