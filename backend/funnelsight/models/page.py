"""Page document model — the component tree handed to the engine by the editor store."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

PageType = Literal["landing", "optin", "appointment", "thank_you"]
LayoutPersonality = Literal["clean", "editorial", "bold", "dense", "conversion"]
StepIntent = Literal["optin", "content", "checkout", "thank_you"]
Viewport = Literal["desktop", "mobile"]
RenderMode = Literal["editor", "preview", "runtime"]

PERSONALITIES: tuple[str, ...] = ("clean", "editorial", "bold", "dense", "conversion")
INTENTS: tuple[str, ...] = ("optin", "content", "checkout", "thank_you")


class Node(BaseModel):
    """A single canvas node. Traversal order is the only meaningful order."""

    id: str
    type: str
    props: dict[str, Any] = Field(default_factory=dict)
    children: list[Node] = Field(default_factory=list)


class Page(BaseModel):
    id: str
    name: str = ""
    type: PageType = "landing"
    canvas_root: Node
    # When present these are authoritative and short-circuit inference
    layout_personality: LayoutPersonality | None = None
    layout_intent: StepIntent | None = None
