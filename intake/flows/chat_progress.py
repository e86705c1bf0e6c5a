"""
Chat Progress — coarse stage tracking for the free-form design chat.

The free-form chat has no flow definition; its progress is read off
what has happened in the conversation so far:

    brief    the user has described the project
    style    styles picked, or at least two moodboard items
    details  a task proposal has been drafted
    review   the proposal is up for review
    submit   the task was submitted

Each stage carries a weight; the stage in progress counts for half.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from intake.flows.models import IntakeMessage


class ChatStage(str, Enum):
    BRIEF = "brief"
    STYLE = "style"
    DETAILS = "details"
    REVIEW = "review"
    SUBMIT = "submit"


CHAT_STAGES: tuple[ChatStage, ...] = tuple(ChatStage)

STAGE_WEIGHTS: dict[ChatStage, int] = {
    ChatStage.BRIEF: 20,
    ChatStage.STYLE: 25,
    ChatStage.DETAILS: 25,
    ChatStage.REVIEW: 15,
    ChatStage.SUBMIT: 15,
}

STAGE_DESCRIPTIONS: dict[ChatStage, str] = {
    ChatStage.BRIEF: "Describe your project",
    ChatStage.STYLE: "Choose your visual style",
    ChatStage.DETAILS: "Refine your requirements",
    ChatStage.REVIEW: "Review your request",
    ChatStage.SUBMIT: "Submit for creation",
}

STAGE_HINTS: dict[ChatStage, str] = {
    ChatStage.BRIEF: "Tell me about your design project",
    ChatStage.STYLE: "Select styles that match your vision",
    ChatStage.DETAILS: "Let me refine the requirements",
    ChatStage.REVIEW: "Review and confirm your request",
    ChatStage.SUBMIT: "Ready to submit!",
}

WELCOME_MESSAGE_ID = "welcome"
MIN_MOODBOARD_ITEMS = 2


@dataclass
class ChatProgress:
    current_stage: ChatStage
    completed_stages: list[ChatStage] = field(default_factory=list)
    progress_percentage: int = 0

    def is_completed(self, stage: ChatStage) -> bool:
        return stage in self.completed_stages


def calculate_chat_stage(
    messages: Sequence[IntakeMessage],
    *,
    selected_styles: Sequence[str] = (),
    moodboard_item_count: int = 0,
    has_task_proposal: bool = False,
    task_submitted: bool = False,
) -> ChatProgress:
    """
    Work out the chat's current stage and overall progress.

    Args:
        messages: The conversation so far. The canned welcome message
            does not count as the user's brief.
        selected_styles: Style ids the user picked.
        moodboard_item_count: Items pinned to the moodboard.
        has_task_proposal: A task proposal has been drafted.
        task_submitted: The task was submitted.
    """
    completed: list[ChatStage] = []
    current = ChatStage.BRIEF

    if any(m.role == "user" and m.id != WELCOME_MESSAGE_ID for m in messages):
        completed.append(ChatStage.BRIEF)
        current = ChatStage.STYLE

    if selected_styles or moodboard_item_count >= MIN_MOODBOARD_ITEMS:
        completed.append(ChatStage.STYLE)
        current = ChatStage.DETAILS

    # A drafted proposal is immediately up for review.
    if has_task_proposal:
        completed.extend((ChatStage.DETAILS, ChatStage.REVIEW))
        current = ChatStage.SUBMIT

    if task_submitted:
        completed.append(ChatStage.SUBMIT)
        current = ChatStage.SUBMIT

    return ChatProgress(
        current_stage=current,
        completed_stages=completed,
        progress_percentage=_progress_percentage(completed, current),
    )


def _progress_percentage(completed: Sequence[ChatStage], current: ChatStage) -> int:
    # Work in half points so the in-progress half weight stays exact.
    half_points = sum(2 * STAGE_WEIGHTS[s] for s in completed)
    if CHAT_STAGES.index(current) > len(completed) - 1:
        half_points += STAGE_WEIGHTS[current]
    return min(100, (half_points + 1) // 2)


def get_next_stage(current_stage: ChatStage | str) -> Optional[ChatStage]:
    index = CHAT_STAGES.index(ChatStage(current_stage))
    if index < len(CHAT_STAGES) - 1:
        return CHAT_STAGES[index + 1]
    return None


def get_stage_hint(current_stage: ChatStage | str) -> str:
    return STAGE_HINTS[ChatStage(current_stage)]
