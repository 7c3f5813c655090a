"""Conversation history utilities.
Turns caller-supplied history into the role-tagged message list sent to the model.
"""
from typing import Dict, List, Optional, Sequence

from config import Config
from models import ChatTurn
from system_prompt import SYSTEM_PROMPT


def filter_history(
    history: Sequence[ChatTurn],
    sentinel: Optional[str] = None,
    includes_latest: Optional[bool] = None,
) -> List[ChatTurn]:
    """Drop the placeholder greeting and, when the caller already appended the
    current message, that latest turn (it is re-sent as the composed prompt)."""
    sentinel = Config.GREETING_SENTINEL if sentinel is None else sentinel
    includes_latest = Config.HISTORY_INCLUDES_LATEST if includes_latest is None else includes_latest
    turns = [t for t in history or [] if t.content != sentinel]
    if includes_latest:
        turns = turns[:-1]
    return turns


def build_messages(
    prompt: str,
    history: Sequence[ChatTurn] = (),
    system_prompt: str = SYSTEM_PROMPT,
    sentinel: Optional[str] = None,
    includes_latest: Optional[bool] = None,
) -> List[Dict[str, str]]:
    messages = [{"role": "system", "content": system_prompt}]
    for turn in filter_history(history, sentinel, includes_latest):
        messages.append({"role": turn.role, "content": turn.content})
    messages.append({"role": "user", "content": prompt})
    return messages
