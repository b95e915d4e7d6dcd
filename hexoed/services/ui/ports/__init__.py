from __future__ import annotations

from .messages import IMessageService, Question

__all__ = ["IMessageService", "Question"]
