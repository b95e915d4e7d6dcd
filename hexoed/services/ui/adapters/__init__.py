from .qt_messages import QtMessageService

__all__ = ["QtMessageService"]
