"""Interview session module."""

from .gate import CooldownGate
from .machine import IInterviewSession, InterviewSession

__all__ = ["CooldownGate", "IInterviewSession", "InterviewSession"]
