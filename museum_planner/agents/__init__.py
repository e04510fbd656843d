"""
Data agents for the Museum Curator Planner
Intent-based task and project operations over the database
"""

from .base_agent import BaseAgent, AgentResponse
from .task_agent import TaskAgent
from .project_agent import ProjectAgent

__all__ = [
    'BaseAgent',
    'AgentResponse',
    'TaskAgent',
    'ProjectAgent',
]
