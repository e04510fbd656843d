"""
Base Agent for the Museum Curator Planner
Defines the abstract base class and response structure for data agents.

Each agent owns one domain (tasks, projects) and shares:
- Database and configuration access
- Intent-based dispatch through process()
- Structured action logging
- Optional publishing of refreshed values to the dashboard state store
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
from datetime import datetime, timezone
import logging
import json

from museum_planner.dashboard.state import StateStore


@dataclass
class AgentResponse:
    """
    Standard response structure from any agent.

    Attributes:
        success: Whether the operation completed successfully
        message: Human-readable description of the result
        data: Optional structured data (task details, listings, etc.)
        suggestions: Optional list of follow-up actions
        not_found: Set when the requested record does not exist
    """
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None
    suggestions: Optional[List[str]] = None
    not_found: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert response to dictionary for serialization."""
        return {
            "success": self.success,
            "message": self.message,
            "data": self.data,
            "suggestions": self.suggestions,
        }

    @classmethod
    def error(cls, message: str, data: Optional[Dict[str, Any]] = None,
              not_found: bool = False) -> 'AgentResponse':
        """Factory method for creating error responses."""
        return cls(success=False, message=message, data=data, not_found=not_found)

    @classmethod
    def ok(cls, message: str, data: Optional[Dict[str, Any]] = None,
           suggestions: Optional[List[str]] = None) -> 'AgentResponse':
        """Factory method for creating success responses."""
        return cls(success=True, message=message, data=data, suggestions=suggestions)


class BaseAgent(ABC):
    """
    Abstract base class for planner data agents.

    Subclasses provide the intent handlers; process() dispatches to them
    and turns unexpected exceptions into error responses.

    Design Pattern: Template Method
    """

    def __init__(self, db, config, name: str, state: Optional[StateStore] = None):
        """
        Initialize the base agent.

        Args:
            db: Database instance for data access
            config: Config instance for settings/preferences
            name: Unique identifier for this agent (e.g., "task", "project")
            state: Optional state store notified after writes
        """
        self.db = db
        self.config = config
        self.name = name
        self.state = state
        self.logger = logging.getLogger(f"agent.{name}")

    @abstractmethod
    def get_handlers(self) -> Dict[str, Callable[[Dict[str, Any]], AgentResponse]]:
        """Map of intent name to handler."""
        pass

    def get_supported_intents(self) -> List[str]:
        """Return list of intents this agent can handle."""
        return list(self.get_handlers().keys())

    def can_handle(self, intent: str) -> bool:
        """Check if this agent can handle the given intent."""
        return intent in self.get_handlers()

    def process(self, intent: str, context: Dict[str, Any]) -> AgentResponse:
        """
        Process an intent and return a response.

        Args:
            intent: One of the supported intents
            context: Request parameters

        Returns:
            AgentResponse with operation result
        """
        self.log_action(f"processing_{intent}", {"context_keys": list(context.keys())})

        handler = self.get_handlers().get(intent)
        if not handler:
            return AgentResponse.error(f"Unknown intent: {intent}")

        try:
            return handler(context)
        except Exception as e:
            self.logger.error(f"Error processing {intent}: {e}", exc_info=True)
            return AgentResponse.error(f"Failed to process {intent}: {str(e)}")

    def log_action(self, action: str, details: Optional[Dict[str, Any]] = None) -> None:
        """
        Log an action taken by this agent.

        Args:
            action: Description of the action taken
            details: Optional additional details as key-value pairs
        """
        log_entry = {
            "agent": self.name,
            "action": action,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
        if details:
            log_entry["details"] = details

        self.logger.info(json.dumps(log_entry))

    def validate_required_params(self, context: Dict[str, Any],
                                 required: List[str]) -> Optional[AgentResponse]:
        """
        Validate that required parameters are present in context.

        Returns:
            None if valid, AgentResponse.error listing missing params otherwise
        """
        missing = [p for p in required if context.get(p) in (None, "")]
        if missing:
            return AgentResponse.error(
                f"Missing required parameters: {', '.join(missing)}"
            )
        return None

    def get_config_value(self, key: str, section: str = "preferences",
                         default: Any = None) -> Any:
        """Read a configuration value, tolerating a missing config."""
        if self.config is None:
            return default
        return self.config.get(key, section, default)

    def publish(self, key: str, value: Any) -> None:
        """Publish a refreshed value when a state store is attached."""
        if self.state is not None:
            self.state.publish(key, value)
