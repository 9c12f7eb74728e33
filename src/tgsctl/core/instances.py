"""
Instance selection

Commands accept an instance either by numeric id or by name.
"""

import logging
from typing import Optional

import click
from pydantic import BaseModel

from .api import InstanceClient
from .errors import InstanceNotFoundError
from .session import SessionManager

logger = logging.getLogger(__name__)


class InstanceSelector(BaseModel):
    """Identifies an instance by id or by name"""

    id: Optional[int] = None
    name: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> "InstanceSelector":
        text = text.strip()
        if not text:
            raise ValueError("Instance selector cannot be empty")
        if text.isdigit():
            return cls(id=int(text))
        return cls(name=text)

    def __str__(self) -> str:
        return str(self.id) if self.id is not None else f"'{self.name}'"


class InstanceSelectorType(click.ParamType):
    """click parameter type for instance selectors"""

    name = "instance"

    def convert(self, value, param, ctx):
        if isinstance(value, InstanceSelector):
            return value
        try:
            return InstanceSelector.parse(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


INSTANCE = InstanceSelectorType()


class InstanceManager:
    """Turns selectors into instance-scoped API clients"""

    def __init__(self, sessions: SessionManager):
        self.sessions = sessions

    def request_instance_client(self, selector: InstanceSelector) -> InstanceClient:
        """
        Get a client for the selected instance

        Args:
            selector: Instance id or name

        Returns:
            InstanceClient for the instance

        Raises:
            InstanceNotFoundError: No instance, or more than one, has the name
        """
        api = self.sessions.client()
        if selector.id is not None:
            return api.instance(selector.id)

        wanted = selector.name.lower()
        matches = [i for i in api.list_instances() if i.name.lower() == wanted]
        if not matches:
            raise InstanceNotFoundError(f"No instance named {selector}")
        if len(matches) > 1:
            ids = ", ".join(str(i.id) for i in matches)
            raise InstanceNotFoundError(f"Several instances are named {selector} (ids {ids})")

        logger.debug(f"Instance {selector} -> {matches[0].id}")
        return api.instance(matches[0].id)
