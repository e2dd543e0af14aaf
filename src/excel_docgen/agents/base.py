"""Base agent class for the Excel documentation toolkit."""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Optional

from ..models.base import AgentRequest, AgentResponse, AgentStatus
from ..utils.config import get_config
from ..utils.logging import get_logger


class BaseAgent(ABC):
    """Base class for all agents in the system."""

    def __init__(
        self,
        name: str,
        description: str,
        timeout: Optional[int] = None
    ):
        self.name = name
        self.description = description
        self.config = get_config()
        self.timeout = timeout or self.config.agent_timeout_seconds
        self.logger = get_logger(f"{__name__}.{name}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        return False

    @abstractmethod
    async def process(self, request: AgentRequest) -> AgentResponse:
        """Process the agent request and return response."""
        pass

    async def execute_with_timeout(self, request: AgentRequest) -> AgentResponse:
        """Execute the agent with timeout handling."""
        start_time = time.time()

        try:
            # Execute with timeout
            response = await asyncio.wait_for(
                self.process(request),
                timeout=self.timeout
            )

            # Calculate execution time
            execution_time = int((time.time() - start_time) * 1000)
            response.execution_time_ms = execution_time

            self.logger.info(
                f"Agent {self.name} completed with status '{response.status.value}' in {execution_time}ms"
            )

            return response

        except asyncio.TimeoutError:
            self.logger.error(f"Agent {self.name} timed out after {self.timeout}s")
            return AgentResponse(
                agent_id=self.name,
                request_id=request.request_id,
                status=AgentStatus.TIMEOUT,
                error_log=f"Agent {self.name} timed out after {self.timeout}s",
                execution_time_ms=int((time.time() - start_time) * 1000)
            )

        except Exception as e:
            self.logger.error(f"Agent {self.name} failed with error: {e}")
            return AgentResponse(
                agent_id=self.name,
                request_id=request.request_id,
                status=AgentStatus.FAILED,
                error_log=str(e),
                execution_time_ms=int((time.time() - start_time) * 1000)
            )

    def create_error_response(
        self,
        request: AgentRequest,
        error_message: str
    ) -> AgentResponse:
        """Create an error response."""
        return AgentResponse(
            agent_id=self.name,
            request_id=request.request_id,
            status=AgentStatus.FAILED,
            error_log=error_message
        )
