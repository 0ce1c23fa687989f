"""Orchestrator: load accounts, run every agent's handshake, keep them pinging."""

import asyncio
from enum import IntEnum
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from loguru import logger

from ...core.config import AfkSettings, get_settings
from ...core.exceptions import FileAccessError
from ...core.logger import print_banner
from ..account.credentials import load_accounts, write_accounts_template
from ..octant.models import Credential
from .agent import SessionAgent

AgentFactory = Callable[[Credential], SessionAgent]


class ExitCode(IntEnum):
    """Process exit statuses."""

    OK = 0
    FAILURE = 1


class AfkOrchestrator:
    """
    Runs one SessionAgent per account.

    Handshakes run one account at a time. Accounts that fail are dropped
    without affecting the others; the rest ping independently until the
    shutdown event is set.
    """

    def __init__(
        self,
        settings: Optional[AfkSettings] = None,
        agent_factory: Optional[AgentFactory] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            settings: Application settings
            agent_factory: Builds the agent for a credential (injectable for tests)
        """
        self.settings = settings or get_settings()
        self.agent_factory = agent_factory or self._default_agent
        self.agents: List[SessionAgent] = []
        self.template_created = False

    def _default_agent(self, credential: Credential) -> SessionAgent:
        return SessionAgent(credential, settings=self.settings)

    @property
    def accounts_file(self) -> Path:
        return self.settings.accounts_file

    def load_credentials(self) -> Optional[List[Credential]]:
        """
        Load accounts, creating a template file when none exists.

        Returns:
            Parsed credentials, or None when the file could not be read
            (the caller must stop; the user has to edit the file first)
        """
        path = self.accounts_file
        try:
            return load_accounts(path)
        except FileAccessError as e:
            logger.error(f"Failed to read {path} file!")
            logger.debug(e.message)

        if path.exists():
            return None

        try:
            write_accounts_template(path)
        except FileAccessError as e:
            logger.error(f"Failed to create sample {path} file!")
            logger.debug(e.message)
            return None

        self.template_created = True
        logger.info(f"Created a sample {path} file. Please edit it and run the script again.")
        return None

    async def initialize_agents(self, credentials: Sequence[Credential]) -> List[SessionAgent]:
        """
        Run the handshake for every credential, one after another.

        Args:
            credentials: Accounts in file order

        Returns:
            Agents whose handshake succeeded, in the same order
        """
        enrolled: List[SessionAgent] = []
        for credential in credentials:
            agent = self.agent_factory(credential)
            result = await agent.initialize()
            if result.is_success():
                enrolled.append(agent)
            else:
                await agent.close()

        self.agents = enrolled
        return enrolled

    def start_all(self, interval_ms: int) -> None:
        """Start the ping schedule of every enrolled agent."""
        for agent in self.agents:
            agent.start_pinging(interval_ms)

    def stop_all(self) -> None:
        """Stop the ping schedule of every enrolled agent."""
        for agent in self.agents:
            agent.stop_pinging()

    async def close_all(self) -> None:
        """Release every agent's HTTP client."""
        for agent in self.agents:
            try:
                await agent.close()
            except Exception as e:
                logger.warning(f"[{agent.account_id}] Error closing client: {e}")

    async def run(self, shutdown_event: asyncio.Event) -> int:
        """
        Run the bot until the shutdown event is set.

        Args:
            shutdown_event: Set by the signal handler on SIGINT/SIGTERM

        Returns:
            Process exit code
        """
        print_banner()

        credentials = self.load_credentials()
        if credentials is None:
            return ExitCode.OK if self.template_created else ExitCode.FAILURE

        if not credentials:
            logger.error(f"No valid accounts found in {self.accounts_file}!")
            logger.info("Please add accounts in the format email:password, one per line.")
            return ExitCode.FAILURE

        logger.info(f"Found {len(credentials)} account(s). Starting initialization...")

        agents = await self.initialize_agents(credentials)
        if not agents:
            logger.error("No bots could be initialized. Exiting.")
            return ExitCode.FAILURE

        try:
            self.start_all(self.settings.ping_interval_ms)
            logger.success(f"{len(agents)} bot(s) running. Press Ctrl+C to stop.")
            await shutdown_event.wait()
            logger.info("Shutting down bots...")
        finally:
            self.stop_all()
            await self.close_all()

        logger.success("All bots stopped. Goodbye! See you next time!")
        return ExitCode.OK
