"""
Parallel membership checks across rule groups.

All checks start together and race a single overall deadline. The result is
all-or-nothing: a timeout or any single failure fails the whole aggregate,
and no partial result set is ever returned.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence

import structlog

from rule_sync.domain import is_valid_domain
from rule_sync.exceptions import AggregateCheckError, AggregateTimeoutError
from rule_sync.models.rules import DomainStatus, RuleGroup
from rule_sync.services.rule_editor import RuleSetEditor

logger = structlog.get_logger(__name__)

Sleep = Callable[[float], Awaitable[object]]


class StatusAggregator:
    """
    Checks one domain against many rule groups concurrently.

    Example:
        ```python
        aggregator = StatusAggregator(editor)
        statuses = await aggregator.check_all(groups, "github.com", timeout=10.0)
        present = [s.group.name for s in statuses if s.exists]
        ```
    """

    def __init__(self, editor: RuleSetEditor, *, sleep: Sleep = asyncio.sleep) -> None:
        """
        Args:
            editor: Editor used for each existence check.
            sleep: Timer that completes after the given number of seconds.
                Tests pass a fake to control the deadline.
        """
        self._editor = editor
        self._sleep = sleep

    async def check_all(
        self, groups: Sequence[RuleGroup], domain: str, timeout: float
    ) -> list[DomainStatus]:
        """
        Check ``domain`` in every group, preserving input order.

        An invalid domain yields all-false statuses without any remote call.

        Args:
            groups: Rule groups in display order.
            domain: Canonical domain to look for.
            timeout: Overall deadline in seconds for the whole fan-out.

        Returns:
            One DomainStatus per group, in the order given.

        Raises:
            AggregateTimeoutError: If the checks did not all settle in time.
            AggregateCheckError: If any single check failed.
        """
        groups = tuple(groups)
        if not is_valid_domain(domain):
            logger.debug("Skipping status checks for invalid domain", domain=domain)
            return [DomainStatus(group=group, exists=False) for group in groups]
        if not groups:
            return []

        checks = asyncio.create_task(self._check_groups(groups, domain))
        deadline = asyncio.ensure_future(self._sleep(timeout))
        try:
            await asyncio.wait({checks, deadline}, return_when=asyncio.FIRST_COMPLETED)
            timed_out = not checks.done()
        finally:
            deadline.cancel()
            if deadline.done() and not deadline.cancelled():
                deadline.exception()  # a failing timer is reported as a timeout
            if not checks.done():
                checks.cancel()
                await asyncio.wait({checks})

        if timed_out:
            if not checks.cancelled():
                checks.exception()  # raised while being cancelled; superseded by the timeout
            logger.warning(
                "Status checks timed out", domain=domain, groups=len(groups), timeout=timeout
            )
            msg = f"Status checks for {domain} did not finish within {timeout}s"
            raise AggregateTimeoutError(msg, domain=domain, groups=len(groups), timeout=timeout)

        if (error := checks.exception()) is not None:
            logger.warning("Status checks failed", domain=domain, exc_info=error)
            msg = f"Status checks for {domain} failed"
            raise AggregateCheckError(msg, domain=domain, groups=len(groups)) from error

        return checks.result()

    async def _check_groups(
        self, groups: tuple[RuleGroup, ...], domain: str
    ) -> list[DomainStatus]:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(self._editor.exists(group.path, domain)) for group in groups]
        return [
            DomainStatus(group=group, exists=task.result())
            for group, task in zip(groups, tasks, strict=True)
        ]
