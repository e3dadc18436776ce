from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from rea_api.api.handlers.deps import ApiDeps
from rea_api.clients.stub import StubTransactionGateway
from rea_api.clients.transactions import HttpTransactionGateway
from rea_api.domain.contracts import SubmissionRepository, TransactionGateway
from rea_api.repositories.postgres import AsyncpgPoolManager, PostgresSubmissionRepository
from rea_api.repositories.stub import InMemorySubmissionRepository
from rea_api.settings import RuntimeSettings

Hook = Callable[[], Awaitable[None]]


@dataclass
class RuntimeContainer:
    repository: SubmissionRepository
    transactions: TransactionGateway
    api_deps: ApiDeps
    on_startup: Hook | None
    on_shutdown: Hook | None


def _chain(hooks: list[Hook]) -> Hook | None:
    if not hooks:
        return None

    async def _run() -> None:
        for hook in hooks:
            await hook()

    return _run


def build_runtime_container(settings: RuntimeSettings) -> RuntimeContainer:
    startup_hooks: list[Hook] = []
    shutdown_hooks: list[Hook] = []

    repository: SubmissionRepository
    if settings.database_url:
        pool_manager = AsyncpgPoolManager(dsn=settings.database_url)
        repository = PostgresSubmissionRepository(pool_manager=pool_manager)
        startup_hooks.append(pool_manager.startup)
        shutdown_hooks.append(pool_manager.shutdown)
    else:
        repository = InMemorySubmissionRepository()

    transactions: TransactionGateway
    if settings.transactions_api_url:
        gateway = HttpTransactionGateway(
            base_url=settings.transactions_api_url,
            api_key=settings.internal_api_key,
            timeout_seconds=float(settings.transactions_api_timeout_seconds),
        )
        transactions = gateway
        startup_hooks.append(gateway.startup)
        shutdown_hooks.append(gateway.shutdown)
    else:
        transactions = StubTransactionGateway()

    return RuntimeContainer(
        repository=repository,
        transactions=transactions,
        api_deps=ApiDeps(repository=repository, transactions=transactions),
        on_startup=_chain(startup_hooks),
        on_shutdown=_chain(list(reversed(shutdown_hooks))),
    )
