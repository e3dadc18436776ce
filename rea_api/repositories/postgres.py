from __future__ import annotations

from dataclasses import dataclass
import importlib
import json
from typing import Any

from rea_api.domain.errors import DuplicateSubmissionError, SubmissionStoreError
from rea_api.domain.ids import new_submission_id
from rea_api.domain.models import SubmissionRecord
from rea_api.repositories.sql_loader import load_sql

try:
    asyncpg_module = importlib.import_module("asyncpg")
except ModuleNotFoundError:  # pragma: no cover
    asyncpg_module = None  # type: ignore[assignment]


SQL_INSERT_SUBMISSION = load_sql("insert_submission.sql")
SQL_SAVE_SUBMISSION = load_sql("save_submission.sql")
SQL_FIND_SUBMISSION_BY_TRANSACTION = load_sql("find_submission_by_transaction.sql")

TRANSACTION_UNIQUE_INDEX = "uq_rea_submissions_transaction_id"


def _is_unique_violation(exc: Exception) -> bool:
    return getattr(exc, "sqlstate", None) == "23505"


def _is_transaction_conflict(exc: Exception) -> bool:
    return _is_unique_violation(exc) and getattr(exc, "constraint_name", None) == TRANSACTION_UNIQUE_INDEX


def _json_object(value: Any) -> dict[str, str]:
    if value is None:
        return {}
    if isinstance(value, str):
        value = json.loads(value)
    return {str(key): str(item) for key, item in dict(value).items()}


def _record_from_row(row: Any) -> SubmissionRecord:
    return SubmissionRecord(
        id=row["public_id"],
        transaction_id=row["transaction_id"],
        registered_email_address=row["registered_email_address"],
        accept_appropriate_email_address_statement=row["accept_appropriate_email_address_statement"],
        links=_json_object(row["links"]),
        etag=row["etag"],
        created_at=row["created_at"],
        created_by_user_id=row["created_by_user_id"],
        http_request_id=row["http_request_id"],
    )


@dataclass
class AsyncpgPoolManager:
    dsn: str
    pool: Any | None = None

    async def startup(self) -> None:
        if asyncpg_module is None:  # pragma: no cover
            raise RuntimeError("asyncpg is required for postgres repository mode")

        async def _init_connection(conn: Any) -> None:
            await conn.set_type_codec(
                "jsonb",
                encoder=json.dumps,
                decoder=json.loads,
                schema="pg_catalog",
            )

        self.pool = await asyncpg_module.create_pool(
            dsn=self.dsn,
            min_size=1,
            max_size=5,
            init=_init_connection,
        )

    async def shutdown(self) -> None:
        if self.pool is None:
            return
        await self.pool.close()
        self.pool = None


@dataclass
class PostgresSubmissionRepository:
    pool_manager: AsyncpgPoolManager

    def _pool(self) -> Any:
        if self.pool_manager.pool is None:
            raise SubmissionStoreError("postgres pool is not initialized")
        return self.pool_manager.pool

    async def insert(self, record: SubmissionRecord) -> SubmissionRecord:
        if record.transaction_id is None:
            raise SubmissionStoreError("submission must reference a transaction")
        pool = self._pool()
        try:
            async with pool.acquire() as conn:
                for _ in range(5):
                    try:
                        row = await conn.fetchrow(
                            SQL_INSERT_SUBMISSION,
                            new_submission_id(),
                            record.transaction_id,
                            record.registered_email_address,
                            record.accept_appropriate_email_address_statement,
                            record.etag,
                        )
                    except Exception as exc:
                        if _is_transaction_conflict(exc):
                            raise DuplicateSubmissionError(
                                f"Transaction id: {record.transaction_id} has an existing "
                                "Registered Email Address submission"
                            ) from exc
                        if _is_unique_violation(exc):
                            continue
                        raise
                    if row is None:
                        raise SubmissionStoreError("failed to insert submission")
                    return _record_from_row(row)
        except (DuplicateSubmissionError, SubmissionStoreError):
            raise
        except Exception as exc:
            raise SubmissionStoreError(f"failed to insert submission: {exc}") from exc
        raise SubmissionStoreError("failed to allocate unique submission id")

    async def save(self, record: SubmissionRecord) -> SubmissionRecord:
        pool = self._pool()
        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow(
                    SQL_SAVE_SUBMISSION,
                    record.id,
                    record.transaction_id,
                    record.registered_email_address,
                    record.accept_appropriate_email_address_statement,
                    dict(record.links),
                    record.etag,
                    record.created_at,
                    record.created_by_user_id,
                    record.http_request_id,
                )
        except Exception as exc:
            raise SubmissionStoreError(f"failed to save submission: {exc}") from exc
        if row is None:
            raise SubmissionStoreError(f"submission is not found: {record.id}")
        return _record_from_row(row)

    async def find_by_transaction_id(self, transaction_id: str) -> SubmissionRecord | None:
        pool = self._pool()
        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow(SQL_FIND_SUBMISSION_BY_TRANSACTION, transaction_id)
        except Exception as exc:
            raise SubmissionStoreError(f"failed to load submission: {exc}") from exc
        if row is None:
            return None
        return _record_from_row(row)
