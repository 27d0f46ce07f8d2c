from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from docscan.analysis.models import FeatureTag, SuspiciousFeature
from docscan.database.connection import get_connection
from docscan.scan.exceptions import InvalidTransitionError
from docscan.scan.models import ScanJob, ScanResult, ScanStatus
from docscan.scoring.compiler import RiskLevel

_JOB_COLUMNS = """
    id, file_name, mime_type, file_size_bytes, status, error_message, created_at
"""
_RESULT_COLUMNS = """
    id, file_name, score_total, technical_score, ia_score, risk_level,
    recommendation, flags, justification, created_at
"""


class ScanJobRepository:
    """Database operations for the scan_jobs and scan_results tables.

    Status updates are guarded on the current status so a job never leaves
    the completed or failed state.
    """

    def create_job(self, job: ScanJob) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO scan_jobs
                    (id, file_name, mime_type, file_size_bytes, status, created_at, updated_at)
                VALUES (%s, %s, %s, %s, %s, %s, NOW())
                """,
                (
                    job.id,
                    job.file_name,
                    job.mime_type,
                    job.file_size_bytes,
                    job.status.value,
                    job.created_at,
                ),
            )
            conn.commit()

    def claim_next_job(self, conn: psycopg.Connection[Any]) -> ScanJob | None:
        """Claim the oldest queued job using SELECT FOR UPDATE SKIP LOCKED."""
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                f"""
                SELECT {_JOB_COLUMNS}
                FROM scan_jobs
                WHERE status = 'queued'
                ORDER BY created_at
                LIMIT 1
                FOR UPDATE SKIP LOCKED
                """
            )
            row = cur.fetchone()

        if row is None:
            conn.commit()
            return None

        conn.execute(
            """
            UPDATE scan_jobs
            SET status = 'processing', locked_at = NOW(), updated_at = NOW()
            WHERE id = %s
            """,
            (row["id"],),
        )
        conn.commit()
        return self._row_to_job({**row, "status": ScanStatus.PROCESSING.value})

    def mark_processing(self, job_id: str) -> None:
        """Move a queued job to processing. Already-processing jobs are left as is."""
        with get_connection() as conn:
            cur = conn.execute(
                """
                UPDATE scan_jobs
                SET status = 'processing', updated_at = NOW()
                WHERE id = %s AND status IN ('queued', 'processing')
                """,
                (job_id,),
            )
            if cur.rowcount == 0:
                conn.rollback()
                raise InvalidTransitionError(f"Scan {job_id} cannot move to processing")
            conn.commit()

    def mark_completed(self, job_id: str, result: ScanResult) -> None:
        """Attach the result and complete the job in one transaction."""
        with get_connection() as conn:
            cur = conn.execute(
                """
                UPDATE scan_jobs
                SET status = 'completed', error_message = NULL, updated_at = NOW()
                WHERE id = %s AND status = 'processing'
                """,
                (job_id,),
            )
            if cur.rowcount == 0:
                conn.rollback()
                raise InvalidTransitionError(f"Scan {job_id} is not processing")
            conn.execute(
                f"""
                INSERT INTO scan_results ({_RESULT_COLUMNS})
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                """,
                (
                    result.id,
                    result.file_name,
                    result.score_total,
                    result.technical_score,
                    result.ia_score,
                    result.risk_level.value,
                    result.recommendation,
                    Jsonb([flag.to_dict() for flag in result.flags]),
                    result.justification,
                    result.created_at,
                ),
            )
            conn.commit()

    def mark_failed(self, job_id: str, error: str) -> None:
        """Mark a queued or processing job as permanently failed."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE scan_jobs
                SET status = 'failed', error_message = %s, updated_at = NOW()
                WHERE id = %s AND status IN ('queued', 'processing')
                """,
                (error, job_id),
            )
            conn.commit()

    def fail_stale_jobs(self, max_age_seconds: int, error: str) -> int:
        """Fail processing jobs whose claim is older than ``max_age_seconds``.

        A job stays in processing only while a worker holds it, so an old
        claim means the worker died mid-scan. Returns the number of jobs failed.
        """
        with get_connection() as conn:
            cur = conn.execute(
                """
                UPDATE scan_jobs
                SET status = 'failed', error_message = %s, updated_at = NOW()
                WHERE status = 'processing'
                  AND COALESCE(locked_at, updated_at) < NOW() - %s * INTERVAL '1 second'
                """,
                (error, max_age_seconds),
            )
            conn.commit()
            return cur.rowcount

    def find_by_id(self, job_id: str) -> ScanJob | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_JOB_COLUMNS} FROM scan_jobs WHERE id = %s",
                    (job_id,),
                )
                row = cur.fetchone()
        return self._row_to_job(row) if row is not None else None

    def find_result(self, job_id: str) -> ScanResult | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_RESULT_COLUMNS} FROM scan_results WHERE id = %s",
                    (job_id,),
                )
                row = cur.fetchone()
        return self._row_to_result(row) if row is not None else None

    def list_recent_results(self, limit: int = 20) -> list[ScanResult]:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_RESULT_COLUMNS}
                    FROM scan_results
                    ORDER BY created_at DESC
                    LIMIT %s
                    """,
                    (limit,),
                )
                rows = cur.fetchall()
        return [self._row_to_result(row) for row in rows]

    @staticmethod
    def _row_to_job(row: dict[str, Any]) -> ScanJob:
        return ScanJob(
            id=row["id"],
            file_name=row["file_name"],
            status=ScanStatus(row["status"]),
            created_at=row["created_at"],
            mime_type=row["mime_type"],
            file_size_bytes=row["file_size_bytes"],
            error_message=row["error_message"],
        )

    @staticmethod
    def _row_to_result(row: dict[str, Any]) -> ScanResult:
        return ScanResult(
            id=row["id"],
            file_name=row["file_name"],
            score_total=row["score_total"],
            technical_score=row["technical_score"],
            ia_score=row["ia_score"],
            risk_level=RiskLevel(row["risk_level"]),
            recommendation=row["recommendation"],
            flags=[
                SuspiciousFeature(tag=FeatureTag(flag["type"]), description=flag["description"])
                for flag in row["flags"]
            ],
            justification=row["justification"],
            created_at=row["created_at"],
        )
