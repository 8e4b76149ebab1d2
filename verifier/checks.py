"""
Individual verification steps.

Every step takes the run's VerificationReport and records its own failures;
nothing here raises for an anticipated failure mode.
"""
import asyncio
import logging
import platform
import sys
from typing import List, Mapping, Optional, Sequence, Tuple

from sqlalchemy import insert, select, text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from verifier.config import missing_env_vars
from verifier.database import Base
from verifier.enums import DatabaseOutcome, FailureKind
from verifier.models import REFERENCE_VECTOR, SAMPLE_ROWS, ScratchVector
from verifier.schemas import ScratchRow, SimilarityHit, VerificationReport

logger = logging.getLogger(__name__)

MIN_PYTHON = (3, 9)
SEARCH_LIMIT = 3

VERSION_SQL = "SELECT version();"
VECTOR_PROBE_SQL = "SELECT '[1,2,3]'::vector;"
DISTANCE_SQL = "SELECT '[1,2,3]'::vector <-> '[1,2,4]'::vector AS distance;"


# ============================================================
# Local checks
# ============================================================

def check_runtime_version(
    report: VerificationReport,
    version_info: Optional[Tuple[int, ...]] = None,
    minimum: Tuple[int, int] = MIN_PYTHON,
) -> bool:
    version_info = tuple(sys.version_info if version_info is None else version_info)
    print(f"Python version: {'.'.join(str(p) for p in version_info[:3])} ({platform.python_implementation()})")

    if version_info[:2] < minimum:
        required = ".".join(str(p) for p in minimum)
        logger.error(f"Python {required}+ required")
        report.record(FailureKind.UNSUPPORTED_RUNTIME, f"running {version_info[:3]}, need {required}+")
        return False

    print("Python version compatible")
    return True


def check_env_vars(report: VerificationReport, environ: Optional[Mapping[str, str]] = None) -> List[str]:
    missing = missing_env_vars(environ)
    for name in missing:
        logger.error(f"Missing environment variable: {name}")
        report.record(FailureKind.MISSING_ENV_VAR, name)

    if not missing:
        print("Environment variables configured")
    return missing


# ============================================================
# Database steps
# ============================================================

async def fetch_server_version(conn: AsyncConnection) -> str:
    """Short server version, e.g. '16.2' out of 'PostgreSQL 16.2 on ...'."""
    result = await conn.execute(text(VERSION_SQL))
    version = result.scalar_one()
    parts = version.split(" ")
    return parts[1] if len(parts) > 1 else version


async def probe_vector_extension(conn: AsyncConnection) -> None:
    """Raises DBAPIError when the vector type is not installed."""
    await conn.execute(text(VECTOR_PROBE_SQL))


async def compute_distance(conn: AsyncConnection) -> float:
    result = await conn.execute(text(DISTANCE_SQL))
    return float(result.scalar_one())


async def create_scratch_table(conn: AsyncConnection) -> None:
    await conn.run_sync(Base.metadata.create_all, tables=[ScratchVector.__table__], checkfirst=True)


async def insert_sample_rows(conn: AsyncConnection, rows: Sequence[ScratchRow] = SAMPLE_ROWS) -> None:
    await conn.execute(insert(ScratchVector), [row.model_dump() for row in rows])


async def search_similar(
    conn: AsyncConnection,
    reference: Sequence[float] = REFERENCE_VECTOR,
    limit: int = SEARCH_LIMIT,
) -> List[SimilarityHit]:
    distance = ScratchVector.embedding.l2_distance(reference).label("distance")
    result = await conn.execute(
        select(ScratchVector.content, distance)
        .order_by(distance)
        .limit(limit)
    )
    return [
        SimilarityHit(rank=rank, content=content, distance=value)
        for rank, (content, value) in enumerate(result.all(), start=1)
    ]


async def drop_scratch_table(conn: AsyncConnection) -> None:
    await conn.run_sync(ScratchVector.__table__.drop, checkfirst=True)


async def _drop_scratch_table_quietly(conn: AsyncConnection) -> None:
    try:
        await drop_scratch_table(conn)
    except SQLAlchemyError as e:
        logger.warning(f"Could not drop scratch table {ScratchVector.__tablename__}: {e}")


async def run_vector_operations(conn: AsyncConnection, report: VerificationReport) -> DatabaseOutcome:
    """
    Distance query, then a create/insert/search/drop cycle on the scratch table.
    Stops at the first failing statement and still tries to drop the table.
    """
    table_created = False
    try:
        distance = await compute_distance(conn)
        print(f"Vector distance calculation: {distance}")

        table_created = True
        await create_scratch_table(conn)
        await insert_sample_rows(conn)

        hits = await search_similar(conn)
        print("Vector similarity search working:")
        for hit in hits:
            print(f'  {hit.rank}. "{hit.content}" (distance: {hit.distance})')

        await drop_scratch_table(conn)
        table_created = False
    except SQLAlchemyError as e:
        logger.error(f"Vector operations failed: {e}")
        report.record(FailureKind.OPERATION_FAILED, str(e))
        if table_created:
            await _drop_scratch_table_quietly(conn)
        return DatabaseOutcome.OPERATION_FAILURE

    return DatabaseOutcome.SUCCESS


async def run_database_checks(engine: AsyncEngine, report: VerificationReport) -> DatabaseOutcome:
    """
    Connect, read the server version, probe pgvector, then exercise it.
    The connection is released on exit; disposing the pool is the caller's job.
    """
    try:
        async with engine.connect() as conn:
            print("PostgreSQL connection successful")

            version = await fetch_server_version(conn)
            print(f"PostgreSQL version: {version}")

            try:
                await probe_vector_extension(conn)
            except DBAPIError as e:
                logger.error("pgvector extension not found")
                logger.error("   Run: CREATE EXTENSION IF NOT EXISTS vector;")
                report.record(FailureKind.EXTENSION_MISSING, str(e))
                return DatabaseOutcome.EXTENSION_MISSING
            print("pgvector extension working")

            return await run_vector_operations(conn, report)
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
        logger.error(f"PostgreSQL connection failed: {e}")
        report.record(FailureKind.CONNECTION_FAILED, str(e))
        return DatabaseOutcome.CONNECTIVITY_FAILURE
