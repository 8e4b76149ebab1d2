import asyncio
import logging
import os
import sys
from typing import Mapping, Optional

from logging_config import setup_logging
from verifier.checks import check_env_vars, check_runtime_version, run_database_checks
from verifier.config import ConnectionConfig, load_environment
from verifier.database import open_pool
from verifier.enums import FailureKind
from verifier.schemas import VerificationReport

logger = logging.getLogger(__name__)


def print_summary(report: VerificationReport) -> None:
    if report.passed:
        print("\nSetup verification complete!")
        print("Ready to build advanced RAG systems!")
    else:
        print("\nSetup verification failed")
        print("Please fix the issues above and run again")


async def verify_setup(environ: Optional[Mapping[str, str]] = None) -> VerificationReport:
    """
    Run every check in order and return the report.
    Does not exit; main() turns the report into an exit code.
    """
    print("Verifying Development Environment Setup")
    print("=" * 50)

    report = VerificationReport()
    check_runtime_version(report)
    check_env_vars(report, environ)

    try:
        config = ConnectionConfig.from_env(environ)
    except ValueError as e:
        logger.error(f"Invalid POSTGRES_PORT: {e}")
        report.record(FailureKind.INVALID_ENV_VAR, "POSTGRES_PORT")
    else:
        async with open_pool(config) as engine:
            outcome = await run_database_checks(engine, report)
        logger.debug(f"Database checks finished: {outcome.value}")

    print_summary(report)
    return report


def main() -> None:
    load_environment()
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))

    try:
        report = asyncio.run(verify_setup())
    except Exception:
        logger.exception("Unexpected error during setup verification")
        raise

    sys.exit(report.exit_code)


if __name__ == "__main__":
    main()
