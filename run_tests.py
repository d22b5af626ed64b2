#!/usr/bin/env python3
# ================================================================================
# Test Runner Script
# ================================================================================
#
# Main entry point for executing test suites with the execution report
# enabled.
#
# Features:
#   - Run unit tests or everything under testsuites/
#   - Parallel execution through pytest-xdist
#   - Console summary + HTML execution report
#   - Optional Allure report generation
#
# Usage:
#   python run_tests.py --suite unit
#   python run_tests.py --suite all --parallel 4 --reports-dir reports/execution
#   python run_tests.py --tags smoke --no-allure
#
# ================================================================================

import argparse
import subprocess
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from loguru import logger


# Configure logging
logger.remove()
logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    level="INFO"
)

SUITE_PATHS = {
    "unit": "testsuites/unit",
    "all": "testsuites/",
}


class TestRunner:
    """
    Main test runner class for orchestrating test execution.

    This class handles:
    - Test suite selection and execution
    - Parallel execution configuration
    - Execution and Allure report generation
    """

    __test__ = False

    def __init__(
        self,
        suite: str = "all",
        tags: Optional[List[str]] = None,
        parallel: int = 1,
        reports_dir: Optional[str] = None,
        suite_name: Optional[str] = None,
        allure_report: bool = True,
        verbose: bool = False
    ):
        """
        Initialize test runner.

        Args:
            suite: Test suite to run - "unit", "all"
            tags: List of pytest markers to filter tests
            parallel: Number of parallel workers
            reports_dir: Directory for HTML execution reports
            suite_name: Suite name shown in the execution report
            allure_report: Generate Allure report
            verbose: Enable verbose output
        """
        self.suite = suite
        self.tags = tags or []
        self.parallel = parallel
        self.suite_name = suite_name
        self.allure_report = allure_report
        self.verbose = verbose

        # Paths
        self.root_dir = Path(__file__).parent
        self.reports_dir = self.root_dir / "reports"
        self.execution_reports = Path(reports_dir) if reports_dir else self.reports_dir / "execution"
        self.allure_results = self.reports_dir / "allure-results"
        self.allure_report_dir = self.reports_dir / "allure-report"

    def run(self) -> int:
        """
        Execute the test run.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        logger.info("=" * 60)
        logger.info("Starting Test Execution")
        logger.info("=" * 60)
        logger.info(f"Suite: {self.suite}")
        logger.info(f"Tags: {self.tags or 'All'}")
        logger.info(f"Parallel Workers: {self.parallel}")
        logger.info(f"Execution Reports: {self.execution_reports}")
        logger.info("=" * 60)

        self._prepare_environment()

        cmd = self.build_pytest_command()
        logger.info(f"Executing: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, cwd=str(self.root_dir))
            exit_code = result.returncode
        except OSError as e:
            logger.error(f"Test execution failed: {e}")
            exit_code = 1

        if self.allure_report:
            self._generate_allure_report()

        self._print_summary(exit_code)

        return exit_code

    def _prepare_environment(self) -> None:
        """Prepare test environment."""
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        if self.allure_report:
            self.allure_results.mkdir(parents=True, exist_ok=True)
        logger.debug("Environment prepared")

    def build_pytest_command(self) -> List[str]:
        """Build the pytest command with all options."""
        cmd = [sys.executable, "-m", "pytest", SUITE_PATHS[self.suite]]

        # Execution report plugin
        cmd.extend([
            "-p", "autotest_reporting.pytest_plugin",
            "--execution-report",
            "--reports-dir", str(self.execution_reports),
        ])
        if self.suite_name:
            cmd.extend(["--report-suite-name", self.suite_name])

        if self.tags:
            cmd.extend(["-m", " or ".join(self.tags)])

        if self.parallel > 1:
            cmd.extend(["-n", str(self.parallel)])

        if self.allure_report:
            cmd.extend(["--alluredir", str(self.allure_results)])

        cmd.append("-v" if self.verbose else "-q")
        return cmd

    def _generate_allure_report(self) -> None:
        """Generate Allure HTML report."""
        logger.info("Generating Allure report...")

        try:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            report_path = self.reports_dir / f"allure-report-{timestamp}"

            subprocess.run([
                "allure", "generate",
                str(self.allure_results),
                "-o", str(report_path),
                "--clean"
            ], check=True)

            latest_link = self.allure_report_dir
            if latest_link.is_symlink():
                latest_link.unlink()
            elif latest_link.exists():
                import shutil
                shutil.rmtree(latest_link)

            latest_link.symlink_to(report_path.name)

            logger.info(f"Report generated: {report_path}")
            logger.info(f"Latest report: {self.allure_report_dir}")

        except FileNotFoundError:
            logger.warning("Allure CLI not found. Please install Allure to generate reports.")
        except (OSError, subprocess.CalledProcessError) as e:
            logger.error(f"Failed to generate Allure report: {e}")

    def _print_summary(self, exit_code: int) -> None:
        """Print test execution summary."""
        logger.info("=" * 60)
        if exit_code == 0:
            logger.info("✅ TEST EXECUTION COMPLETED SUCCESSFULLY")
        else:
            logger.error(f"❌ TEST EXECUTION FAILED (exit code: {exit_code})")

        logger.info(f"📊 Execution reports in: {self.execution_reports}")
        if self.allure_report:
            logger.info(f"📊 Allure report available at: {self.allure_report_dir}")

        logger.info("=" * 60)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="API Automation Test Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run unit tests
  python run_tests.py --suite unit

  # Run everything on 4 workers
  python run_tests.py --suite all --parallel 4

  # Custom report location and suite name, no Allure
  python run_tests.py --reports-dir /tmp/reports --suite-name "Nightly" --no-allure
        """
    )

    parser.add_argument(
        "--suite",
        choices=sorted(SUITE_PATHS),
        default="all",
        help="Test suite to run (default: all)"
    )

    parser.add_argument(
        "--tags",
        nargs="+",
        default=[],
        help="Pytest markers to filter tests (e.g., smoke regression)"
    )

    parser.add_argument(
        "--parallel", "-n",
        type=int,
        default=1,
        help="Number of parallel workers (default: 1)"
    )

    parser.add_argument(
        "--reports-dir",
        default=None,
        help="Directory for HTML execution reports (default: reports/execution)"
    )

    parser.add_argument(
        "--suite-name",
        default=None,
        help="Suite name shown in the execution report"
    )

    parser.add_argument(
        "--no-allure",
        action="store_true",
        help="Disable Allure report generation"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    return parser


def main():
    """Main entry point."""
    args = build_parser().parse_args()

    runner = TestRunner(
        suite=args.suite,
        tags=args.tags,
        parallel=args.parallel,
        reports_dir=args.reports_dir,
        suite_name=args.suite_name,
        allure_report=not args.no_allure,
        verbose=args.verbose
    )

    sys.exit(runner.run())


if __name__ == "__main__":
    main()
