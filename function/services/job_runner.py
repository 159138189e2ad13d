# ============================================================================
# CONTAINER JOB RUNNER
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Function App - Job lifecycle orchestration
# PURPOSE: Submit a container group, poll it to completion, collect logs,
#          and always delete it
# CREATED: 14 SEP 2026
# ============================================================================
"""
Container Job Runner

Drives one container group through its lifecycle:

    VALIDATING -> SUBMITTING -> POLLING -> COLLECTING_OUTPUT -> CLEANING_UP -> DONE
                      |            |
                      +------------+--> CLEANING_UP -> DONE (failed)

- Validation failures return before the provider is even constructed.
- A poll that raises is logged and counted as an inconclusive attempt.
- A log fetch that raises becomes "[LOG FETCH FAILED]: <error>".
- Exactly one delete is attempted per run once the provider exists;
  its outcome is logged and recorded on the result but never changes
  success/state/exit_code.

Azure Functions Python handlers here are synchronous, so polling blocks
with a fixed sleep between attempts. The sleep is injectable for tests.
"""

import logging
import time
from typing import Callable, Optional

from pydantic import ValidationError

from core.errors import InvalidSettingError, JobRunnerError, PollingTimeout, SubmissionError
from core.logging import get_logger, log_checkpoint, log_context, ComponentType
from core.models import (
    ContainerEnvVar,
    ContainerJobSpec,
    JobResult,
    JobStatusSnapshot,
    generate_job_name,
    NO_LOGS_SENTINEL,
    LOG_FETCH_FAILED_PREFIX,
)
from function.config import FunctionConfig, get_config
from infrastructure.container_instances import AzureContainerInstanceClient, ComputeProvider

logger = get_logger(__name__, ComponentType.RUNNER)
_checkpoint_logger = logging.getLogger(__name__)

BANNER = "=" * 39

# ContainerJobSpec field -> env var it is read from
CONTAINER_FIELD_SETTINGS = {
    "container_name": "ACI_CONTAINER_NAME",
    "location": "ACI_LOCATION",
    "cpu": "ACI_CPU",
    "memory_gb": "ACI_MEMORY_GB",
}


def build_job_spec(config: FunctionConfig, job_name: str) -> ContainerJobSpec:
    """
    Build the container group spec for one run from validated config.

    Raises:
        InvalidSettingError: A setting fails the spec constraints (e.g. ACI_CPU=0).
    """
    environment = []
    if config.storage_connection_string:
        environment.append(
            ContainerEnvVar(
                name="AZURE_STORAGE_CONNECTION_STRING",
                secure_value=config.storage_connection_string,
            )
        )
    environment.extend([
        ContainerEnvVar(name="AZURE_STORAGE_CONTAINER", value=config.storage_container or ""),
        ContainerEnvVar(name="APP_ENV", value="production"),
    ])

    try:
        return ContainerJobSpec(
            job_name=job_name,
            container_name=config.container_name,
            image=config.container_image,
            location=config.location,
            cpu=config.cpu,
            memory_gb=config.memory_gb,
            registry_server=config.registry_server,
            identity_id=config.identity_id,
            environment=environment,
        )
    except ValidationError as e:
        invalid = []
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else ""
            setting = CONTAINER_FIELD_SETTINGS.get(field, field)
            if setting not in invalid:
                invalid.append(setting)
        raise InvalidSettingError(invalid) from e


class JobRunner:
    """
    Runs one container job end to end.

    Usage:
        runner = JobRunner()                      # config from env, ACI provider
        runner = JobRunner(config, provider=fake, sleep=lambda s: None)
        result = runner.run()
    """

    def __init__(
        self,
        config: Optional[FunctionConfig] = None,
        provider: Optional[ComputeProvider] = None,
        sleep: Callable[[float], None] = time.sleep,
        name_factory: Callable[[], str] = generate_job_name,
    ):
        self._config = config or get_config()
        self._provider = provider
        self._sleep = sleep
        self._name_factory = name_factory

    @property
    def config(self) -> FunctionConfig:
        return self._config

    def _get_provider(self) -> ComputeProvider:
        """Provider is built lazily so a config failure makes no Azure calls."""
        if self._provider is None:
            self._provider = AzureContainerInstanceClient.from_config(self._config)
        return self._provider

    # ========================================================================
    # RUN
    # ========================================================================

    def run(self) -> JobResult:
        """
        Run one job. Never raises for run failures.

        Returns:
            JobResult. success is True only for a terminal state with exit code 0.
        """
        started = time.monotonic()
        job_name = self._name_factory()

        with log_context(job_name=job_name, container_name=self._config.container_name):
            logger.info(BANNER)
            logger.info(f"Starting container run: {job_name}")
            logger.info(BANNER)

            # VALIDATING
            try:
                self._config.validate()
                spec = build_job_spec(self._config, job_name)
            except JobRunnerError as e:
                logger.error(f"Configuration invalid: {e}")
                result = JobResult.from_error(job_name, e)
                return self._finish(result, started)

            provider = self._get_provider()

            try:
                result = self._execute(provider, spec)
            except JobRunnerError as e:
                logger.error(f"Critical error: {e}")
                result = JobResult.from_error(job_name, e)
            finally:
                # CLEANING_UP - exactly once, whatever happened above
                cleanup_ok = self._cleanup(provider, job_name)

            result = result.model_copy(update={
                "cleanup_attempted": True,
                "cleanup_succeeded": cleanup_ok,
            })

            if result.completed:
                logger.info(BANNER)
                logger.info(f"Container finished | Exit: {result.exit_code}")
                logger.info(BANNER)

            return self._finish(result, started)

    def _finish(self, result: JobResult, started: float) -> JobResult:
        duration = round(time.monotonic() - started, 2)
        log_checkpoint(
            "job_done",
            {"success": result.success, "state": result.state, "exit_code": result.exit_code},
            logger=_checkpoint_logger,
        )
        return result.model_copy(update={"duration_seconds": duration})

    def _execute(self, provider: ComputeProvider, spec: ContainerJobSpec) -> JobResult:
        """SUBMITTING -> POLLING -> COLLECTING_OUTPUT."""
        self._submit(provider, spec)
        status = self._wait_for_terminal(provider, spec.job_name)
        logs = self._fetch_logs(provider, spec)

        logger.info("===== CONTAINER LOGS =====")
        logger.info(logs)
        logger.info("===== END OF LOGS =====")

        return JobResult.from_terminal(spec.job_name, status, logs)

    # ========================================================================
    # STATES
    # ========================================================================

    def _submit(self, provider: ComputeProvider, spec: ContainerJobSpec) -> None:
        logger.info(
            f"Submitting container group {spec.job_name} "
            f"(image={spec.image}, cpu={spec.cpu}, memory={spec.memory_gb}GB)"
        )
        try:
            provider.create_job(spec)
        except SubmissionError:
            raise
        except Exception as e:
            raise SubmissionError(str(e), job_name=spec.job_name) from e
        log_checkpoint("job_submitted", {"image": spec.image}, logger=_checkpoint_logger)

    def _wait_for_terminal(self, provider: ComputeProvider, job_name: str) -> JobStatusSnapshot:
        """
        Poll until a terminal state or the attempt budget is exhausted.

        Each attempt sleeps first, then queries.

        Raises:
            PollingTimeout: No terminal state observed within max_poll_attempts.
        """
        interval = self._config.poll_interval_seconds
        max_attempts = self._config.max_poll_attempts

        logger.info("Waiting for container to reach terminal state...")
        for attempt in range(1, max_attempts + 1):
            self._sleep(interval)
            try:
                status = provider.get_job_status(job_name)
            except Exception as e:
                logger.warning(
                    f"Unable to fetch container state (attempt {attempt}/{max_attempts}): {e}"
                )
                continue

            logger.info(f"{status.describe()} (attempt {attempt}/{max_attempts})")
            if status.is_terminal:
                log_checkpoint(
                    "job_terminal",
                    {"state": status.state, "exit_code": status.exit_code, "attempts": attempt},
                    logger=_checkpoint_logger,
                )
                return status

        raise PollingTimeout(job_name, max_attempts)

    def _fetch_logs(self, provider: ComputeProvider, spec: ContainerJobSpec) -> str:
        try:
            content = provider.list_logs(
                spec.job_name,
                spec.container_name,
                self._config.log_tail_lines,
            )
        except Exception as e:
            logger.warning(f"Failed to fetch logs: {e}")
            return f"{LOG_FETCH_FAILED_PREFIX}: {e}"

        log_checkpoint("job_logs_captured", logger=_checkpoint_logger)
        return content or NO_LOGS_SENTINEL

    def _cleanup(self, provider: ComputeProvider, job_name: str) -> bool:
        """Single bounded delete attempt. Failures are warnings only."""
        try:
            provider.delete_job(job_name, timeout_seconds=self._config.cleanup_timeout_seconds)
        except Exception as e:
            logger.warning(f"Cleanup failed: {e}")
            return False

        logger.info(f"Container group {job_name} deleted")
        log_checkpoint("job_cleaned_up", logger=_checkpoint_logger)
        return True


__all__ = ["JobRunner", "build_job_spec"]
