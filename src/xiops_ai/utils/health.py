"""Health check utilities for the AI backend configuration.

This module answers "would an analysis work right now?" without sending a
generation request:
- Check that a provider is configured and recognized
- Check that hosted providers have a credential
- Probe the local backend for liveness
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

import structlog

from xiops_ai.models.analysis import Provider
from xiops_ai.utils.logging import LogEventNames

if TYPE_CHECKING:
    from xiops_ai.config.schema import AISettings
    from xiops_ai.interfaces.llm import TextGenerator

log = structlog.get_logger()


class HealthStatus(StrEnum):
    """Health check status values."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
    UNKNOWN = "unknown"


@dataclass
class CheckResult:
    """Result of a single health check."""

    name: str
    status: HealthStatus
    message: str
    latency_ms: float | None = None
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class HealthReport:
    """Overall health report."""

    healthy: bool
    status: HealthStatus
    timestamp: datetime
    checks: list[CheckResult]
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "healthy": self.healthy,
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
            "checks": [
                {
                    "name": c.name,
                    "status": c.status.value,
                    "message": c.message,
                    "latency_ms": c.latency_ms,
                    "details": c.details,
                }
                for c in self.checks
            ],
            "details": self.details,
        }


class HealthChecker:
    """Checks that the configured AI backend is usable.

    Example:
        checker = HealthChecker(load_settings())
        report = checker.run_all_checks()
        if not report.healthy:
            print(report.to_dict())
    """

    def __init__(self, settings: AISettings, generator: TextGenerator | None = None) -> None:
        """Initialize the health checker.

        Args:
            settings: AI settings to check
            generator: Transport used for the liveness probe
        """
        if generator is None:
            from xiops_ai.adapters.llm.http import HTTPTextGenerator

            generator = HTTPTextGenerator()
        self._settings = settings
        self._generator = generator

    def run_all_checks(self) -> HealthReport:
        """Run all health checks and return a report."""
        log.info(LogEventNames.HEALTH_CHECK_START)
        start_time = datetime.now(UTC)

        checks = [
            self._check_config(),
            self._check_credentials(),
            self._check_backend(),
        ]

        if all(c.status == HealthStatus.HEALTHY for c in checks):
            overall_status = HealthStatus.HEALTHY
            healthy = True
        elif any(c.status == HealthStatus.UNHEALTHY for c in checks):
            overall_status = HealthStatus.UNHEALTHY
            healthy = False
        else:
            overall_status = HealthStatus.DEGRADED
            healthy = True

        report = HealthReport(
            healthy=healthy,
            status=overall_status,
            timestamp=start_time,
            checks=checks,
            details={
                "total_checks": len(checks),
                "healthy_checks": sum(1 for c in checks if c.status == HealthStatus.HEALTHY),
                "degraded_checks": sum(1 for c in checks if c.status == HealthStatus.DEGRADED),
                "unhealthy_checks": sum(1 for c in checks if c.status == HealthStatus.UNHEALTHY),
            },
        )

        log.info(
            LogEventNames.HEALTH_CHECK_COMPLETE,
            healthy=healthy,
            status=overall_status.value,
            checks_run=len(checks),
        )

        return report

    def _check_config(self) -> CheckResult:
        """Check that a known provider is selected."""
        provider = self._settings.resolve_provider()

        if provider is None:
            return CheckResult(
                name="config",
                status=HealthStatus.UNHEALTHY,
                message="AI provider not configured (set AI_PROVIDER)",
            )

        if provider is Provider.UNKNOWN:
            return CheckResult(
                name="config",
                status=HealthStatus.UNHEALTHY,
                message=f"Unknown AI provider: {self._settings.ai_provider}",
            )

        return CheckResult(
            name="config",
            status=HealthStatus.HEALTHY,
            message="Configuration valid",
            details={
                "provider": provider.value,
                "model": self._settings.resolve_model(provider),
            },
        )

    def _check_credentials(self) -> CheckResult:
        """Check that hosted providers have an API key."""
        provider = self._settings.resolve_provider()

        if provider is None or provider is Provider.UNKNOWN:
            return CheckResult(
                name="credentials",
                status=HealthStatus.UNKNOWN,
                message="No usable provider, skipping",
            )

        if not provider.is_hosted:
            return CheckResult(
                name="credentials",
                status=HealthStatus.HEALTHY,
                message=f"{provider.value} needs no API key",
            )

        if not self._settings.resolve_api_key(provider):
            return CheckResult(
                name="credentials",
                status=HealthStatus.UNHEALTHY,
                message=f"API key not configured for {provider.value}",
            )

        return CheckResult(
            name="credentials",
            status=HealthStatus.HEALTHY,
            message="API key configured",
            details={"api_key_present": True},
        )

    def _check_backend(self) -> CheckResult:
        """Probe the local backend; hosted backends are not contacted."""
        from xiops_ai.adapters.llm.providers import PROBE_TIMEOUT, ollama_probe_url

        provider = self._settings.resolve_provider()

        if provider is not None and provider.is_hosted:
            return CheckResult(
                name="backend",
                status=HealthStatus.HEALTHY,
                message="Hosted backend, not probed",
            )

        if provider is not Provider.OLLAMA:
            return CheckResult(
                name="backend",
                status=HealthStatus.UNKNOWN,
                message="No backend to probe",
            )

        url = self._settings.ollama_url
        start = time.monotonic()
        alive = self._generator.probe(ollama_probe_url(url), PROBE_TIMEOUT)
        latency = (time.monotonic() - start) * 1000

        if alive:
            return CheckResult(
                name="backend",
                status=HealthStatus.HEALTHY,
                message=f"Ollama reachable at {url}",
                latency_ms=latency,
            )

        log.info(LogEventNames.HEALTH_CHECK_FAILED, check="backend", url=url)
        return CheckResult(
            name="backend",
            status=HealthStatus.UNHEALTHY,
            message=f"Ollama not running at {url}",
            latency_ms=latency,
            details={"hint": "Start with: ollama serve"},
        )
