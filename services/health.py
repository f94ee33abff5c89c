"""
Health probes for liveness and readiness checks.

Liveness  (/health/live)  — is the process running?
Readiness (/health/ready) — is at least one TTS provider configured?

Readiness does not call the vendors; use the CLI ``test`` command or
TTSProvider.is_available() for a live connectivity check.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, Optional

from services.tts import TTSService


@dataclass
class CheckResult:
    healthy: bool
    message: str
    details: Optional[Dict] = field(default=None)


class HealthChecker:
    """Liveness and readiness health checks for one TTSService."""

    def __init__(self, service: TTSService):
        self.service = service
        self.start_time = time.time()

    def liveness(self) -> CheckResult:
        """Liveness probe — always healthy if the process is alive."""
        return CheckResult(
            healthy=True,
            message="Process is running",
            details={"uptime_seconds": round(time.time() - self.start_time, 1)},
        )

    def readiness(self) -> CheckResult:
        """Readiness probe — healthy only when some provider is configured."""
        configured = self.service.get_configured_providers()
        providers = {
            name.value: self.service.get_provider(name).get_info() for name in configured
        }
        if not configured:
            return CheckResult(
                healthy=False,
                message="No TTS providers configured",
                details={"providers": providers, "default": self.service.get_default_provider()},
            )
        return CheckResult(
            healthy=True,
            message=f"{len(configured)} TTS provider(s) configured",
            details={"providers": providers, "default": self.service.get_default_provider()},
        )
