"""Configuration model for the radio control container."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional


@dataclass
class NetworkConfig:
    bind_address: str = "0.0.0.0"
    command_port: int = 8080


@dataclass
class TelemetryConfig:
    sse_port: int = 0  # 0 means command_port + 1
    heartbeat_interval: timedelta = timedelta(seconds=30)
    event_buffer_size: int = 512
    event_retention: timedelta = timedelta(hours=24)
    max_sse_clients: int = 8
    client_idle_timeout: timedelta = timedelta(seconds=60)


@dataclass
class SecurityConfig:
    token_secret: str = ""
    allow_unauthenticated_dev_access: bool = False
    allowed_roles: list[str] = field(default_factory=list)
    token_ttl: timedelta = timedelta(seconds=300)


@dataclass
class RadioEntry:
    id: str = ""
    adapter: str = ""
    endpoint: str = ""
    description: Optional[str] = None


@dataclass
class TimingProfile:
    normal_probe: timedelta = timedelta(seconds=30)
    recovering_probe: timedelta = timedelta(seconds=10)
    offline_probe: timedelta = timedelta(seconds=60)


@dataclass
class ContainerInfo:
    container_id: str = ""
    deployment: str = ""
    soldier_id: str = ""


@dataclass
class ServiceDiscoveryConfig:
    enabled: bool = True
    port: int = 9999
    ttl: int = 60
    startup_burst_count: int = 1
    startup_burst_spacing_ms: int = 1000
    bind_address: str = "0.0.0.0"
    interface_hint: Optional[str] = None


@dataclass
class Config:
    """Complete service configuration."""

    container: ContainerInfo = field(default_factory=ContainerInfo)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    service_discovery: ServiceDiscoveryConfig = field(default_factory=ServiceDiscoveryConfig)
    timing: TimingProfile = field(default_factory=TimingProfile)
    radios: list[RadioEntry] = field(default_factory=list)

    def effective_sse_port(self) -> int:
        """The SSE port, defaulting to the command port plus one (16-bit)."""
        if self.telemetry.sse_port > 0:
            return self.telemetry.sse_port
        return (self.network.command_port + 1) & 0xFFFF