"""Per-browser driver configuration."""

from collections.abc import Callable
from dataclasses import dataclass

from jsonwire.models import DriverOptions


@dataclass(frozen=True)
class DriverSpec:
    """Describes how to launch one family of driver binaries."""

    name: str
    default_port: int
    build_args: Callable[[DriverOptions], list[str]]


def port_args(options: DriverOptions) -> list[str]:
    """Arguments every driver accepts."""
    return [f"--port={options.port}"]


def _edge_args(options: DriverOptions) -> list[str]:
    # Edge speaks the legacy protocol only when asked to
    return [*port_args(options), "--jwp=true"]


EDGE = DriverSpec(name="Edgedriver", default_port=17556, build_args=_edge_args)
IE11 = DriverSpec(name="IE11driver", default_port=5555, build_args=port_args)
SAFARI = DriverSpec(name="Safaridriver", default_port=9516, build_args=port_args)
