"""Domain ports: contracts implemented outside the domain."""

from lineheat.domain.ports.instrumenter import Instrumenter
from lineheat.domain.ports.reporter import ReporterProtocol

__all__ = ["Instrumenter", "ReporterProtocol"]
