"""Bundled interpreters, one per effect context."""

from freestore.interpreters.async_ import AsyncInterpreter
from freestore.interpreters.memory import InMemoryInterpreter, SafeInterpreter
from freestore.interpreters.recording import RecordingInterpreter
from freestore.interpreters.simulation import SimulationInterpreter
from freestore.interpreters.state import StateInterpreter

__all__ = [
    "AsyncInterpreter",
    "InMemoryInterpreter",
    "RecordingInterpreter",
    "SafeInterpreter",
    "SimulationInterpreter",
    "StateInterpreter",
]
