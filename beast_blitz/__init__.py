"""beast_blitz - A timed specimen-matching game engine."""

from beast_blitz.catalogue import (
    Diet,
    Habitat,
    Locomotion,
    Size,
    Specimen,
    SpecimenCatalogue,
    default_catalogue,
)
from beast_blitz.commands import (
    Command,
    CommandQueue,
    StartSession,
    SubmitSelections,
    TerminateSession,
    make_command_system,
)
from beast_blitz.config import DifficultyTier, SessionConfig, TierConfig
from beast_blitz.engine import Engine
from beast_blitz.preferences import Preferences
from beast_blitz.results import ResultRecord, ResultStore
from beast_blitz.riddles import Riddle, RiddleComplexity, RiddleGenerator, RiddleTemplate
from beast_blitz.runner import SessionRunner
from beast_blitz.session import GameSession, SessionState, create_session
from beast_blitz.signals import SignalBus
from beast_blitz.store import KeyValueStore, MemoryStore
from beast_blitz.types import (
    EmptyCatalogueError,
    InvalidTransition,
    StoreError,
    TickContext,
)

__all__ = [
    "Command",
    "CommandQueue",
    "Diet",
    "DifficultyTier",
    "EmptyCatalogueError",
    "Engine",
    "GameSession",
    "Habitat",
    "InvalidTransition",
    "KeyValueStore",
    "Locomotion",
    "MemoryStore",
    "Preferences",
    "ResultRecord",
    "ResultStore",
    "Riddle",
    "RiddleComplexity",
    "RiddleGenerator",
    "RiddleTemplate",
    "SessionConfig",
    "SessionRunner",
    "SessionState",
    "SignalBus",
    "Size",
    "Specimen",
    "SpecimenCatalogue",
    "StartSession",
    "StoreError",
    "SubmitSelections",
    "TerminateSession",
    "TickContext",
    "TierConfig",
    "create_session",
    "default_catalogue",
    "make_command_system",
]
