"""
engine/
-------
Replay, playback & recording layer.

    from engine import Workspace, PlaybackController, ComparisonController
    from engine import build_log, Sequencer, record, compare
"""

from engine.sequencer  import Step, StepKind, Sequencer, build_log, apply_forward, apply_backward
from engine.timer      import Interval
from engine.recorder   import Recording, RunStats, ComparisonResult, record, compare
from engine.playback   import (
    PlaybackBase, PlaybackController, PlaybackState, ControllerState,
    speed_to_delay, clamp_speed,
)
from engine.comparison import ComparisonController
from engine.workspace  import Workspace

__all__ = [
    "Step",
    "StepKind",
    "Sequencer",
    "build_log",
    "apply_forward",
    "apply_backward",
    "Interval",
    "Recording",
    "RunStats",
    "ComparisonResult",
    "record",
    "compare",
    "PlaybackBase",
    "PlaybackController",
    "PlaybackState",
    "ControllerState",
    "speed_to_delay",
    "clamp_speed",
    "ComparisonController",
    "Workspace",
]
