"""
Mission Script

Runs an ordered sequence of exchange steps, grouped into named phases, one
step at a time. A failed step whose criticality is FATAL aborts the
mission; any other failure is logged and the mission carries on.

Usage:
    script = rescue_mission()
    result = script.run(exchange)
    sys.exit(result.exit_code)
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .exchange import Exchange, ReceiveStep, SendStep, Step, StepResult
from .protocol import cmasi
from .protocol.topic import DEFAULT_NAMESPACE

logger = logging.getLogger(__name__)


class MissionStatus(enum.Enum):
    COMPLETED = "completed"   # Every step was attempted
    ABORTED = "aborted"       # Halted on a fatal step failure


@dataclass
class Phase:
    """A named group of steps, such as one command and its response."""
    name: str
    steps: List[Step] = field(default_factory=list)


@dataclass
class MissionResult:
    """Outcome of a mission run."""
    status: MissionStatus
    results: List[StepResult] = field(default_factory=list)
    failed: Optional[StepResult] = None
    elapsed_time: float = 0.0

    @property
    def exit_code(self) -> int:
        """Process exit status: 0 if the mission completed, 1 if it aborted."""
        return 0 if self.status is MissionStatus.COMPLETED else 1

    @property
    def sends(self) -> int:
        return sum(1 for result in self.results if result.kind == "send")

    @property
    def receives(self) -> int:
        return sum(1 for result in self.results if result.kind == "receive")


class MissionScript:
    """
    A linear mission: phases run in order, steps within a phase run in
    order, and step N+1 never starts before step N has finished.

    The script itself holds no connection state; it is run against an
    :class:`Exchange`, and can be run more than once.
    """

    def __init__(self, name: str, phases: List[Phase]):
        self.name = name
        self.phases = list(phases)

    def __repr__(self) -> str:
        return f"MissionScript({self.name!r}, {[phase.name for phase in self.phases]!r})"

    def steps(self) -> Iterator[Step]:
        for phase in self.phases:
            yield from phase.steps

    def receive_topics(self, namespace: str = DEFAULT_NAMESPACE) -> List[str]:
        """
        Topics the read channel must be subscribed to before the run,
        without duplicates, in the order they are first needed.
        """
        topics = []
        for step in self.steps():
            if isinstance(step, ReceiveStep):
                topic = step.topic(namespace)
                if topic not in topics:
                    topics.append(topic)
        return topics

    def run(self, exchange: Exchange) -> MissionResult:
        """
        Run every step against *exchange*.

        One buffer is allocated for the run and handed to each step in
        turn; a step owns it only for the duration of its own send or
        receive.
        """
        start_time = time.time()
        buffer = bytearray()
        results: List[StepResult] = []

        logger.info("Mission '%s' starting", self.name)

        for phase in self.phases:
            logger.info("[%s] Starting...", phase.name.upper())

            for step in phase.steps:
                result = step.run(exchange, buffer)
                results.append(result)

                if result.fatal:
                    elapsed = time.time() - start_time
                    logger.error("[%s] %s failed, aborting mission: %s", phase.name.upper(), step.name, result.error)
                    return MissionResult(MissionStatus.ABORTED, results, result, elapsed)

                if not result.succeeded:
                    logger.warning("[%s] %s failed, continuing: %s", phase.name.upper(), step.name, result.error)

            logger.info("[%s] COMPLETED", phase.name.upper())

        elapsed = time.time() - start_time
        logger.info("Mission '%s' completed in %.1fs", self.name, elapsed)
        return MissionResult(MissionStatus.COMPLETED, results, None, elapsed)


# Rescue mission

VEHICLE_ID = 400
CAMERA_PAYLOAD_ID = 1
RESCUE_WAYPOINT = 3

# A short plan out to the rescue site, in degrees and meters MSL.

RESCUE_PLAN = (
    (1, 45.3171, -120.9923, 700.0),
    (2, 45.3302, -120.9671, 700.0),
    (3, 45.3389, -120.9410, 650.0),
    (4, 45.3402, -120.9388, 650.0),
)


def plan_rescue(command: cmasi.MissionCommand) -> None:
    waypoints = []
    for number, latitude, longitude, altitude in RESCUE_PLAN:
        waypoints.append(cmasi.Waypoint(
            number=number,
            next_waypoint=number + 1 if number < len(RESCUE_PLAN) else number,
            latitude=latitude,
            longitude=longitude,
            altitude=altitude,
            speed=22.0,
        ))

    command.command_id = 1
    command.vehicle_id = VEHICLE_ID
    command.status = cmasi.CommandStatusType.APPROVED
    command.waypoint_list = waypoints
    command.first_waypoint = waypoints[0].number


def go_to_rescue_site(action: cmasi.GoToWaypointAction) -> None:
    action.waypoint_number = RESCUE_WAYPOINT


def widen_camera(action: cmasi.CameraAction) -> None:
    action.payload_id = CAMERA_PAYLOAD_ID
    action.horizontal_field_of_view = 45.0


def narrow_camera(action: cmasi.CameraAction) -> None:
    action.payload_id = CAMERA_PAYLOAD_ID
    action.horizontal_field_of_view = 10.0


def rescue_mission() -> MissionScript:
    """
    The rescue mission: fly the vehicle to the rescue site, then task its
    camera to scan the area.

    Returns:
        MissionScript with a "rescue routine" and a "scan routine" phase
    """
    rescue = Phase("rescue routine", [
        SendStep(cmasi.MissionCommand, plan_rescue),
        ReceiveStep(cmasi.AirVehicleState),
        SendStep(cmasi.GoToWaypointAction, go_to_rescue_site),
        ReceiveStep(cmasi.AirVehicleState),
    ])

    scan = Phase("scan routine", [
        SendStep(cmasi.CameraAction, widen_camera),
        ReceiveStep(cmasi.CameraConfiguration),
        SendStep(cmasi.CameraAction, narrow_camera),
        ReceiveStep(cmasi.CameraState),
    ])

    return MissionScript("rescue", [rescue, scan])
