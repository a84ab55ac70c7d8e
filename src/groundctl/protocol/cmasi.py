""" Message definitions for the subset of the AFRL CMASI series exchanged
    during a mission: commands sent to the air vehicle, and the state and
    configuration reports it sends back. Field names and enumerations
    follow the CMASI definitions; only the fields of interest to the
    ground station are modeled.
"""

import enum
from typing import List

import msgspec

from .factory import default
from .message import Int64, Message, Structure, UInt32


class AltitudeType(enum.IntEnum):
    AGL = 0
    MSL = 1


class CommandStatusType(enum.IntEnum):
    PENDING = 0
    APPROVED = 1
    IN_PROCESS = 2
    EXECUTED = 3
    CANCELLED = 4


class NavigationMode(enum.IntEnum):
    WAYPOINT = 0
    LOITER = 1
    FLIGHT_DIRECTOR = 2
    TARGET_TRACK = 3
    FOLLOW_LEADER = 4
    LOST_COMM = 5


class WavelengthBand(enum.IntEnum):
    ALL_ANY = 0
    EO = 1
    LWIR = 2
    SWIR = 3
    MWIR = 4
    OTHER = 5


class GimbalPointingMode(enum.IntEnum):
    UNKNOWN = 0
    AIRVEHICLE_RELATIVE_ANGLE = 1
    AIRVEHICLE_RELATIVE_SLEW_RATE = 2
    LOS_RELATIVE_SLEW_RATE = 3
    INERTIAL_RELATIVE_SLEW_RATE = 4
    INERTIAL = 5
    STOWED = 6
    STARE = 7


class Location3D(Structure):
    """ A point in space; *latitude* and *longitude* are in degrees,
        *altitude* in meters.
    """

    latitude: float = 0.0
    longitude: float = 0.0
    altitude: float = 0.0
    altitude_type: AltitudeType = AltitudeType.MSL


class VehicleAction(Structure):
    associated_task_list: List[Int64] = []


class Waypoint(Location3D):
    """ A :class:`Location3D` that is also a node in a waypoint plan. The
        *next_waypoint* is the *number* of the waypoint to fly to after this
        one is reached.
    """

    number: Int64 = 0
    next_waypoint: Int64 = 0
    speed: float = 0.0
    climb_rate: float = 0.0
    vehicle_action_list: List[VehicleAction] = []


@default.register
class MissionCommand(Message):
    """ Upload a waypoint plan to an air vehicle and start it at
        *first_waypoint*.
    """

    command_id: Int64 = 0
    vehicle_id: Int64 = 0
    vehicle_action_list: List[VehicleAction] = []
    status: CommandStatusType = CommandStatusType.PENDING
    waypoint_list: List[Waypoint] = []
    first_waypoint: Int64 = 0


@default.register
class AirVehicleState(Message):
    """ Periodic state report from an air vehicle. Angles are in degrees,
        speeds in meters per second, *time* in milliseconds since epoch.
    """

    id: Int64 = 0
    u: float = 0.0
    v: float = 0.0
    w: float = 0.0
    heading: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0
    airspeed: float = 0.0
    vertical_speed: float = 0.0
    location: Location3D = msgspec.field(default_factory=Location3D)
    energy_available: float = 0.0
    current_waypoint: Int64 = 0
    current_command: Int64 = 0
    mode: NavigationMode = NavigationMode.WAYPOINT
    associated_tasks: List[Int64] = []
    time: Int64 = 0


@default.register
class GoToWaypointAction(Message):
    """ Redirect an air vehicle to the waypoint numbered *waypoint_number*
        of its current plan.
    """

    associated_task_list: List[Int64] = []
    waypoint_number: Int64 = 0


@default.register
class CameraAction(Message):
    """ Task the camera payload identified by *payload_id*; the field of
        view is in degrees.
    """

    associated_task_list: List[Int64] = []
    payload_id: Int64 = 0
    horizontal_field_of_view: float = 0.0


@default.register
class CameraConfiguration(Message):
    """ The static capabilities of a camera payload.
    """

    payload_id: Int64 = 0
    payload_kind: str = ''
    supported_wavelength_band: WavelengthBand = WavelengthBand.EO
    field_of_view_mode: int = 0
    min_horizontal_field_of_view: float = 0.0
    max_horizontal_field_of_view: float = 0.0
    discrete_horizontal_field_of_view_list: List[float] = []
    video_stream_horizontal_resolution: UInt32 = 0
    video_stream_vertical_resolution: UInt32 = 0


@default.register
class CameraState(Message):
    """ The current pointing and imaging state of a camera payload,
        including the ground footprint of its field of view.
    """

    payload_id: Int64 = 0
    pointing_mode: GimbalPointingMode = GimbalPointingMode.AIRVEHICLE_RELATIVE_ANGLE
    azimuth: float = 0.0
    elevation: float = 0.0
    rotation: float = 0.0
    horizontal_field_of_view: float = 0.0
    vertical_field_of_view: float = 0.0
    footprint: List[Location3D] = []
    centerpoint: Location3D = msgspec.field(default_factory=Location3D)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
