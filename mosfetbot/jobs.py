"""Jobs that shuttles can apply for, and the board that ranks the applications."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable

from mosfetbot.logger import get_logger

PRIORITY_DEFENDER = 7
PRIORITY_RELIC_MINER = 6
PRIORITY_RELIC_MINING_NAVIGATOR = 5
PRIORITY_HALO_NODE_EXPLORER = 4
PRIORITY_HALO_NODE_NAVIGATOR = 3
PRIORITY_TRAILBLAZER_NAVIGATOR = 2
PRIORITY_RECHARGE = 1
PRIORITY_RANDOM = 0

JOB_PRIORITY_MULTIPLIER = 1000


class JobType(IntEnum):
    RELIC_MINER = 0
    HALO_NODE_EXPLORER = 1
    DEFENDER = 2
    TRAILBLAZER_NAVIGATOR = 3
    RELIC_MINING_NAVIGATOR = 4
    HALO_NODE_NAVIGATOR = 5
    RECHARGE = 6


_PRIORITIES = {
    JobType.RELIC_MINER: PRIORITY_RELIC_MINER,
    JobType.HALO_NODE_EXPLORER: PRIORITY_HALO_NODE_EXPLORER,
    JobType.DEFENDER: PRIORITY_DEFENDER,
    JobType.RELIC_MINING_NAVIGATOR: PRIORITY_RELIC_MINING_NAVIGATOR,
    JobType.HALO_NODE_NAVIGATOR: PRIORITY_HALO_NODE_NAVIGATOR,
    JobType.TRAILBLAZER_NAVIGATOR: PRIORITY_TRAILBLAZER_NAVIGATOR,
    JobType.RECHARGE: PRIORITY_RECHARGE,
}

_LABELS = {
    JobType.RELIC_MINER: "Relic Miner",
    JobType.HALO_NODE_EXPLORER: "Halo Node Explorer",
    JobType.DEFENDER: "Defender",
    JobType.RELIC_MINING_NAVIGATOR: "Relic Mining Navigator",
    JobType.HALO_NODE_NAVIGATOR: "Halo Node Navigator",
    JobType.TRAILBLAZER_NAVIGATOR: "Trailblazer Navigator",
}

# Action id -> (dx, dy); anything else leaves the shuttle in place.
_ACTION_OFFSETS = {1: (0, -1), 2: (1, 0), 3: (0, 1), 4: (-1, 0)}


def job_type_label(job_type: JobType) -> str:
    """Human readable name of a job type; ``Unknown`` for types without one."""
    return _LABELS.get(job_type, "Unknown")


def _log(message: str) -> None:
    get_logger().log("JobBoard -> " + message)


class Job:
    """A unit of work targeting one map tile."""

    def __init__(self, id: int, job_type: JobType, target_x: int = 0, target_y: int = 0) -> None:
        self.id = id
        self.job_type = job_type
        self.target_x = target_x
        self.target_y = target_y
        self.priority = _PRIORITIES.get(job_type, PRIORITY_RANDOM)

    def __str__(self) -> str:
        return (
            f"Job: id={self.id}, type={job_type_label(self.job_type)}, "
            f"target=({self.target_x}, {self.target_y})"
        )


class RechargeJob(Job):
    def __init__(self, id: int) -> None:
        super().__init__(id, JobType.RECHARGE)
        self.preferred_shuttle = -1


class RelicMinerJob(Job):
    def __init__(self, id: int, vantage_point_x: int, vantage_point_y: int) -> None:
        super().__init__(id, JobType.RELIC_MINER, vantage_point_x, vantage_point_y)


class NavigatorJob(Job):
    def __init__(self, id: int, destination_x: int, destination_y: int, job_type: JobType) -> None:
        super().__init__(id, job_type, destination_x, destination_y)


class RelicMiningNavigatorJob(NavigatorJob):
    def __init__(self, id: int, destination_x: int, destination_y: int) -> None:
        super().__init__(id, destination_x, destination_y, JobType.RELIC_MINING_NAVIGATOR)


class HaloNodeNavigatorJob(NavigatorJob):
    def __init__(self, id: int, destination_x: int, destination_y: int) -> None:
        super().__init__(id, destination_x, destination_y, JobType.HALO_NODE_NAVIGATOR)


class TrailblazerNavigatorJob(NavigatorJob):
    def __init__(self, id: int, destination_x: int, destination_y: int) -> None:
        super().__init__(id, destination_x, destination_y, JobType.TRAILBLAZER_NAVIGATOR)


class HaloNodeExplorerJob(Job):
    def __init__(self, id: int, halo_node_x: int, halo_node_y: int) -> None:
        super().__init__(id, JobType.HALO_NODE_EXPLORER, halo_node_x, halo_node_y)


class DefenderJob(Job):
    def __init__(self, id: int, opponent_position_x: int, opponent_position_y: int) -> None:
        super().__init__(id, JobType.DEFENDER, opponent_position_x, opponent_position_y)
        self.all_opponent_positions: list[tuple[int, int]] = []
        self.kills = 0
        self.opponent_energy_loss = 0
        self.is_relic_mining_opponent = False
        self.defend_by_collision = False
        self.preferred_shuttle = -1


class JobApplicationStatus(IntEnum):
    APPLIED = 0
    RISKY = 1
    ACCEPTED = 2
    SHUTTLE_BUSY = 3
    TARGET_BUSY = 4


@dataclass
class Applicant:
    """The shuttle applying for a job: its id, position and risky target tiles."""

    id: int
    x: int
    y: int
    collision_risk_tile_ids: set[int] = field(default_factory=set)

    def __str__(self) -> str:
        return f"Shuttle: id={self.id}, position=({self.x}, {self.y})"


@dataclass
class JobApplication:
    """A shuttle's offer to do a job with a given first action."""

    id: int
    applicant: Applicant
    job: Job
    best_plan: list[int]
    status: JobApplicationStatus = JobApplicationStatus.APPLIED
    priority: int = 0
    steps_needed_to_execute: int = 0
    energy_needed_to_execute: int = 0
    additional_details: dict[str, Any] = field(default_factory=dict)

    def set_priority(self, application_priority: int) -> None:
        """Rank by job priority first, then by the application's own priority."""
        self.priority = self.job.priority * JOB_PRIORITY_MULTIPLIER + application_priority

    def __str__(self) -> str:
        return (
            f"JobApplication: id={self.id}, status={int(self.status)}, "
            f"priority={self.priority}, shuttleData={self.applicant}, job={self.job}"
        )


class JobBoard:
    """Holds the jobs of one planning step and the applications made for them."""

    def __init__(
        self,
        map_width: int,
        origin: tuple[int, int] = (0, 0),
        prioritization_strategy: int = 0,
        prioritization_tolerance: int = 3,
    ) -> None:
        self.map_width = map_width
        self.origin = origin
        self.prioritization_strategy = prioritization_strategy
        self.prioritization_tolerance = prioritization_tolerance
        self.jobs: list[Job] = []
        self.applications: list[JobApplication] = []
        self.declined_applications: list[JobApplication] = []
        self._by_shuttle: dict[int, list[JobApplication]] = {}
        self._by_job: dict[int, list[JobApplication]] = {}
        self._by_type: dict[JobType, set[int]] = {}

    def add_job(self, job: Job) -> None:
        self.jobs.append(job)

    def jobs_for_type(self, job_type: JobType) -> set[int]:
        """Ids of jobs of ``job_type`` that received an accepted application."""
        return set(self._by_type.get(job_type, set()))

    def applications_for_job(self, job_id: int) -> list[JobApplication]:
        return list(self._by_job.get(job_id, []))

    def _target_tile_id(self, application: JobApplication) -> int:
        dx, dy = _ACTION_OFFSETS.get(application.best_plan[0], (0, 0))
        x = application.applicant.x + dx
        y = application.applicant.y + dy
        return y * self.map_width + x

    def _is_risk_free(self, application: JobApplication) -> bool:
        risks = application.applicant.collision_risk_tile_ids
        if not risks:
            return True
        return self._target_tile_id(application) not in risks

    def apply_for_job(self, job: Job, applicant: Applicant, best_plan: list[int]) -> JobApplication:
        """File an application; it is declined as risky if its move hits a risky tile."""
        application = JobApplication(len(self.applications), applicant, job, list(best_plan))
        if not self._is_risk_free(application):
            application.status = JobApplicationStatus.RISKY
            self.declined_applications.append(application)
            return application

        self.applications.append(application)
        self._by_shuttle.setdefault(applicant.id, []).append(application)
        self._by_job.setdefault(job.id, []).append(application)
        self._by_type.setdefault(job.job_type, set()).add(job.id)
        return application

    def _origin_distance(self, application: JobApplication) -> int:
        ox, oy = self.origin
        return abs(application.job.target_x - ox) + abs(application.job.target_y - oy)

    @staticmethod
    def _shuttle_distance(application: JobApplication) -> int:
        job, applicant = application.job, application.applicant
        return abs(job.target_x - applicant.x) + abs(job.target_y - applicant.y)

    def _precedes_nearest_to_origin(self, a: JobApplication, b: JobApplication) -> bool:
        a_defends = a.job.job_type == JobType.DEFENDER
        b_defends = b.job.job_type == JobType.DEFENDER
        if a_defends and not b_defends:
            return True
        if b_defends and not a_defends:
            return False
        if JobType.RECHARGE in (a.job.job_type, b.job.job_type):
            return a.priority > b.priority
        a_dist, b_dist = self._origin_distance(a), self._origin_distance(b)
        if abs(a_dist - b_dist) <= self.prioritization_tolerance:
            return a.priority > b.priority
        return a_dist < b_dist

    def _precedes_nearest_to_shuttle(self, a: JobApplication, b: JobApplication) -> bool:
        types = (a.job.job_type, b.job.job_type)
        if JobType.DEFENDER in types:
            return a.priority > b.priority
        a_dist, b_dist = self._shuttle_distance(a), self._shuttle_distance(b)
        if JobType.RECHARGE in types or abs(a_dist - b_dist) <= self.prioritization_tolerance:
            return a.priority > b.priority
        return a_dist < b_dist

    def sort_applications(self) -> None:
        """Order applications so that the one to grant first comes first."""
        precedes: Callable[[JobApplication, JobApplication], bool]
        if self.prioritization_strategy == 1:
            precedes = self._precedes_nearest_to_origin
        else:
            precedes = self._precedes_nearest_to_shuttle

        def compare(a: JobApplication, b: JobApplication) -> int:
            if precedes(a, b):
                return -1
            if precedes(b, a):
                return 1
            return 0

        self.applications.sort(key=functools.cmp_to_key(compare))
        _log(f"Sorted {len(self.applications)} job applications")