"""Events consumed and commands emitted by the selector controller.

Key presses, terminal resizes and inventory load results all arrive as
events on the same queue. Commands describe the side effects the caller
must perform: start a load, or leave the interactive loop.
"""

from dataclasses import dataclass, field

from sunrise.models.compute import ComputeInstance
from sunrise.models.project import Project


@dataclass(frozen=True)
class KeyPressed:
    """A key press, using Textual key names (``up``, ``enter``, ``escape`` ...).

    ``character`` is the printable character for the key, if any.
    """

    key: str
    character: str | None = None


@dataclass(frozen=True)
class Resized:
    """The terminal was resized."""

    width: int
    height: int


@dataclass(frozen=True)
class ProjectsLoaded:
    """The project listing completed."""

    projects: list[Project] = field(default_factory=list)


@dataclass(frozen=True)
class InstancesLoaded:
    """The instance listing for the selected project completed."""

    instances: list[ComputeInstance] = field(default_factory=list)


@dataclass(frozen=True)
class LoadFailed:
    """An inventory load failed."""

    error: Exception


Event = KeyPressed | Resized | ProjectsLoaded | InstancesLoaded | LoadFailed


@dataclass(frozen=True)
class LoadProjects:
    """Start listing projects."""


@dataclass(frozen=True)
class LoadInstances:
    """Start listing instances of a project."""

    project_id: str


@dataclass(frozen=True)
class Selection:
    """The VM chosen by the user."""

    project_id: str
    instance: ComputeInstance


@dataclass(frozen=True)
class Exit:
    """Leave the interactive loop, with a selection or without one (quit)."""

    selection: Selection | None = None


Command = LoadProjects | LoadInstances | Exit
