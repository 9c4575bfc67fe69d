"""Application interfaces (ports): repository protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IProfileRepository,
    ITaskRepository,
    ITeamRepository,
)

__all__ = [
    "IProfileRepository",
    "ITaskRepository",
    "ITeamRepository",
]
