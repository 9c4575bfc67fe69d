"""Team ORM model. Named organizational unit referenced by tasks."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CreatedAtMixin, UuidMixin


class Team(UuidMixin, CreatedAtMixin, Base):
    """Team (e.g. 'IT Team'). Table: teams. Names are unique."""

    __tablename__ = "teams"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
