# stockflow/models/actor.py
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


class ActorKind(str, Enum):
    ADMIN = "admin"
    EMPLOYEE = "employee"


class AdminActor(BaseModel):
    """An administrator acting on a resource"""
    kind: Literal["admin"] = "admin"
    id: str

    @property
    def is_admin(self) -> bool:
        return True


class EmployeeActor(BaseModel):
    """An employee acting on a resource"""
    kind: Literal["employee"] = "employee"
    id: str

    @property
    def is_admin(self) -> bool:
        return False


Actor = Annotated[Union[AdminActor, EmployeeActor], Field(discriminator="kind")]

actor_adapter = TypeAdapter(Actor)


def make_actor(kind: str, actor_id: str) -> Union[AdminActor, EmployeeActor]:
    """Build an actor from its stored ``{"kind", "id"}`` form."""
    return actor_adapter.validate_python({"kind": kind, "id": actor_id})
