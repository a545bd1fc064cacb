import yaml
from typing import Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from leads_backend.interface.permissions import ActionEnum, ResourceEnum

class SeedRole(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=200)
    permissions: Union[Literal["all"], Dict[ResourceEnum, List[ActionEnum]]] = Field(default_factory=dict)

    model_config = ConfigDict(use_enum_values=True)

class SeedConfig(BaseModel):
    permissions: Dict[ResourceEnum, List[ActionEnum]] = Field(default_factory=dict)
    roles: List[SeedRole] = Field(default_factory=list)

    model_config = ConfigDict(use_enum_values=True)

def read_seed_from_file(filename: str) -> SeedConfig:
    with open(filename, "r") as file:
        return SeedConfig(**(yaml.safe_load(file) or {}))
