from fastapi import APIRouter, Depends, FastAPI, Response, status
from sqlalchemy.orm import Session
from typing import Annotated, Optional
from leads_backend.api.crud import create_db, deactivate_db, get_id_db, list_db, reactivate_db, update_db
from leads_backend.database import get_db
from leads_backend.interface.base import EntityInterface
from leads_backend.permissions.auth import requires
from leads_backend.permissions.principal import Principal

class CrudRouter:
    """
    Registers create/get/list/update/delete/reactivate routes for one entity.

    Every route is gated on ``dto.resource``: create needs ``create``, get and
    list need ``read``, update and reactivate need ``update``, delete needs
    ``delete``. Delete is a soft delete.
    """

    id_type = "id"

    path: str
    dto: EntityInterface

    def __init__(self, dto, endpoint: Optional[str] = None):
        self.dto = dto
        if endpoint == None:
            self.path = self.dto.endpoint
        else:
            self.path = endpoint

        self.router = APIRouter()

    def create(self):
        def route(permissions: Annotated[Principal, Depends(requires(self.dto.resource, "create"))], entity: self.dto.create, db: Session = Depends(get_db)) -> self.dto.get:
            return create_db(permissions, db, entity, self.dto)
        return route

    def get(self):
        def route(permissions: Annotated[Principal, Depends(requires(self.dto.resource, "read"))], id: str, db: Session = Depends(get_db)) -> self.dto.get:
            return get_id_db(permissions, db, id, self.dto)
        return route

    def list(self):
        def route(permissions: Annotated[Principal, Depends(requires(self.dto.resource, "read"))], response: Response, params: self.dto.query = Depends(), db: Session = Depends(get_db)) -> list[self.dto.list]:
            list_result, total = list_db(permissions, db, params, self.dto)
            response.headers["X-Total-Count"] = str(total)
            return list_result
        return route

    def update(self):
        def route(permissions: Annotated[Principal, Depends(requires(self.dto.resource, "update"))], id: str, entity: self.dto.update, db: Session = Depends(get_db)) -> self.dto.get:
            return update_db(permissions, db, id, entity, self.dto)
        return route

    def delete(self):
        def route(permissions: Annotated[Principal, Depends(requires(self.dto.resource, "delete"))], id: str, db: Session = Depends(get_db)):
            deactivate_db(permissions, db, id, self.dto)
        return route

    def reactivate(self):
        def route(permissions: Annotated[Principal, Depends(requires(self.dto.resource, "update"))], id: str, db: Session = Depends(get_db)) -> self.dto.get:
            return reactivate_db(permissions, db, id, self.dto)
        return route

    def register_routes(self, app: FastAPI):

        self.router = APIRouter()

        scope_name = self.path.replace("/"," ").replace("_"," ").replace("-"," ")

        self.router.add_api_route("", self.create(), methods=["POST"],
                    status_code=status.HTTP_201_CREATED, name=f"{self.create.__name__} {scope_name.capitalize()}")
        self.router.add_api_route(f"/{{{CrudRouter.id_type}}}", self.get(), methods=["GET"],
                    status_code=status.HTTP_200_OK, name=f"{self.get.__name__} {scope_name.capitalize()}")
        self.router.add_api_route("", self.list(), methods=["GET"],
                    status_code=status.HTTP_200_OK, name=f"{self.list.__name__} {scope_name.capitalize()}")
        self.router.add_api_route(f"/{{{CrudRouter.id_type}}}", self.update(), methods=["PATCH"],
                    status_code=status.HTTP_200_OK, name=f"{self.update.__name__} {scope_name.capitalize()}")
        self.router.add_api_route(f"/{{{CrudRouter.id_type}}}", self.delete(), methods=["DELETE"],
                    status_code=status.HTTP_204_NO_CONTENT, name=f"{self.delete.__name__} {scope_name.capitalize()}")
        self.router.add_api_route(f"/{{{CrudRouter.id_type}}}/reactivate", self.reactivate(), methods=["PATCH"],
                    status_code=status.HTTP_200_OK, name=f"{self.reactivate.__name__} {scope_name.capitalize()}")

        app.include_router(
            self.router,
            prefix=f"/{self.path}",
            tags=[self.path.split("/")[0]]
        )

        return self
