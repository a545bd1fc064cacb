from leads_backend.api.api_builder import CrudRouter
from leads_backend.interface.permissions import PermissionInterface

permission_router = CrudRouter(PermissionInterface)
