from leads_backend.api.api_builder import CrudRouter
from leads_backend.interface.leads import LeadInterface

lead_router = CrudRouter(LeadInterface)
