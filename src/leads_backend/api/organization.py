from leads_backend.api.api_builder import CrudRouter
from leads_backend.interface.organization import DepartmentInterface, ProgramInterface, SectionInterface

department_router = CrudRouter(DepartmentInterface)
section_router = CrudRouter(SectionInterface)
program_router = CrudRouter(ProgramInterface)
