from leads_backend.api.api_builder import CrudRouter
from leads_backend.interface.madaris import CurriculumInterface, MadrasaInterface, SubjectInterface

madrasa_router = CrudRouter(MadrasaInterface)
curriculum_router = CrudRouter(CurriculumInterface)
subject_router = CrudRouter(SubjectInterface)
