from leads_backend.model.auth import User
from leads_backend.model.lead import Lead
from leads_backend.model.madaris import Curriculum, Madrasa, Subject
from leads_backend.model.assignment import (
    CurriculumSubjectAssignment,
    LeadUserAssignment,
    MadrasaCurriculumAssignment,
)
from leads_backend.repositories.assignment import AssignmentRelation

madrasa_curriculum = AssignmentRelation(
    name="Madrasa curriculum assignment",
    model=MadrasaCurriculumAssignment,
    side_a=Madrasa,
    column_a="madrasa_id",
    label_a="Madrasa",
    display_a="name",
    side_b=Curriculum,
    column_b="curriculum_id",
    label_b="Curriculum",
    display_b="title",
    duplicate_message="This curriculum is already assigned to the madrasa",
)

curriculum_subject = AssignmentRelation(
    name="Curriculum subject assignment",
    model=CurriculumSubjectAssignment,
    side_a=Curriculum,
    column_a="curriculum_id",
    label_a="Curriculum",
    display_a="title",
    side_b=Subject,
    column_b="subject_id",
    label_b="Subject",
    display_b="subject",
    duplicate_message="This subject is already assigned to the curriculum",
)

lead_user = AssignmentRelation(
    name="Lead assignee",
    model=LeadUserAssignment,
    side_a=Lead,
    column_a="lead_id",
    label_a="Lead",
    display_a="title",
    side_b=User,
    column_b="user_id",
    label_b="User",
    display_b="name",
    duplicate_message="This user is already assigned to the lead",
)
