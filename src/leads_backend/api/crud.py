from typing import Any
from pydantic import BaseModel
from sqlalchemy.orm import Session
from leads_backend.errors import ReferenceInactive, ReferenceNotFound
from leads_backend.permissions.principal import Principal
from leads_backend.interface.base import EntityInterface, ListQuery
from leads_backend.repositories.base import SoftDeleteRepository

def _repository(db: Session, interface: EntityInterface) -> SoftDeleteRepository:
    return SoftDeleteRepository(db, interface.model, interface.entity_label())

def check_references(db: Session, interface: EntityInterface, values: dict):

    for field, (model, label, display) in interface.references.items():
        reference_id = values.get(field)
        if reference_id == None:
            continue

        reference = db.query(model).filter(model.id == reference_id).first()

        if reference == None:
            raise ReferenceNotFound(label, reference_id)
        if not reference.is_active:
            raise ReferenceInactive(label, reference_id, getattr(reference, display))

def create_db(permissions: Principal, db: Session, entity: BaseModel, interface: EntityInterface, post_create: Any = None):

    model_dump = entity.model_dump(exclude_unset=True)

    check_references(db, interface, model_dump)

    db_item = _repository(db, interface).create(interface.model(**model_dump), permissions.user_id)

    if post_create != None:
        post_create(db_item, db)

    return interface.get.model_validate(db_item,from_attributes=True)

def get_id_db(permissions: Principal, db: Session, id: str, interface: EntityInterface):

    item = _repository(db, interface).get_active(id)

    return interface.get.model_validate(item,from_attributes=True)

def list_db(permissions: Principal, db: Session, params: ListQuery, interface: EntityInterface):

    db_type = interface.model
    query = _repository(db, interface).query_active()

    if interface.search != None:
        query = interface.search(db, query, params)

    total = query.order_by(None).count()

    query = query.order_by(db_type.created_at.desc(), db_type.id)

    if params.skip != None:
        query = query.offset(params.skip)
    if params.limit != None:
        query = query.limit(params.limit)

    query_result = [interface.list.model_validate(entity,from_attributes=True) for entity in query.all()]

    return query_result, total

def update_db(permissions: Principal, db: Session, id: str, entity: Any, interface: EntityInterface, post_update: Any = None):

    if isinstance(entity,BaseModel):
        # null leaves a field unchanged
        entity = entity.model_dump(exclude_unset=True, exclude_none=True)

    check_references(db, interface, entity)

    db_item = _repository(db, interface).update(id, entity, permissions.user_id)

    if post_update != None:
        post_update(db_item, db)

    return interface.get.model_validate(db_item,from_attributes=True)

def deactivate_db(permissions: Principal, db: Session, id: str, interface: EntityInterface):

    _repository(db, interface).deactivate(id, permissions.user_id)

def reactivate_db(permissions: Principal, db: Session, id: str, interface: EntityInterface):

    db_item = _repository(db, interface).reactivate(id, permissions.user_id)

    return interface.get.model_validate(db_item,from_attributes=True)
