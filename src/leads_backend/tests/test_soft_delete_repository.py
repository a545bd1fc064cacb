import pytest
from datetime import datetime, timedelta
from unittest.mock import patch
from sqlalchemy.exc import OperationalError

from leads_backend.errors import DuplicateEntity, NotFound
from leads_backend.model import Lead, Role
from leads_backend.repositories.base import RepositoryError, SoftDeleteRepository


@pytest.fixture
def leads(db):
    return SoftDeleteRepository(db, Lead, "Lead")


def _lead(title="Enquiry", **kwargs):
    return Lead(title=title, description="Asked about enrolment", **kwargs)


class TestSoftDeleteRepository:

    def test_create_stamps_actor(self, leads, admin_user):
        lead = leads.create(_lead(), admin_user.id)

        assert lead.id is not None
        assert lead.is_active
        assert lead.created_by == admin_user.id
        assert lead.updated_by == admin_user.id
        assert lead.status == "new"

    def test_deactivate_hides_from_active_reads(self, leads):
        lead = leads.create(_lead())

        leads.deactivate(lead.id)

        with pytest.raises(NotFound):
            leads.get_active(lead.id)
        assert leads.get_by_id(lead.id).is_active is False
        assert leads.list_active()[1] == 0

    def test_deactivate_inactive_is_not_found(self, leads):
        lead = leads.create(_lead())
        leads.deactivate(lead.id)

        with pytest.raises(NotFound):
            leads.deactivate(lead.id)

    def test_update_inactive_is_not_found(self, leads):
        lead = leads.create(_lead())
        leads.deactivate(lead.id)

        with pytest.raises(NotFound):
            leads.update(lead.id, {"title": "Changed"})

    def test_update_ignores_unknown_keys(self, leads, admin_user):
        lead = leads.create(_lead())

        updated = leads.update(lead.id, {"title": "Follow up", "colour": "red"}, admin_user.id)

        assert updated.title == "Follow up"
        assert updated.updated_by == admin_user.id

    def test_reactivate(self, leads, admin_user):
        lead = leads.create(_lead())
        leads.deactivate(lead.id)

        revived = leads.reactivate(lead.id, admin_user.id)

        assert revived.is_active
        assert revived.updated_by == admin_user.id
        assert leads.get_active(lead.id).id == lead.id

    def test_reactivate_active_is_unchanged(self, leads, admin_user):
        lead = leads.create(_lead())

        assert leads.reactivate(lead.id, admin_user.id).updated_by is None

    def test_reactivate_unknown(self, leads):
        with pytest.raises(NotFound):
            leads.reactivate("missing")

    def test_list_active_filters_and_orders(self, db, leads):
        created = [leads.create(_lead(f"Lead {i}", priority="high" if i % 2 else "low")) for i in range(4)]
        base = datetime(2025, 3, 1)
        for offset, lead in enumerate(created):
            lead.created_at = base + timedelta(hours=offset)
        db.commit()

        items, total = leads.list_active(priority="high")

        assert total == 2
        assert [lead.title for lead in items] == ["Lead 3", "Lead 1"]

        items, total = leads.list_active(skip=0, limit=1, descending=False, priority=None)

        assert total == 4
        assert [lead.title for lead in items] == ["Lead 0"]

    def test_duplicate_unique_column(self, db, roles):
        repository = SoftDeleteRepository(db, Role, "Role")

        with pytest.raises(DuplicateEntity) as error:
            repository.create(Role(name="Viewer"))

        assert error.value.message == "Role already exists"
        assert db.query(Role).filter(Role.name == "Viewer").count() == 1

    def test_storage_failure_is_rolled_back(self, db, leads):
        with patch.object(db, "commit", side_effect=OperationalError("COMMIT", {}, Exception("connection lost"))):
            with pytest.raises(RepositoryError):
                leads.create(_lead())

        assert db.query(Lead).count() == 0

    def test_find_one_and_count(self, leads):
        lead = leads.create(_lead("Unique title"))
        leads.create(_lead("Other"))
        leads.deactivate(lead.id)

        assert leads.find_one_by(title="Unique title").id == lead.id
        assert leads.count() == 2
        assert leads.count(is_active=True) == 1
