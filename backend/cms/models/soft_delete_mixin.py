# cms/models/soft_delete_mixin.py
from cms.extensions import db
from cms.utils.dates import now_ts

class SoftDeleteMixin:
    deleted_at = db.Column(db.Integer, nullable=True, index=True)
    deleted_by = db.Column(db.Integer, nullable=True)

    def soft_delete(self, actor_id=None):
        self.deleted_at = now_ts()
        self.deleted_by = actor_id

    def restore(self):
        self.deleted_at = None
        self.deleted_by = None

    @property
    def is_deleted(self):
        return self.deleted_at is not None
