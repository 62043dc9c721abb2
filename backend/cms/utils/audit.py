from cms.extensions import db
from cms.models.audit_log import AuditLog
from typing import Optional

def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[int],
    actor_id: Optional[int] = None,
    payload: dict | None = None
):
    log = AuditLog()

    log.actor_id = actor_id or 0
    log.action = action
    log.entity_type = entity_type
    log.entity_id = str(entity_id) if entity_id is not None else "*"
    log.payload = payload or {}

    db.session.add(log)
    return log
