# journal_api/repositories/audit_log_repository.py

from sqlalchemy import select
from sqlalchemy.orm import Session

from journal_api.core.base_repository import BaseRepository
from journal_api.infrastructure.database.models.audit_log_model import AuditLogModel


class AuditLogRepository(BaseRepository[AuditLogModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def list_logs(
        self,
        *,
        limit: int = 50,
        offset: int = 0,
        entity_name: str | None = None,
        action_name: str | None = None,
        user_id: int | None = None,
    ) -> list[AuditLogModel]:
        stmt = select(AuditLogModel)
        if entity_name:
            stmt = stmt.where(AuditLogModel.entity_name == entity_name)
        if action_name:
            stmt = stmt.where(AuditLogModel.action_name == action_name)
        if user_id is not None:
            stmt = stmt.where(AuditLogModel.user_id == user_id)

        stmt = stmt.order_by(AuditLogModel.id.desc()).limit(limit).offset(offset)
        return list(self._session.execute(stmt).scalars().all())
