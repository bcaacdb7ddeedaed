# journal_api/services/audit_service.py

from journal_api.core.audit.audit_entities import AuditEntity
from journal_api.infrastructure.database.models.audit_log_model import AuditLogModel
from journal_api.repositories.audit_log_repository import AuditLogRepository


class AuditService:
    def __init__(self, repo: AuditLogRepository) -> None:
        self._repo = repo

    def log(
        self,
        *,
        entity_name: str,
        action_name: str,
        user_id: int | None,
        entity_id: int | None = None,
        details: str | None = None,
    ) -> AuditLogModel:
        return self._repo.add(
            AuditLogModel(
                entity_name=entity_name,
                entity_id=entity_id,
                action_name=action_name,
                details=details,
                user_id=user_id,
            )
        )

    def log_auth(self, action_name: str, *, user_id: int | None, family_id: str | None = None) -> AuditLogModel:
        # nunca grava segredo nem digest; a família basta para rastrear a sessão
        return self.log(
            entity_name=AuditEntity.AUTH,
            action_name=action_name,
            user_id=user_id,
            entity_id=user_id,
            details=f"family_id={family_id}" if family_id else None,
        )
