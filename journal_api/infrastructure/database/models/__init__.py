# garante que todos os models estejam registrados no metadata
from journal_api.infrastructure.database.models.audit_log_model import AuditLogModel  # noqa: F401
from journal_api.infrastructure.database.models.chat_model import ChatModel  # noqa: F401
from journal_api.infrastructure.database.models.login_attempt_model import LoginAttemptModel  # noqa: F401
from journal_api.infrastructure.database.models.message_model import MessageModel  # noqa: F401
from journal_api.infrastructure.database.models.token_pair_model import TokenPairModel  # noqa: F401
from journal_api.infrastructure.database.models.user_model import UserModel  # noqa: F401
