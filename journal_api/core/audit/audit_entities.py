# journal_api/core/audit/audit_entities.py

class AuditEntity:
    AUTH = "auth"
    USER = "user"
    TOKEN_PAIR = "token_pair"
    CHAT = "chat"
    MESSAGE = "message"
