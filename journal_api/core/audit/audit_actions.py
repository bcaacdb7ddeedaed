# journal_api/core/audit/audit_actions.py

class AuditAction:
    SIGNUP = "SIGNUP"
    LOGIN_SUCCESS = "LOGIN_SUCCESS"
    LOGIN_FAILED = "LOGIN_FAILED"
    REFRESH_SUCCESS = "REFRESH_SUCCESS"
    TOKEN_REUSE = "TOKEN_REUSE"
    LOGOUT = "LOGOUT"
    UPDATED = "UPDATED"
    DELETED = "DELETED"
