import typing

import pytest
from sqlalchemy import inspect

from journal_api.infrastructure.database.models.audit_log_model import AuditLogModel
from journal_api.infrastructure.database.models.message_model import MessageModel
from journal_api.infrastructure.database.models.token_pair_model import TokenPairModel
from journal_api.infrastructure.database.models.user_model import UserModel


def test_user_table_has_no_unused_columns():
    assert "birth_date" not in UserModel.__table__.c


@pytest.mark.parametrize("model", [TokenPairModel, UserModel, MessageModel, AuditLogModel])
def test_nullable_columns_are_optional_in_annotations(model):
    hints = model.__annotations__
    for column in inspect(model).columns:
        if column.primary_key:
            continue
        (inner,) = typing.get_args(hints[column.key])
        optional = type(None) in typing.get_args(inner)
        assert optional == column.nullable, column.key
