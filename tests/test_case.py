from app.utils.case import camel_to_snake, snake_to_camel, to_camel_case, to_snake_case


def test_single_keys():
    assert snake_to_camel("created_at") == "createdAt"
    assert snake_to_camel("token_expire_at") == "tokenExpireAt"
    assert snake_to_camel("description") == "description"
    assert camel_to_snake("completedAt") == "completed_at"
    assert camel_to_snake("userId") == "user_id"


def test_nested_structures_are_renamed():
    row = {
        "task_id": 1,
        "created_at": "2024-01-01T00:00:00",
        "owner": {"user_id": 3, "token_expire_at": None},
        "history": [{"changed_at": "x"}],
    }
    assert to_camel_case(row) == {
        "taskId": 1,
        "createdAt": "2024-01-01T00:00:00",
        "owner": {"userId": 3, "tokenExpireAt": None},
        "history": [{"changedAt": "x"}],
    }


def test_round_trip_is_lossless():
    row = {"task_id": 4, "completed_at": None, "state": "COMPLETE", "owner_id": 2}
    assert to_snake_case(to_camel_case(row)) == row


def test_values_are_untouched():
    assert to_camel_case({"some_key": "some_value"}) == {"someKey": "some_value"}
    assert to_camel_case("plain_string") == "plain_string"


def test_every_exposed_column_round_trips():
    from app.models.tasks import Task
    from app.models.user import User

    for model in (Task, User):
        for column in model.__table__.columns.keys():
            assert camel_to_snake(snake_to_camel(column)) == column
