import copy

import pytest

from fieldform.db import close_db, create_tables, init_db
from fieldform.enums import Role
from fieldform.workflow import Principal

POLE_FIELDS = [
    {"name": "pole_id", "label": "Pole ID", "type": "string", "required": True},
    {
        "name": "voltage",
        "label": "Voltage",
        "type": "number",
        "required": True,
        "min": 0,
        "max": 1000,
        "notifyIf": ">400",
    },
    {
        "name": "condition",
        "label": "Condition",
        "type": "select",
        "options": ["Good", "Fair", "Poor"],
    },
]


@pytest.fixture
def pole_fields():
    return copy.deepcopy(POLE_FIELDS)


@pytest.fixture
def db(tmp_path):
    init_db(str(tmp_path / "fieldform.db"))
    create_tables()
    yield
    close_db()


@pytest.fixture
def admin():
    return Principal(user_id="admin-1", role=Role.ADMIN)


@pytest.fixture
def manager():
    return Principal(user_id="manager-1", role=Role.MANAGER)


@pytest.fixture
def other_manager():
    return Principal(user_id="manager-2", role=Role.MANAGER)


@pytest.fixture
def agent():
    return Principal(user_id="agent-1", role=Role.FIELD_AGENT)


@pytest.fixture
def other_agent():
    return Principal(user_id="agent-2", role=Role.FIELD_AGENT)
