"""Tests for the role table and role association."""

import copy
import json

import pytest

from i18n_audit.candidate import SourceKind
from i18n_audit.errors import ConfigurationError
from i18n_audit.roles import RoleAssociator, RoleTable, load_role_table

ALL_ROLES = {"ADMINISTRATOR", "WARD_OFFICER", "MAINTENANCE_TEAM", "CITIZEN", "GUEST"}
END_USERS = {"ADMINISTRATOR", "WARD_OFFICER", "MAINTENANCE_TEAM", "CITIZEN"}

MINIMAL = {
    "components": ["Home", "Nav"],
    "roles": {
        "USER": {"access_level": "user", "routes": {"/": ["Home"]}},
        "ADMIN": {"routes": {"/": ["Home"], "/admin": ["Home"]}},
    },
    "shared_components": ["Nav"],
    "backend_audiences": {"end_user": ["USER", "ADMIN"], "administrative": ["ADMIN"]},
}


def minimal(**changes):
    data = copy.deepcopy(MINIMAL)
    data.update(changes)
    return data


@pytest.fixture(scope="module")
def table():
    return load_role_table()


def test_bundled_table_loads(table):
    assert set(table.roles) == ALL_ROLES
    assert table.access_levels["GUEST"] == "public"
    assert "/admin/users" in table.routes_for_role("ADMINISTRATOR")


def test_roles_for_component(table):
    assert table.roles_for_component("QuickComplaintForm") == {"CITIZEN", "GUEST"}
    assert table.roles_for_component("ComplaintsList") == {
        "ADMINISTRATOR", "WARD_OFFICER", "MAINTENANCE_TEAM", "CITIZEN",
    }
    assert table.roles_for_component("Navigation") == ALL_ROLES
    assert table.roles_for_component("NotARealComponent") == frozenset()


def test_roles_for_route(table):
    assert table.roles_for_route("/reports") == {"ADMINISTRATOR", "WARD_OFFICER", "MAINTENANCE_TEAM"}


def test_components_for_role_includes_shared(table):
    components = table.components_for_role("CITIZEN")
    assert components[:2] == ["CitizenDashboard", "QuickComplaintForm"]
    assert "Navigation" in components
    assert "AdminUsers" not in components


def test_matrix_export(table):
    matrix = table.as_dict()
    assert matrix["total_roles"] == 5
    assert matrix["backend_audiences"]["administrative"] == ["ADMINISTRATOR"]
    assert set(matrix["roles"]) == ALL_ROLES


def test_minimal_table_is_valid():
    table = RoleTable.from_dict(minimal())
    assert table.roles == ("USER", "ADMIN")
    assert table.access_levels["ADMIN"] == ""


@pytest.mark.parametrize(
    "data,message",
    [
        (minimal(roles={}), "no roles"),
        (minimal(roles={"USER": {"routes": {"/": ["Missing"]}}}), "undefined component"),
        (minimal(roles={"USER": {"routes": {}}}), "no routes"),
        (minimal(shared_components=["Ghost"]), "not in the component catalog"),
        (minimal(backend_audiences={"end_user": ["NOBODY"], "administrative": ["ADMIN"]}), "undefined role"),
        (minimal(backend_audiences={"end_user": [], "administrative": ["ADMIN"]}), "is empty"),
        (minimal(unexpected=True), "Malformed"),
        ({"components": [], "roles": {}}, "Malformed"),
    ],
)
def test_invalid_tables_are_rejected(data, message):
    with pytest.raises(ConfigurationError, match=message):
        RoleTable.from_dict(data)


def test_load_errors(tmp_path):
    with pytest.raises(ConfigurationError):
        load_role_table(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="not valid JSON"):
        load_role_table(bad)

    good = tmp_path / "roles.json"
    good.write_text(json.dumps(MINIMAL), encoding="utf-8")
    assert load_role_table(good).roles == ("USER", "ADMIN")


def test_ui_association(table):
    associator = RoleAssociator(table)
    assert associator.associate("AdminDashboard", SourceKind.UI) == {"ADMINISTRATOR"}
    assert associator.associate("SomethingElse", SourceKind.UI) == frozenset()
    assert associator.associate("", SourceKind.UI) == frozenset()


def test_backend_association(table):
    associator = RoleAssociator(table)
    assert associator.associate("auth.js", SourceKind.BACKEND, "response", "controller") == END_USERS
    assert associator.associate("db.js", SourceKind.BACKEND, "logging", "service") == {"ADMINISTRATOR"}
    assert associator.associate("auth.js", SourceKind.BACKEND, "logging", "middleware") == END_USERS
    assert associator.associate("seed.js", SourceKind.BACKEND, "response", "seed") == {"ADMINISTRATOR"}
    assert associator.associate("x.js", SourceKind.BACKEND) == {"ADMINISTRATOR"}
