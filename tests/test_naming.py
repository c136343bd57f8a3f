"""Tests for namespace and key derivation."""

from swagger_typings.naming import (
    action_key,
    actions_name,
    definitions_name,
    derive_namespace,
    pascal_case,
    strip_ref,
)


def test_pascal_case_segments():
    """Each hyphen-delimited segment gets an uppercase first letter."""
    assert pascal_case("user-center") == "UserCenter"
    assert pascal_case("orders") == "Orders"
    assert pascal_case("v2-api-docs") == "V2ApiDocs"
    # Only the first letter of a segment is touched
    assert pascal_case("userCenter") == "UserCenter"


def test_derive_namespace():
    """Source and resource name are pascal-cased independently and joined."""
    assert derive_namespace("user-center", "users") == "UserCenterUsers"
    assert derive_namespace("billing", "invoice-items") == "BillingInvoiceItems"


def test_distinct_pairs_can_share_a_namespace():
    """The scheme itself does not guarantee uniqueness."""
    assert derive_namespace("a-b", "c") == derive_namespace("a", "b-c") == "ABC"


def test_interface_names():
    assert definitions_name("UserCenterUsers") == "UserCenterUsersDefinitions"
    assert actions_name("UserCenterUsers") == "UserCenterUsersActions"


def test_action_key():
    """Verbs are uppercased and path placeholders become colon parameters."""
    assert action_key("get", "/users/{id}") == "GET /users/:id"
    assert action_key("delete", "/users/{userId}/roles/{roleId}") == "DELETE /users/:userId/roles/:roleId"
    assert action_key("post", "/users") == "POST /users"


def test_strip_ref():
    assert strip_ref("#/definitions/User") == "User"
    assert strip_ref("#/definitions/Page«User»") == "Page«User»"
    assert strip_ref("User") == "User"
