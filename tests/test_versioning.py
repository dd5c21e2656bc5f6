import pytest

from fastapi_jsonapi_versioned.config import JSONAPISettings
from fastapi_jsonapi_versioned.core.versioning import (
    Versioning,
    namespace_of,
    namespaced_dot_path,
    namespaced_module,
    namespaced_name,
    namespaced_path,
    qualified_name,
    unnamespace,
    unversion,
    version_dot_path,
    version_module,
    version_name,
    version_path,
)


class OrdersController(Versioning):
    jsonapi_namespace = "API.V1"


class PlainController:
    pass


NO_ISOLATION = JSONAPISettings(isolated_namespace=None)


def test_qualified_name_prefers_declared_namespace():
    assert qualified_name(OrdersController) == "API.V1.OrdersController"
    assert qualified_name(OrdersController()) == "API.V1.OrdersController"
    assert qualified_name("API.V2.Anything") == "API.V2.Anything"


def test_qualified_name_falls_back_to_module():
    assert qualified_name(PlainController) == f"{__name__}.PlainController"
    assert namespace_of(PlainController) == __name__


def test_namespaced_module():
    assert namespaced_module(OrdersController) == "API.V1"
    assert namespaced_module(OrdersController, "OrdersSerializer") == "API.V1.OrdersSerializer"
    assert namespaced_module(OrdersController, "") == "API.V1."


def test_namespaced_module_does_not_prefix_twice():
    once = namespaced_module(OrdersController, "OrdersSerializer")
    assert namespaced_module(OrdersController, once) == once
    assert namespaced_module(OrdersController, namespaced_module(OrdersController, "")) == "API.V1."


def test_namespaced_string_forms():
    assert namespaced_path(OrdersController, "orders") == "api/v1/orders"
    assert namespaced_name(OrdersController, "orders") == "api_v1_orders"
    assert namespaced_dot_path(OrdersController, "orders") == "api.v1.orders"
    assert namespaced_path(OrdersController) == "api/v1"
    assert namespaced_path(OrdersController, "") == "api/v1/"


@pytest.mark.parametrize(
    "value",
    ["API.V1.orders", "api/v1/orders", "api_v1_orders", "api.v1.orders"],
)
def test_unnamespace_strips_every_form(value):
    assert unnamespace(OrdersController, value) == "orders"


def test_unnamespace_round_trip():
    assert unnamespace(OrdersController, namespaced_path(OrdersController, "orders")) == "orders"


def test_unnamespace_leaves_foreign_strings_alone():
    assert unnamespace(OrdersController, "admin/v2/orders") == "admin/v2/orders"


def test_top_level_names_have_an_empty_namespace():
    assert namespace_of("Orders") == ""
    assert namespaced_module("Orders") == ""
    assert namespaced_module("Orders", "OrdersSerializer") == "OrdersSerializer"
    assert namespaced_path("Orders", "orders") == "orders"
    assert unnamespace("Orders", "orders") == "orders"
    assert version_module("Orders", settings=JSONAPISettings(isolated_namespace="API")) == ""


def test_version_module_drops_isolated_namespace(settings):
    assert version_module(OrdersController, settings=settings) == "V1"
    assert version_module(OrdersController, "OrdersSerializer", settings=settings) == "V1.OrdersSerializer"


@pytest.mark.parametrize(
    "name",
    ["API.V1.OrdersController", "API.V2.Admin.UsersController", "Shop.API.V3.CartController", "API.Base"],
)
def test_version_module_matches_replacing_first_segment(name, settings):
    expected = namespaced_module(name).replace("API.", "", 1)
    assert version_module(name, settings=settings) == expected


def test_version_module_only_removes_whole_segments(settings):
    assert version_module("MYAPI.V1.OrdersController", settings=settings) == "MYAPI.V1"
    assert version_module("APIV1.OrdersController", settings=settings) == "APIV1"


def test_version_module_removes_one_occurrence(settings):
    assert version_module("API.V1.API.OrdersController", settings=settings) == "V1.API"


def test_version_module_removes_multi_segment_namespace():
    mounted = JSONAPISettings(isolated_namespace="Shop.API")
    assert version_module("Shop.API.V1.OrdersController", settings=mounted) == "V1"
    assert version_module("Shop.API.V1.OrdersController", "Serializer", settings=mounted) == "V1.Serializer"
    assert version_module("Shop.APIS.V1.OrdersController", settings=mounted) == "Shop.APIS.V1"
    assert version_module("Shop.API.OrdersController", settings=mounted) == "Shop.API"
    for name in ("Shop.API.V1.OrdersController", "Web.Shop.API.V2.CartController"):
        expected = namespaced_module(name).replace("Shop.API.", "", 1)
        assert version_module(name, settings=mounted) == expected


def test_version_module_without_isolated_namespace():
    assert version_module(OrdersController, settings=NO_ISOLATION) == namespaced_module(OrdersController)


def test_version_string_forms(settings):
    assert version_path(OrdersController, "orders", settings=settings) == "v1/orders"
    assert version_name(OrdersController, "orders", settings=settings) == "v1_orders"
    assert version_dot_path(OrdersController, "orders", settings=settings) == "v1.orders"


def test_unversion(settings):
    assert unversion(OrdersController, "v1/orders", settings=settings) == "orders"
    assert unversion(OrdersController, "V1.OrdersSerializer", settings=settings) == "OrdersSerializer"
    assert unversion(OrdersController, "api/v1/orders", settings=settings) == "api/orders"


def test_versioning_mixin_methods(settings):
    assert OrdersController.namespaced_path("orders") == "api/v1/orders"
    assert OrdersController().namespaced_name("orders") == "api_v1_orders"
    assert OrdersController.namespaced_dot_path() == "api.v1"
    assert OrdersController.namespaced_module("X") == "API.V1.X"
    assert OrdersController.unnamespace("api_v1_orders") == "orders"
    assert OrdersController.version_module(settings=settings) == "V1"
    assert OrdersController.version_path("orders", settings=settings) == "v1/orders"
    assert OrdersController.version_name("orders", settings=settings) == "v1_orders"
    assert OrdersController.version_dot_path("orders", settings=settings) == "v1.orders"
    assert OrdersController.unversion("v1_orders", settings=settings) == "orders"


def test_version_module_reads_environment(monkeypatch):
    monkeypatch.setenv("JSONAPI_ISOLATED_NAMESPACE", "API")
    assert version_path(OrdersController, "orders") == "v1/orders"
