"""Tests for serving admin pages with Litestar."""

from litestar.testing import TestClient

from adminmenus.menu import AdminMenu
from adminmenus.routing import create_admin_router, create_app


class TestCreateAdminRouter:
    def test_one_route_per_page(self, host, make_page):
        menu = AdminMenu("tools.php", host=host)
        menu.add_page(make_page("export", "Export"))
        menu.add_page(make_page("import", "Import"))

        router = create_admin_router(host)

        paths = {route.path for route in router.routes}
        assert paths == {"/admin/export", "/admin/import"}

    def test_no_pages(self, host):
        assert create_admin_router(host).routes == []


class TestServeAdminPages:
    def test_request_loads_then_renders(self, host, make_page):
        calls = []
        AdminMenu("options-general.php", host=host).add_page(
            make_page("my-settings", "My Settings", calls=calls)
        )

        with TestClient(app=create_app(host)) as client:
            response = client.get("/admin/my-settings")

        assert response.status_code == 200
        assert response.text == "<p>my-settings</p>"
        assert response.headers["content-type"].startswith("text/html")
        assert calls == [("load", "my-settings"), ("render", "my-settings")]

    def test_custom_prefix(self, host, make_page):
        AdminMenu("", host=host).add_page(make_page("hidden", "Hidden"))

        with TestClient(app=create_app(host, path="/dashboard")) as client:
            assert client.get("/dashboard/hidden").status_code == 200
            assert client.get("/admin/hidden").status_code == 404
