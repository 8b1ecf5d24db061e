import logging
import re
from collections.abc import Callable
from typing import Any, NamedTuple
from urllib.parse import parse_qs, urlsplit

import flet as ft

from webmonitor.services.session import LOGIN_ROUTE
from webmonitor.ui.guard import Access, check_access
from webmonitor.ui.state import AppState

logger = logging.getLogger(__name__)


class RouteConfig(NamedTuple):
    # builder accepts page and **kwargs (regex groups plus "query")
    builder: Callable[..., ft.View]
    protected: bool


def loading_view(route: str) -> ft.View:
    return ft.View(
        route,
        [
            ft.Container(
                content=ft.ProgressRing(),
                alignment=ft.alignment.center,
                expand=True,
            )
        ],
    )


class Router:
    def __init__(self, page: ft.Page, state: AppState):
        self.page = page
        self.state = state
        self.routes: dict[str, RouteConfig] = {}
        self.dynamic_routes: dict[str, RouteConfig] = {}

    def register(
        self,
        route: str,
        builder: Callable[..., ft.View],
        protected: bool = True
    ) -> None:
        self.routes[route] = RouteConfig(builder, protected)

    def register_dynamic(
        self,
        pattern: str,
        builder: Callable[..., ft.View],
        protected: bool = True
    ) -> None:
        """Register a regex pattern route.
        Example: '^/project/(?P<project_id>[^/]+)$'
        The builder will receive the regex group dict as kwargs.
        """
        self.dynamic_routes[pattern] = RouteConfig(builder, protected)

    def resolve(self, path: str) -> tuple[RouteConfig | None, dict[str, Any]]:
        config = self.routes.get(path)
        if config:
            return config, {}
        for pattern, dyn_config in self.dynamic_routes.items():
            match = re.match(pattern, path)
            if match:
                return dyn_config, match.groupdict()
        return None, {}

    def handle_route_change(self, e: ft.RouteChangeEvent) -> None:
        self.show(e.route or "/")

    def refresh(self) -> None:
        """Re-evaluate the current route, e.g. after the session changed."""
        self.show(self.page.route or "/")

    def _dispose_views(self) -> None:
        for view in self.page.views:
            model = getattr(view, "data", None)
            if model is not None and hasattr(model, "dispose"):
                model.dispose()
        self.page.views.clear()

    def show(self, route: str) -> None:
        parts = urlsplit(route)
        path = parts.path or "/"
        query = {k: v[-1] for k, v in parse_qs(parts.query).items()}
        logger.info(f"Navigate to: {route}")

        config, kwargs = self.resolve(path)

        if not config:
            logger.warning(f"No route found for: {route}")
            self._dispose_views()
            self.page.views.append(
                ft.View(
                    "/404",
                    [ft.AppBar(title=ft.Text("404")), ft.Text(f"Page not found: {route}")]
                )
            )
            self.page.update()
            return

        # Auth Guard - never decided while the stored credential is being checked
        if config.protected:
            access = check_access(self.state)
            if access == Access.PENDING:
                self._dispose_views()
                self.page.views.append(loading_view(route))
                self.page.update()
                return
            if access == Access.DENIED:
                logger.info(f"Access denied to {route}. Redirecting to {LOGIN_ROUTE}.")
                self.page.go(LOGIN_ROUTE)
                return

        self._dispose_views()
        try:
            view = config.builder(self.page, query=query, **kwargs)
        except Exception as err:
            logger.exception(f"Error building view for {route}")
            view = ft.View("/error", [ft.Text(f"Error: {err}")])
        self.page.views.append(view)
        self.page.update()

    def view_pop(self, view: ft.View) -> None:
        if len(self.page.views) < 2:
            return
        self.page.views.pop()
        top_view = self.page.views[-1]
        self.page.go(top_view.route)
