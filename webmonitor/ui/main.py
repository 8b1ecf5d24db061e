import logging
import os
from pathlib import Path
from typing import Any

import flet as ft

from webmonitor.adapters.token_storage import FletClientStorage
from webmonitor.app_shell.config import validate_ops_rules
from webmonitor.app_shell.dashboard import ProjectListContent
from webmonitor.app_shell.project_detail import ProjectDetailContent
from webmonitor.app_shell.router import Router
from webmonitor.rules.loader import load_rules
from webmonitor.ui.context import ServiceContext
from webmonitor.ui.layout import MainLayout
from webmonitor.ui.theme import AppTheme
from webmonitor.ui.views.login import LoginView
from webmonitor.ui.views.signup import SignupView

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

RULES_PATH = os.environ.get("WEBMONITOR_RULES_PATH", "rules.yaml")


def main(page: ft.Page) -> None:
    # 1. Load Rules
    rules_path = Path(RULES_PATH)
    if not rules_path.exists():
        error_msg = f"Error: {RULES_PATH} not found. Please create it."
        logger.error(error_msg)
        page.add(ft.Text(error_msg, color="red", size=20))
        return

    rules = load_rules(rules_path)
    logger.info(f"Rules loaded; backend at {rules.api.base_url}")
    validate_ops_rules(rules)

    page.title = rules.project.name
    page.theme = AppTheme.light_theme()
    page.dark_theme = AppTheme.dark_theme()
    page.theme_mode = ft.ThemeMode.LIGHT

    # 2. Context
    storage = FletClientStorage(page.client_storage)
    ctx = ServiceContext.create(rules, storage, navigator=page)
    router = Router(page, ctx.state)

    # --- Layout Wrapper ---
    def make_view(route: str, content: ft.Control) -> ft.View:
        def toggle_theme() -> None:
            if page.theme_mode == ft.ThemeMode.LIGHT:
                page.theme_mode = ft.ThemeMode.DARK
            else:
                page.theme_mode = ft.ThemeMode.LIGHT
            page.update()

        layout = MainLayout(
            page=page,
            app_state=ctx.state,
            content=content,
            on_logout=ctx.session.logout,
            on_nav=page.go,
            toggle_theme=toggle_theme,
            title=rules.project.name,
            current_route=route,
        )
        view = ft.View(route, [layout], padding=0)
        # The router disposes view models through View.data on navigation
        view.data = getattr(content, "data", None)
        return view

    # --- Builders ---

    def dashboard_builder(_: ft.Page, **kwargs: Any) -> ft.View:
        return make_view("/", ProjectListContent(page, ctx))

    def login_builder(_: ft.Page, **kwargs: Any) -> ft.View:
        query = kwargs.get("query") or {}
        registered = query.get("registered") == "true"
        return make_view("/login", LoginView(page, ctx, registered=registered))

    def signup_builder(_: ft.Page, **kwargs: Any) -> ft.View:
        return make_view("/signup", SignupView(page, ctx))

    def project_builder(_: ft.Page, **kwargs: Any) -> ft.View:
        project_id = kwargs["project_id"]
        content = ProjectDetailContent(page, ctx, project_id=project_id)
        return make_view(f"/project/{project_id}", content)

    # --- Register Routes ---
    router.register("/", dashboard_builder, protected=True)
    router.register("/login", login_builder, protected=False)
    router.register("/signup", signup_builder, protected=False)
    router.register_dynamic(r"^/project/(?P<project_id>[^/]+)$", project_builder, protected=True)

    # Session changes (initial check finished, login, logout) re-evaluate the route
    ctx.state.subscribe(router.refresh)

    page.on_route_change = router.handle_route_change
    page.on_view_pop = router.view_pop
    page.on_close = lambda _: ctx.close()

    page.go(page.route or "/")

    # 3. Resolve the stored credential off the UI thread
    page.run_thread(ctx.session.initialize)


if __name__ == "__main__":
    ft.app(target=main)
