from collections.abc import Callable

import flet as ft

from webmonitor.ui.state import AppState


class MainLayout(ft.Column):  # type: ignore
    """
    Page chrome shared by every route.
    - Header: brand, account menu (or Login button), theme toggle
    - Body: the routed content
    """
    def __init__(
        self,
        page: ft.Page,
        app_state: AppState,
        content: ft.Control,
        on_logout: Callable[[], None],
        on_nav: Callable[[str], None],
        toggle_theme: Callable[[], None],
        title: str = "WebMonitor",
        current_route: str = "/",
    ):
        super().__init__(expand=True, spacing=0)
        self.page = page
        self.app_state = app_state
        self.on_logout = on_logout
        self.on_nav = on_nav
        self.toggle_theme = toggle_theme

        self.app_bar = ft.Container(
            content=ft.Row(
                [
                    ft.TextButton(
                        content=ft.Row(
                            [
                                ft.Icon(ft.Icons.NOTIFICATIONS_OUTLINED, color="primary"),
                                ft.Text(title, size=20, weight=ft.FontWeight.BOLD, color="primary"),
                            ],
                            spacing=8,
                        ),
                        on_click=lambda _: self.on_nav("/"),
                    ),
                    ft.Container(expand=True),
                    self._account_control(current_route),
                    ft.IconButton(
                        ft.Icons.DARK_MODE if page.theme_mode == ft.ThemeMode.LIGHT else ft.Icons.LIGHT_MODE,
                        on_click=lambda _: self.toggle_theme()
                    ),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN
            ),
            padding=ft.padding.symmetric(horizontal=20, vertical=10),
            border=ft.border.only(bottom=ft.BorderSide(1, "outlineVariant")),
        )

        self.content_area = ft.Container(
            content=content,
            expand=True,
            padding=20,
            alignment=ft.alignment.top_left,
        )

        self.controls = [self.app_bar, self.content_area]

    def _account_control(self, current_route: str) -> ft.Control:
        if self.app_state.loading:
            return ft.Container(width=96, height=36, bgcolor="surfaceVariant", border_radius=6)

        user = self.app_state.current_user
        if user is not None:
            return ft.PopupMenuButton(
                content=ft.Row(
                    [
                        ft.Icon(ft.Icons.PERSON_OUTLINE),
                        ft.Text(user.identifier or "Account"),
                        ft.Icon(ft.Icons.EXPAND_MORE),
                    ],
                    spacing=6,
                ),
                items=[
                    ft.PopupMenuItem(
                        text="Logout", icon=ft.Icons.LOGOUT, on_click=lambda _: self.on_logout()
                    )
                ],
            )

        if current_route.startswith("/login") or current_route.startswith("/signup"):
            return ft.Container()

        return ft.FilledButton(
            "Login",
            icon=ft.Icons.LOGIN,
            on_click=lambda _: self.on_nav("/login")
        )
