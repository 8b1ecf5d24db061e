import flet as ft

from webmonitor.ui.context import ServiceContext
from webmonitor.ui.theme import AppTheme
from webmonitor.ui.viewmodels.auth_forms import LoginFormModel


class LoginView(ft.Column):  # type: ignore
    def __init__(self, page: ft.Page, ctx: ServiceContext, registered: bool = False) -> None:
        super().__init__()
        self.page = page
        self.ctx = ctx
        self.model = LoginFormModel(ctx.session, page, registered=registered)

        self.alignment = ft.MainAxisAlignment.CENTER
        self.horizontal_alignment = ft.CrossAxisAlignment.CENTER
        self.expand = True

        if ctx.state.loading:
            self.controls = [ft.ProgressRing()]
            return

        self.identifier = ft.TextField(
            label="Email or Username", hint_text="Enter your email or username", width=360
        )
        self.password = ft.TextField(
            label="Password", width=360, password=True, can_reveal_password=True,
            on_submit=self.login_click,
        )
        self.error_text = ft.Text(color="error", visible=False)
        self.submit_button = ft.FilledButton("Login", width=360, on_click=self.login_click)

        banner = ft.Container(
            content=ft.Row([
                ft.Icon(ft.Icons.CHECK_CIRCLE_OUTLINE, color=AppTheme.success),
                ft.Text("Account created successfully! You can now log in.", color=AppTheme.success),
            ]),
            visible=registered,
            padding=10,
            border=ft.border.all(1, AppTheme.success),
            border_radius=6,
            width=360,
        )

        self.controls = [
            ft.Text("Login", size=28, weight=ft.FontWeight.BOLD),
            ft.Text("Enter your credentials to access your account", color="onSurfaceVariant"),
            self.identifier,
            self.password,
            banner,
            self.error_text,
            self.submit_button,
            ft.Row(
                [
                    ft.Text("Don't have an account?", color="onSurfaceVariant"),
                    ft.TextButton("Sign up", on_click=lambda _: self.page.go("/signup")),
                ],
                alignment=ft.MainAxisAlignment.CENTER,
            ),
        ]

    def login_click(self, e: ft.ControlEvent) -> None:
        self.model.identifier = self.identifier.value or ""
        self.model.password = self.password.value or ""

        self.submit_button.disabled = True
        self.submit_button.text = "Logging in..."
        self.update()

        ok = self.model.submit()

        if not ok:
            self.submit_button.disabled = False
            self.submit_button.text = "Login"
            self.error_text.value = self.model.error
            self.error_text.visible = True
            self.update()
