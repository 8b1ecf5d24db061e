import flet as ft

from webmonitor.ui.context import ServiceContext
from webmonitor.ui.viewmodels.auth_forms import SignupFormModel


class SignupView(ft.Column):  # type: ignore
    def __init__(self, page: ft.Page, ctx: ServiceContext) -> None:
        super().__init__()
        self.page = page
        self.ctx = ctx
        self.model = SignupFormModel(ctx.session, page)

        self.name = ft.TextField(label="Name", width=360)
        self.identifier = ft.TextField(label="Email or Username", width=360)
        self.password = ft.TextField(
            label="Password", width=360, password=True, can_reveal_password=True,
            on_submit=self.signup_click,
        )
        self.error_text = ft.Text(color="error", visible=False)
        self.submit_button = ft.FilledButton("Create account", width=360, on_click=self.signup_click)

        self.alignment = ft.MainAxisAlignment.CENTER
        self.horizontal_alignment = ft.CrossAxisAlignment.CENTER
        self.expand = True
        self.controls = [
            ft.Text("Sign up", size=28, weight=ft.FontWeight.BOLD),
            ft.Text("Create an account to start monitoring", color="onSurfaceVariant"),
            self.name,
            self.identifier,
            self.password,
            self.error_text,
            self.submit_button,
            ft.Row(
                [
                    ft.Text("Already have an account?", color="onSurfaceVariant"),
                    ft.TextButton("Login", on_click=lambda _: self.page.go("/login")),
                ],
                alignment=ft.MainAxisAlignment.CENTER,
            ),
        ]

    def signup_click(self, e: ft.ControlEvent) -> None:
        self.model.name = self.name.value or ""
        self.model.identifier = self.identifier.value or ""
        self.model.password = self.password.value or ""

        self.submit_button.disabled = True
        self.update()

        if not self.model.submit():
            self.submit_button.disabled = False
            self.error_text.value = self.model.error
            self.error_text.visible = True
            self.update()
